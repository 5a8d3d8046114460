from __future__ import annotations

import argparse
import logging
import os
from typing import Any, Dict, List, Optional

from . import __version__
from .lib.composer import ComposerBackend
from .lib.env import PATHS, Paths
from .lib.git import GitBackend
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_pipeline
from .settings import load_settings
from .state_store import new_run_state, record_warnings, save_state
from .steps import (
    BuildDesiredStateStep,
    DatabaseUpdateStep,
    DetectVersionStep,
    EnsureSecretsStep,
    GenerateLocalSettingsStep,
    InitCtx,
    InitVolumesStep,
    ProcessComponentsStep,
    ReadPreviousStateStep,
    RemoveStaleStep,
    SyncComposerStep,
)

logger = logging.getLogger(__name__)

HOST_ENTRYPOINT = "docker-php-entrypoint"
DEFAULT_COMMAND = ["apache2-foreground"]


def build_steps(ctx: InitCtx):
    return [
        DetectVersionStep(ctx),
        EnsureSecretsStep(ctx),
        InitVolumesStep(ctx),
        ReadPreviousStateStep(ctx),
        BuildDesiredStateStep(ctx),
        RemoveStaleStep(ctx),
        SyncComposerStep(ctx),
        ProcessComponentsStep(ctx, "extension"),
        ProcessComponentsStep(ctx, "skin"),
        GenerateLocalSettingsStep(ctx),
        DatabaseUpdateStep(ctx),
    ]


def run(
    *,
    paths: Paths = PATHS,
    environ: Optional[Dict[str, str]] = None,
    config_path: Optional[str] = None,
    log_path: str = DEFAULT_LOG_PATH,
    state_path: Optional[str] = None,
    stop_after: Optional[str] = None,
    dry_run: bool = False,
    ctx: Optional[InitCtx] = None,
) -> Dict[str, Any]:
    """Run the init sequence, saving a run summary next to the manifests."""

    configure_logging(log_path=log_path)
    logger.info("=== MediaWiki Managed Docker (mw-init %s) ===", __version__)
    logger.info("Configuration: 100% environment variables")

    if ctx is None:
        ctx = InitCtx(
            settings=load_settings(environ, config_path),
            paths=paths,
            dry_run=dry_run,
            git=GitBackend(dry_run=dry_run),
            composer=ComposerBackend(dry_run=dry_run),
        )

    state = new_run_state()
    state_path = state_path or str(ctx.paths.run_state)

    try:
        result = run_pipeline(state=state, steps=build_steps(ctx), stop_after=stop_after)
        state = result.state
        logger.info("=== Initialization complete ===")
        return state
    except Exception as e:
        logger.exception("Initialization failed")
        state.setdefault("execution", {}).setdefault("errors", []).append(
            {
                "step": (state.get("execution") or {}).get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        record_warnings(state, ctx.reconciler(state).warnings)
        summary = {k: v for k, v in state.items() if k != "data"}
        if ctx.dry_run:
            logger.info("Dry run: not saving run state to %s", state_path)
        else:
            try:
                save_state(state_path, summary)
            except OSError as e:
                logger.warning("Could not save run state to %s: %s", state_path, e)


def handoff(command: List[str]) -> None:
    """Replace this process with the host application's entrypoint."""
    argv = [HOST_ENTRYPOINT, *(command or DEFAULT_COMMAND)]
    logger.info("Handing off: %s", " ".join(argv))
    # exec does not run atexit hooks; flush so the last lines reach the log file.
    for h in logging.getLogger().handlers:
        h.flush()
    os.execvp(argv[0], argv)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="mw-init")
    p.add_argument("--config", default=None, help="Optional YAML file with MW_* defaults (env wins)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to init log")
    p.add_argument("--state", default=None, help="Path to run summary (json|yaml)")
    p.add_argument("--mediawiki-root", default=PATHS.mediawiki_root)
    p.add_argument("--extensions-dir", default=PATHS.extensions_dir)
    p.add_argument("--skins-dir", default=PATHS.skins_dir)
    p.add_argument("--config-dir", default=PATHS.config_dir)
    p.add_argument("--stop-after", default=None, help="Stop after step_id (e.g. 60_remove_stale)")
    p.add_argument("--dry-run", action="store_true", help="Log commands instead of running them")
    p.add_argument("--no-exec", action="store_true", help="Do not exec the host entrypoint afterwards")
    p.add_argument("command", nargs=argparse.REMAINDER, help="Command passed to docker-php-entrypoint")

    args = p.parse_args(argv)

    paths = Paths(
        mediawiki_root=args.mediawiki_root,
        extensions_dir=args.extensions_dir,
        skins_dir=args.skins_dir,
        config_dir=args.config_dir,
    )

    run(
        paths=paths,
        config_path=args.config,
        log_path=args.log,
        state_path=args.state,
        stop_after=args.stop_after,
        dry_run=bool(args.dry_run),
    )

    if args.no_exec or args.dry_run:
        return 0

    command = list(args.command)
    if command[:1] == ["--"]:
        command = command[1:]
    handoff(command)
    return 0  # pragma: no cover


if __name__ == "__main__":
    raise SystemExit(main())
