"""Reconcile installed extensions/skins against the desired state.

Order matters and is driven by the pipeline steps:

1. remove_stale()      previous - desired, deleted from disk first
2. sync_composer()     composer.local.json regenerated, composer update
3. reconcile("extension", ...)
4. reconcile("skin", ...)

Each component is classified into exactly one of:

- composer   provided by a Composer package, no git at all
- update     already a git checkout: fetch + checkout
- existing   non-empty directory that is not a checkout (bundled, vendored)
- install    absent: clone + checkout

A failed clone, or a filesystem error while handling a component, yields no
manifest entry so the next start retries it as a fresh install; the other
components are still processed. Fetch, checkout and post-install failures
are warnings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from .lib.assets import remove_tree
from .lib.composer import ComposerBackend, write_requirements
from .lib.env import Paths
from .lib.git import GitBackend, describe_failure
from .localsettings import php_quote
from .manifests import ManifestEntry, write_composer_manifest
from .overrides import ComponentConfig, OverrideLookup, component_config

logger = logging.getLogger(__name__)

COMPONENT_TYPES = ("extension", "skin")

# Provenance recorded for a non-empty, non-git directory.
EXISTING_SOURCE = {
    "extension": "existing",
    "skin": "bundled",
}


@dataclass(frozen=True)
class PassResult:
    component_type: str
    entries: Tuple[ManifestEntry, ...]
    load_directives: Tuple[str, ...]
    failed: Tuple[str, ...] = ()


@dataclass
class Reconciler:
    paths: Paths
    overrides: OverrideLookup
    default_branch: str
    git: GitBackend = field(default_factory=GitBackend)
    composer: ComposerBackend = field(default_factory=ComposerBackend)
    dry_run: bool = False
    warnings: List[str] = field(default_factory=list)

    def _warn(self, msg: str, *args: object) -> None:
        logger.warning("    " + msg, *args)
        self.warnings.append(msg % args if args else msg)

    def component_path(self, component_type: str, name: str) -> Path:
        # Names come from env; never let one escape the volume.
        if not name or name in {".", ".."} or "/" in name or "\\" in name:
            raise ValueError(f"Invalid {component_type} name: {name!r}")
        return self.paths.component_dir(component_type) / name

    # -- 1. removal -------------------------------------------------------

    def remove_stale(
        self,
        previous: Mapping[str, Mapping[str, str]],
        desired: Mapping[str, Sequence[str]],
    ) -> Dict[str, List[str]]:
        """Delete every previously managed component that is no longer desired.

        previous/desired are keyed by component type. Removal ignores the
        recorded source: composer-provided and existing entries go too.
        """
        logger.info("Checking for removed extensions/skins...")
        removed: Dict[str, List[str]] = {}
        for ctype in COMPONENT_TYPES:
            wanted = set(desired.get(ctype, ()))
            for name in stale_components(previous.get(ctype, {}), wanted):
                try:
                    path = self.component_path(ctype, name)
                except ValueError:
                    logger.error("  Refusing to remove %s %r (invalid name in manifest)", ctype, name)
                    continue
                logger.info("  Removing %s: %s (no longer requested)", ctype, name)
                try:
                    remove_tree(str(path), dry_run=self.dry_run)
                except OSError as e:
                    logger.error("    Failed to remove %s %s: %s", ctype, name, e)
                    self.warnings.append(f"failed to remove {ctype} {name}")
                    continue
                removed.setdefault(ctype, []).append(name)

        if not removed:
            logger.info("  No items to remove")
        return removed

    # -- 2. composer ------------------------------------------------------

    def sync_composer(self, packages: Sequence[Tuple[str, str]], previous: Sequence[str] = ()) -> bool:
        """Regenerate composer.local.json and run composer update.

        With no packages the generated file is removed and the Composer
        manifest cleared. previous is the Composer manifest of the last run,
        used to report packages that are no longer requested. Returns False
        only if composer update failed.
        """
        requirements = self.paths.composer_local_json
        wanted = {name for name, _ in packages}
        for name in previous:
            if name not in wanted:
                logger.info("  Composer package no longer requested: %s", name)
        if not packages:
            if requirements.exists():
                logger.info("Removing Composer configuration (no packages requested)...")
                if not self.dry_run:
                    requirements.unlink()
            if not self.dry_run:
                write_composer_manifest(str(self.paths.composer_manifest), [])
            return True

        logger.info("Processing Composer packages...")
        if self.dry_run:
            logger.info("Would write %s (%d packages)", requirements, len(packages))
        else:
            write_requirements(str(requirements), packages)
            write_composer_manifest(str(self.paths.composer_manifest), [name for name, _ in packages])

        logger.info("  Running composer update...")
        r = self.composer.update(self.paths.mediawiki_root)
        if not r.ok:
            logger.error("  Composer update failed: %s", describe_failure(r))
            self.warnings.append("composer update failed")
            return False
        return True

    # -- 3/4. extension and skin passes -----------------------------------

    def classify(self, component_type: str, name: str, composer_provided: FrozenSet[str]) -> str:
        path = self.component_path(component_type, name)
        if component_type == "extension" and name in composer_provided:
            return "composer"
        if (path / ".git").exists():
            return "update"
        if path.is_dir() and any(path.iterdir()):
            return "existing"
        return "install"

    def load_directive(self, cfg: ComponentConfig) -> str:
        if cfg.component_type == "skin":
            return f"wfLoadSkin( {php_quote(cfg.name)} );"
        return cfg.load or f"wfLoadExtension( {php_quote(cfg.name)} );"

    def reconcile(
        self,
        component_type: str,
        desired: Sequence[str],
        composer_provided: FrozenSet[str] = frozenset(),
    ) -> PassResult:
        """Bring every desired component of one type up to date, in order."""
        if desired:
            logger.info("Processing %ss...", component_type)

        entries: List[ManifestEntry] = []
        loads: List[str] = []
        failed: List[str] = []

        for name in desired:
            try:
                path = self.component_path(component_type, name)
            except ValueError as e:
                logger.error("  %s", e)
                failed.append(name)
                continue

            cfg = component_config(self.overrides, component_type, name, default_branch=self.default_branch)
            try:
                source = self._process(component_type, cfg, path, composer_provided)
            except OSError as e:
                logger.error("    Failed to process %s %s: %s", component_type, name, e)
                source = None

            if source is None:
                failed.append(name)
            else:
                entries.append(ManifestEntry(component_type, name, source))
            loads.append(self.load_directive(cfg))

        return PassResult(
            component_type=component_type,
            entries=tuple(entries),
            load_directives=tuple(loads),
            failed=tuple(failed),
        )

    # -- per-component procedures -----------------------------------------

    def _process(
        self,
        component_type: str,
        cfg: ComponentConfig,
        path: Path,
        composer_provided: FrozenSet[str],
    ) -> Optional[str]:
        """Classify and act on one component; returns its provenance, None if it failed."""
        name = cfg.name
        action = self.classify(component_type, name, composer_provided)

        if action == "composer":
            logger.info("  %s: Provided by Composer (skipping git)", name)
            return "composer"
        if action == "update":
            logger.info("  %s: Updating...", name)
            self.update_component(cfg, path)
            return "git"
        if action == "existing":
            logger.info("  %s: Already exists (bundled or from Composer, skipping git)", name)
            return EXISTING_SOURCE[component_type]

        logger.info("  %s: Installing...", name)
        return "git" if self.install_component(cfg, path) else None

    def update_component(self, cfg: ComponentConfig, path: Path) -> None:
        r = self.git.fetch(str(path))
        if not r.ok:
            self._warn("Failed to fetch updates for %s", cfg.name)
            return

        self._checkout(cfg, path, sync_remote=True)
        self._post_install(cfg, path)

    def install_component(self, cfg: ComponentConfig, path: Path) -> bool:
        r = self.git.clone(cfg.repo, str(path))
        if not r.ok:
            logger.error("    Failed to clone %s from %s: %s", cfg.name, cfg.repo, describe_failure(r))
            return False

        self._checkout(cfg, path, sync_remote=False)
        self._post_install(cfg, path)
        return True

    def _checkout(self, cfg: ComponentConfig, path: Path, *, sync_remote: bool) -> None:
        """commit > tag > branch. For updates the branch is forced to origin's tip."""
        p = str(path)
        if cfg.commit:
            r = self.git.checkout(p, cfg.commit)
        elif cfg.tag:
            r = self.git.checkout(p, f"tags/{cfg.tag}")
        elif cfg.branch:
            r = self.git.checkout(p, cfg.branch)
            if r.ok and sync_remote:
                if not self.git.reset_hard(p, f"origin/{cfg.branch}").ok:
                    # Local-only branches have no origin ref; a pull is the best we can do.
                    self.git.pull(p)
        else:
            return

        if not r.ok:
            self._warn("Failed to check out %s %s for %s", cfg.ref_kind, cfg.commit or cfg.tag or cfg.branch, cfg.name)

    def _post_install(self, cfg: ComponentConfig, path: Path) -> None:
        if not cfg.post_install:
            return
        logger.info("    Running post-install: %s", cfg.post_install)
        r = self.git.run_post_install(str(path), cfg.post_install)
        if not r.ok:
            self._warn("Post-install failed for %s", cfg.name)


def stale_components(previous: Mapping[str, str], desired: AbstractSet[str]) -> List[str]:
    """Names recorded previously but no longer desired, in manifest order."""
    return [name for name in previous if name not in desired]
