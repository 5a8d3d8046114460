from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence, Tuple

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

COMPOSER_FILE_NAME = "composer.local.json"


class ComposerBackend:
    def __init__(self, *, composer: str = "composer", dry_run: bool = False):
        self.composer = composer
        self.dry_run = dry_run

    def update(self, mediawiki_root: str) -> CmdResult:
        """composer update against composer.local.json.

        update (not install) so already-present packages move to the newest
        version allowed by their constraint.
        """
        return run_cmd(
            [self.composer, "update", "--no-dev", "--no-interaction"],
            check=False,
            cwd=mediawiki_root,
            env={"COMPOSER": COMPOSER_FILE_NAME},
            dry_run=self.dry_run,
        )


def render_requirements(packages: Sequence[Tuple[str, str]]) -> str:
    require = {name: constraint for name, constraint in packages}
    return json.dumps({"require": require}, indent=4) + "\n"


def write_requirements(path: str, packages: Sequence[Tuple[str, str]]) -> None:
    """Overwrite the requirement file with exactly the given packages."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(render_requirements(packages), encoding="utf-8")
    logger.info("Wrote %s (%d packages)", p, len(packages))
