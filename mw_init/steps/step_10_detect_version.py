from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.version import detect_version, version_branch
from .context import InitCtx

logger = logging.getLogger(__name__)


class DetectVersionStep:
    step_id = "10_detect_version"

    def __init__(self, ctx: InitCtx):
        self.ctx = ctx

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        version = detect_version(self.ctx.paths.mediawiki_root)
        branch = version_branch(version)
        state.setdefault("mediawiki", {}).update({"version": version, "branch": branch})

        logger.info("MediaWiki version: %s", version or "(unknown)")
        logger.info("Default branch: %s", branch)
        return state
