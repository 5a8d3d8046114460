from __future__ import annotations

import logging
from typing import Any, Dict

from ..manifests import read_composer_manifest, read_manifest
from .context import InitCtx, data

logger = logging.getLogger(__name__)


class ReadPreviousStateStep:
    step_id = "40_read_previous_state"

    def __init__(self, ctx: InitCtx):
        self.ctx = ctx

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        paths = self.ctx.paths
        previous = {
            ctype: read_manifest(str(paths.manifest_for(ctype)), ctype)
            for ctype in ("extension", "skin")
        }
        data(state)["previous"] = previous
        data(state)["previous_composer"] = read_composer_manifest(str(paths.composer_manifest))

        logger.info(
            "Previously managed: %d extensions, %d skins",
            len(previous["extension"]),
            len(previous["skin"]),
        )
        return state
