from __future__ import annotations

import logging
from typing import Any, Dict

from ..localsettings import render_localsettings, write_localsettings, write_stub_localsettings
from .context import InitCtx, data

logger = logging.getLogger(__name__)


class GenerateLocalSettingsStep:
    step_id = "90_generate_localsettings"

    def __init__(self, ctx: InitCtx):
        self.ctx = ctx

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        d = data(state)
        loads = d.get("loads") or {}

        logger.info("Generating LocalSettings.php from environment variables...")
        text = render_localsettings(
            self.ctx.settings,
            d["secrets"],
            loads.get("skin", []),
            loads.get("extension", []),
        )
        write_localsettings(str(self.ctx.paths.localsettings), text)
        write_stub_localsettings(self.ctx.paths)
        return state
