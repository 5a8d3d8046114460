from __future__ import annotations

import logging
from typing import Any, Dict

from ..desired_state import build_desired_state
from .context import InitCtx, data

logger = logging.getLogger(__name__)


class BuildDesiredStateStep:
    step_id = "50_build_desired_state"

    def __init__(self, ctx: InitCtx):
        self.ctx = ctx

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        desired = build_desired_state(self.ctx.settings)
        data(state)["desired"] = desired
        state.setdefault("execution", {})["desired"] = {
            "extensions": list(desired.extensions),
            "skins": list(desired.skins),
            "composer_packages": list(desired.package_names),
        }
        return state
