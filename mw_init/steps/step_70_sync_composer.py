from __future__ import annotations

from typing import Any, Dict

from .context import InitCtx, data


class SyncComposerStep:
    step_id = "70_sync_composer"

    def __init__(self, ctx: InitCtx):
        self.ctx = ctx

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        desired = data(state)["desired"]
        ok = self.ctx.reconciler(state).sync_composer(desired.packages, data(state)["previous_composer"])
        state.setdefault("execution", {})["composer_ok"] = ok
        return state
