from __future__ import annotations

from typing import Any, Dict

from .context import InitCtx, data


class RemoveStaleStep:
    step_id = "60_remove_stale"

    def __init__(self, ctx: InitCtx):
        self.ctx = ctx

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        d = data(state)
        desired = d["desired"]
        removed = self.ctx.reconciler(state).remove_stale(
            d["previous"],
            {"extension": desired.extensions, "skin": desired.skins},
        )
        state.setdefault("execution", {})["removed"] = removed
        return state
