from __future__ import annotations

from typing import Any, Dict

from ..volumes import init_volumes
from .context import InitCtx


class InitVolumesStep:
    step_id = "30_init_volumes"

    def __init__(self, ctx: InitCtx):
        self.ctx = ctx

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        version = (state.get("mediawiki") or {}).get("version")
        init_volumes(self.ctx.paths, version, dry_run=self.ctx.dry_run)
        return state
