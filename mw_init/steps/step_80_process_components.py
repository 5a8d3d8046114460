from __future__ import annotations

import logging
from typing import Any, Dict

from ..manifests import write_manifest
from ..state_store import record_failed
from .context import InitCtx, data

logger = logging.getLogger(__name__)


class ProcessComponentsStep:
    """Extension or skin pass; the manifest is rewritten from this pass alone."""

    def __init__(self, ctx: InitCtx, component_type: str):
        self.ctx = ctx
        self.component_type = component_type
        self.step_id = "80_process_extensions" if component_type == "extension" else "85_process_skins"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        d = data(state)
        desired = d["desired"]

        result = self.ctx.reconciler(state).reconcile(
            self.component_type,
            desired.for_type(self.component_type),
            desired.composer_provided,
        )
        if self.ctx.dry_run:
            logger.info("Dry run: %s manifest left unchanged", self.component_type)
        else:
            write_manifest(str(self.ctx.paths.manifest_for(self.component_type)), result.entries)

        d.setdefault("loads", {})[self.component_type] = list(result.load_directives)
        record_failed(state, self.component_type, list(result.failed))
        if result.failed:
            logger.error("Failed %ss (retried next start): %s", self.component_type, ", ".join(result.failed))
        return state
