from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.command import run_cmd
from ..lib.git import describe_failure
from ..state_store import record_warnings
from .context import InitCtx

logger = logging.getLogger(__name__)

UPDATE_ARGV = ["php", "maintenance/run.php", "update.php", "--quick"]


class DatabaseUpdateStep:
    step_id = "95_database_update"

    def __init__(self, ctx: InitCtx):
        self.ctx = ctx

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        if not self.ctx.settings.auto_update:
            logger.info("Skipping database update (MW_AUTO_UPDATE=false)")
            return state

        if not self.ctx.paths.stub_localsettings.exists():
            logger.info("Skipping database update (no LocalSettings.php in %s)", self.ctx.paths.mediawiki_root)
            return state

        logger.info("Running database updates (update.php)...")
        r = run_cmd(UPDATE_ARGV, check=False, cwd=self.ctx.paths.mediawiki_root, dry_run=self.ctx.dry_run)
        if not r.ok:
            logger.warning("Database update failed or had issues: %s", describe_failure(r))
            record_warnings(state, ["database update failed"])
        return state
