from __future__ import annotations

import logging
from typing import Any, Dict

from ..secret_store import resolve_secrets
from .context import InitCtx, data

logger = logging.getLogger(__name__)


class EnsureSecretsStep:
    step_id = "20_ensure_secrets"

    def __init__(self, ctx: InitCtx):
        self.ctx = ctx

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        s = self.ctx.settings
        data(state)["secrets"] = resolve_secrets(
            {"secret_key": s.secret_key, "upgrade_key": s.upgrade_key},
            str(self.ctx.paths.secrets_file),
        )
        return state
