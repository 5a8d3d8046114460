from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from ..lib.composer import ComposerBackend
from ..lib.env import Paths
from ..lib.git import GitBackend
from ..lib.version import DEFAULT_BRANCH
from ..overrides import OverrideLookup
from ..reconciler import Reconciler
from ..settings import Settings


@dataclass
class InitCtx:
    settings: Settings
    paths: Paths
    dry_run: bool = False
    git: GitBackend = field(default_factory=GitBackend)
    composer: ComposerBackend = field(default_factory=ComposerBackend)
    _reconciler: Reconciler | None = field(default=None, init=False, repr=False)

    def reconciler(self, state: Dict[str, Any]) -> Reconciler:
        if self._reconciler is None:
            branch = (state.get("mediawiki") or {}).get("branch") or DEFAULT_BRANCH
            self._reconciler = Reconciler(
                paths=self.paths,
                overrides=OverrideLookup(self.settings.raw),
                default_branch=branch,
                git=self.git,
                composer=self.composer,
                dry_run=self.dry_run,
            )
        return self._reconciler


def data(state: Dict[str, Any]) -> Dict[str, Any]:
    """In-memory values handed between steps (not persisted with the run state)."""
    return state.setdefault("data", {})
