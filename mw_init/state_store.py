from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

# The run state is a summary for operators. Reconciliation never reads it:
# the managed manifests are the only input describing previous state.


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fmt = _detect_format(p)
    if fmt in {"yaml", "yml"}:
        try:
            import yaml  # type: ignore
        except Exception as e:  # pragma: no cover
            raise RuntimeError("YAML run state requested but PyYAML is not available.") from e
        p.write_text(yaml.safe_dump(state, sort_keys=False) + "\n", encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True, default=str) + "\n", encoding="utf-8")


def new_run_state() -> Dict[str, Any]:
    return {
        "mediawiki": {"version": None, "branch": None},
        "execution": {
            "current_step": None,
            "ran_steps": [],
            "warnings": [],
            "failed": {},
            "errors": [],
        },
    }


def record_warnings(state: Dict[str, Any], warnings: list) -> None:
    state.setdefault("execution", {}).setdefault("warnings", []).extend(warnings)


def record_failed(state: Dict[str, Any], component_type: str, names: list) -> None:
    if names:
        state.setdefault("execution", {}).setdefault("failed", {})[component_type] = list(names)
