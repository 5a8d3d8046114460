from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManifestEntry:
    component_type: str
    name: str
    source: str

    def to_line(self) -> str:
        return f"{self.component_type}:{self.name}:{self.source}"


def read_manifest(path: str, component_type: str) -> Dict[str, str]:
    """name -> source for entries of component_type. Missing file => {}."""
    p = Path(path)
    if not p.exists():
        return {}

    entries: Dict[str, str] = {}
    for line in p.read_text(encoding="utf-8").splitlines():
        parts = line.split(":", 2)
        if len(parts) != 3:
            if line.strip():
                logger.debug("Ignoring malformed manifest line %r in %s", line, p)
            continue
        ctype, name, source = parts
        if ctype == component_type and name:
            entries[name] = source
    return entries


def write_manifest(path: str, entries: Iterable[ManifestEntry]) -> None:
    """Truncate and rewrite the manifest with exactly these entries."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    lines = [e.to_line() for e in entries]
    p.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")


def read_composer_manifest(path: str) -> List[str]:
    p = Path(path)
    if not p.exists():
        return []
    return [line.strip() for line in p.read_text(encoding="utf-8").splitlines() if line.strip()]


def write_composer_manifest(path: str, names: Iterable[str]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("".join(f"{n}\n" for n in names), encoding="utf-8")
