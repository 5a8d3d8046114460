from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Tuple

from .lib.names import infer_extension_name
from .settings import Settings

logger = logging.getLogger(__name__)

ANY_VERSION = "*"


@dataclass(frozen=True)
class DesiredState:
    extensions: Tuple[str, ...]
    skins: Tuple[str, ...]
    packages: Tuple[Tuple[str, str], ...]
    composer_provided: FrozenSet[str]

    @property
    def package_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.packages)

    def for_type(self, component_type: str) -> Tuple[str, ...]:
        if component_type == "extension":
            return self.extensions
        if component_type == "skin":
            return self.skins
        raise ValueError(f"Unknown component type: {component_type}")


def _entries(text: str) -> List[str]:
    out: List[str] = []
    for line in (text or "").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        out.append(line)
    return out


def parse_list(text: str) -> Tuple[str, ...]:
    """Names from a line-oriented list, trimmed, first occurrence wins."""
    seen: Dict[str, None] = {}
    for name in _entries(text):
        seen.setdefault(name, None)
    return tuple(seen)


def parse_packages(text: str) -> Tuple[Tuple[str, str], ...]:
    """(name, constraint) pairs from `vendor/name[:constraint]` lines.

    A repeated package keeps its first position; the last constraint wins.
    """
    packages: Dict[str, str] = {}
    for entry in _entries(text):
        name, _, constraint = entry.partition(":")
        name = name.strip()
        if not name:
            continue
        packages[name] = constraint.strip() or ANY_VERSION
    return tuple(packages.items())


def build_desired_state(settings: Settings) -> DesiredState:
    packages = parse_packages(settings.composer_packages)

    provided: Dict[str, None] = {}
    for name, _ in packages:
        ext = infer_extension_name(name)
        if ext:
            provided.setdefault(ext, None)
            logger.info("  Composer will provide: %s", ext)

    return DesiredState(
        extensions=parse_list(settings.extensions),
        skins=parse_list(settings.skins),
        packages=packages,
        composer_provided=frozenset(provided),
    )
