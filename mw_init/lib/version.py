from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "REL1_43"

_MW_VERSION_RE = re.compile(r"""define\(\s*'MW_VERSION'\s*,\s*'([^']+)'""")


def detect_version(mediawiki_root: str) -> Optional[str]:
    """Read MW_VERSION from includes/Defines.php, or None if unavailable."""

    p = Path(mediawiki_root) / "includes" / "Defines.php"
    if not p.is_file():
        return None
    m = _MW_VERSION_RE.search(p.read_text(encoding="utf-8", errors="replace"))
    if not m:
        logger.warning("No MW_VERSION define found in %s", p)
        return None
    return m.group(1)


def version_branch(version: Optional[str]) -> str:
    """REL<major>_<minor> for a version string; DEFAULT_BRANCH when unknown."""

    if not version:
        return DEFAULT_BRANCH
    parts = version.split(".")
    if len(parts) < 2 or not parts[0].isdigit():
        return DEFAULT_BRANCH
    minor = re.match(r"\d+", parts[1])
    if not minor:
        return DEFAULT_BRANCH
    return f"REL{parts[0]}_{minor.group(0)}"
