"""Secret keys generated once and persisted on the extensions volume.

Precedence per secret: explicit override (MW_SECRET_KEY / MW_UPGRADE_KEY) >
value persisted in the secrets file > freshly generated. Freshly generated
values are appended to the file; nothing else ever writes it.
"""

from __future__ import annotations

import logging
import secrets
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)

# persisted key name -> number of random bytes
SECRET_SPECS = {
    "PERSISTED_SECRET_KEY": 32,
    "PERSISTED_UPGRADE_KEY": 16,
}


@dataclass(frozen=True)
class SecretPair:
    secret_key: str
    upgrade_key: str


def read_secrets_file(path: str) -> Dict[str, str]:
    """Parse KEY='value' lines. Missing file => {}."""
    p = Path(path)
    if not p.exists():
        return {}

    values: Dict[str, str] = {}
    for line in p.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, raw = line.split("=", 1)
        try:
            parts = shlex.split(raw)
        except ValueError:
            logger.warning("Ignoring malformed line for %s in %s", key.strip(), p)
            continue
        if len(parts) == 1 and parts[0]:
            values[key.strip()] = parts[0]
    return values


def _append_secret(path: Path, key: str, value: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    # A hand-edited file may lack the final newline.
    sep = ""
    if path.exists() and path.stat().st_size:
        with path.open("rb") as fh:
            fh.seek(-1, 2)
            if fh.read(1) != b"\n":
                sep = "\n"
    with path.open("a", encoding="utf-8") as fh:
        fh.write(f"{sep}{key}='{value}'\n")


def resolve_secrets(explicit_values: Mapping[str, Optional[str]], persisted_file: str) -> SecretPair:
    """Return the effective secret pair, generating what is missing exactly once.

    explicit_values maps "secret_key"/"upgrade_key" to an override or None.
    Single writer assumed: this runs once per container start.
    """
    p = Path(persisted_file)
    persisted = read_secrets_file(persisted_file)

    resolved: Dict[str, str] = {}
    for attr, key in (("secret_key", "PERSISTED_SECRET_KEY"), ("upgrade_key", "PERSISTED_UPGRADE_KEY")):
        explicit = explicit_values.get(attr)
        if explicit:
            resolved[attr] = explicit
        elif persisted.get(key):
            resolved[attr] = persisted[key]
        else:
            value = secrets.token_hex(SECRET_SPECS[key])
            _append_secret(p, key, value)
            logger.info("Generated new %s (persisted in %s)", attr.upper(), p)
            resolved[attr] = value

    return SecretPair(**resolved)
