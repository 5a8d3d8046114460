from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


def _as_env_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "\n".join(_as_env_value(v) for v in value)
    return str(value)


@dataclass(frozen=True)
class Settings:
    """MW_* configuration, environment-style (every value is a string)."""

    raw: Mapping[str, str] = field(default_factory=dict)

    def get(self, key: str, default: str = "") -> str:
        value = self.raw.get(key)
        if value is None or value == "":
            return default
        return value

    def flag(self, key: str, default: bool) -> bool:
        value = self.raw.get(key)
        if value is None or value == "":
            return default
        return value == "true"

    def optional(self, key: str) -> Optional[str]:
        return self.get(key) or None

    @property
    def extensions(self) -> str:
        return self.get("MW_EXTENSIONS")

    @property
    def skins(self) -> str:
        return self.get("MW_SKINS")

    @property
    def composer_packages(self) -> str:
        return self.get("MW_COMPOSER_PACKAGES")

    @property
    def auto_update(self) -> bool:
        return self.flag("MW_AUTO_UPDATE", True)

    @property
    def default_skin(self) -> Optional[str]:
        return self.optional("MW_SKIN_DEFAULT")

    @property
    def config_append(self) -> Optional[str]:
        return self.optional("MW_CONFIG_APPEND")

    @property
    def secret_key(self) -> Optional[str]:
        return self.optional("MW_SECRET_KEY")

    @property
    def upgrade_key(self) -> Optional[str]:
        return self.optional("MW_UPGRADE_KEY")


def load_settings_file(path: str) -> Dict[str, str]:
    """Load MW_* defaults from a YAML mapping (lists are joined with newlines)."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("settings file must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read a settings file") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{p} must contain a mapping/object")

    return {str(k): _as_env_value(v) for k, v in raw.items()}


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[str] = None,
) -> Settings:
    """Merge an optional YAML settings file under the environment (env wins)."""

    env = os.environ if environ is None else environ
    merged: Dict[str, str] = {}
    if config_path:
        merged.update(load_settings_file(config_path))
    # Empty env values (common with compose `KEY=` lines) do not mask the file.
    merged.update({k: v for k, v in env.items() if k.startswith("MW_") and v != ""})
    return Settings(raw=merged)
