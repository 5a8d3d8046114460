from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Paths:
    mediawiki_root: str = "/var/www/html"
    extensions_dir: str = "/extensions"
    skins_dir: str = "/skins"
    config_dir: str = "/config"

    @property
    def extensions_manifest(self) -> Path:
        return Path(self.extensions_dir) / ".managed-manifest"

    @property
    def skins_manifest(self) -> Path:
        return Path(self.skins_dir) / ".managed-manifest"

    @property
    def composer_manifest(self) -> Path:
        return Path(self.extensions_dir) / ".composer-manifest"

    @property
    def secrets_file(self) -> Path:
        return Path(self.extensions_dir) / ".secrets"

    @property
    def run_state(self) -> Path:
        return Path(self.extensions_dir) / ".init-state.json"

    @property
    def composer_local_json(self) -> Path:
        return Path(self.mediawiki_root) / "composer.local.json"

    @property
    def localsettings(self) -> Path:
        return Path(self.config_dir) / "LocalSettings.php"

    @property
    def stub_localsettings(self) -> Path:
        return Path(self.mediawiki_root) / "LocalSettings.php"

    def component_dir(self, component_type: str) -> Path:
        if component_type == "extension":
            return Path(self.extensions_dir)
        if component_type == "skin":
            return Path(self.skins_dir)
        raise ValueError(f"Unknown component type: {component_type}")

    def manifest_for(self, component_type: str) -> Path:
        if component_type == "extension":
            return self.extensions_manifest
        if component_type == "skin":
            return self.skins_manifest
        raise ValueError(f"Unknown component type: {component_type}")


PATHS = Paths()
