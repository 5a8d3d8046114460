"""LocalSettings.php generation.

The generated file is pure output: it is rewritten in full on every start
from the current settings, the resolved secrets and the load directives
produced by the extension/skin passes. Most values stay getenv() lookups so
PHP reads them at request time; only secrets are baked in.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from .lib.env import Paths
from .secret_store import SecretPair
from .settings import Settings

logger = logging.getLogger(__name__)

# (php variable, env key, default or None for "no default")
STRING_SETTINGS = (
    ("Database", (
        ("wgDBserver", "MW_DB_SERVER", None),
        ("wgDBname", "MW_DB_NAME", None),
        ("wgDBuser", "MW_DB_USER", None),
        ("wgDBpassword", "MW_DB_PASSWORD", None),
        ("wgDBtype", "MW_DB_TYPE", "mysql"),
        ("wgDBprefix", "MW_DB_PREFIX", ""),
    )),
    ("Site", (
        ("wgSitename", "MW_SITE_NAME", None),
        ("wgLanguageCode", "MW_SITE_LANG", "en"),
        ("wgServer", "MW_SITE_SERVER", None),
    )),
    ("Email", (
        ("wgEmergencyContact", "MW_EMERGENCY_CONTACT", ""),
        ("wgPasswordSender", "MW_PASSWORD_SENDER", ""),
    )),
)

BOOLEAN_SETTINGS = (
    ("Email", (
        ("wgEnableEmail", "MW_ENABLE_EMAIL"),
        ("wgEnableUserEmail", "MW_ENABLE_USER_EMAIL"),
    )),
    ("Uploads", (
        ("wgEnableUploads", "MW_ENABLE_UPLOADS"),
    )),
)


def php_quote(value: str) -> str:
    """Single-quoted PHP string literal."""
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _getenv(key: str, default: Optional[str]) -> str:
    if default is None:
        return f"getenv({php_quote(key)})"
    return f"getenv({php_quote(key)}) ?: {php_quote(default)}"


def _flag(key: str) -> str:
    return f"getenv({php_quote(key)}) === 'true'"


def render_localsettings(
    settings: Settings,
    secrets: SecretPair,
    skin_loads: Sequence[str],
    extension_loads: Sequence[str],
) -> str:
    lines = [
        "<?php",
        "# Generated from environment variables on every container start.",
        "# Do not edit: changes are overwritten. Use MW_CONFIG_APPEND instead.",
    ]

    sections: dict = {}
    for title, items in STRING_SETTINGS:
        sections.setdefault(title, []).extend(f"${var} = {_getenv(key, default)};" for var, key, default in items)
    for title, items in BOOLEAN_SETTINGS:
        sections.setdefault(title, []).extend(f"${var} = {_flag(key)};" for var, key in items)
    sections["Uploads"].append(f"$wgLogo = {_getenv('MW_LOGO', '')};")

    for title, body in sections.items():
        lines += ["", f"# {title}", *body]

    lines += [
        "",
        "# Secret keys (persisted across restarts on the extensions volume)",
        "# Auto-generated on first boot unless MW_SECRET_KEY/MW_UPGRADE_KEY are set",
        f"$wgSecretKey = {php_quote(secrets.secret_key)};",
        f"$wgUpgradeKey = {php_quote(secrets.upgrade_key)};",
        "",
        "# Authentication",
        '$wgAuthenticationTokenVersion = "1";',
        "",
        "# Permissions",
        f"$wgGroupPermissions['*']['edit'] = {_flag('MW_ALLOW_ANONYMOUS_EDIT')};",
    ]

    if skin_loads:
        lines += ["", "# Skins", *skin_loads]

    if settings.default_skin:
        lines.append(f"$wgDefaultSkin = {php_quote(settings.default_skin)};")

    if extension_loads:
        lines += ["", "# Extensions", *extension_loads]

    if settings.config_append:
        lines += ["", "# Custom Configuration", settings.config_append]

    return "\n".join(lines) + "\n"


def write_localsettings(path: str, text: str) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    logger.info("Wrote %s", p)


def render_stub(paths: Paths) -> str:
    target = str(paths.localsettings)
    return "\n".join(
        [
            "<?php",
            f"// Stub configuration - redirects to {paths.config_dir} volume",
            f"$wgExtensionDirectory = {php_quote(paths.extensions_dir)};",
            f"$wgStyleDirectory = {php_quote(paths.skins_dir)};",
            "",
            "// Load actual configuration",
            f"if (file_exists({php_quote(target)})) {{",
            f"    require {php_quote(target)};",
            "} else {",
            f"    die({php_quote('ERROR: ' + target + ' not found. Configuration must be provided via environment variables.')});",
            "}",
        ]
    ) + "\n"


def write_stub_localsettings(paths: Paths) -> bool:
    """Write <root>/LocalSettings.php pointing at the config volume, once."""
    p = paths.stub_localsettings
    if p.exists():
        return False
    logger.info("Generating stub LocalSettings.php...")
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(render_stub(paths), encoding="utf-8")
    return True
