from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .lib.assets import copy_tree, replace_with_symlink
from .lib.env import Paths

logger = logging.getLogger(__name__)

MARKER = ".initialized"


def needs_sync(volume: str, version: Optional[str]) -> bool:
    marker = Path(volume) / MARKER
    if not marker.is_file():
        return True
    return marker.read_text(encoding="utf-8").strip() != (version or "")


def sync_bundled(bundled: str, volume: str, version: Optional[str], *, dry_run: bool = False) -> bool:
    """Copy the image's bundled components into the volume (never clobbering).

    Runs on first start and whenever the MediaWiki version changes. Returns
    True if a sync happened.
    """
    if not needs_sync(volume, version):
        return False

    vol = Path(volume)
    src = Path(bundled)
    if dry_run:
        logger.info("Would sync %s -> %s", src, vol)
        return True

    vol.mkdir(parents=True, exist_ok=True)
    # After the first start the bundled dir is our own symlink to the volume.
    if src.is_dir() and src.resolve() != vol.resolve():
        copied = copy_tree(str(src), str(vol))
        logger.info("  Copied %d bundled files into %s", copied, vol)
    (vol / MARKER).write_text(f"{version or ''}\n", encoding="utf-8")
    return True


def init_volumes(paths: Paths, version: Optional[str], *, dry_run: bool = False) -> None:
    logger.info("Checking volumes for MediaWiki %s...", version or "(unknown)")
    root = Path(paths.mediawiki_root)

    for label, bundled, volume in (
        ("extensions", root / "extensions", paths.extensions_dir),
        ("skins", root / "skins", paths.skins_dir),
    ):
        if needs_sync(volume, version):
            logger.info("Syncing base %s...", label)
        sync_bundled(str(bundled), volume, version, dry_run=dry_run)

    # Link volumes to MediaWiki directories
    replace_with_symlink(str(root / "extensions"), paths.extensions_dir, dry_run=dry_run)
    replace_with_symlink(str(root / "skins"), paths.skins_dir, dry_run=dry_run)
