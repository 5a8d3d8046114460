from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_tree(src: str, dst: str) -> int:
    """Copy a directory tree without clobbering (cp -rn), returning the number of files written.

    Symlinks are recreated as links rather than followed.
    """
    s = Path(src)
    d = Path(dst)
    if not s.exists():
        raise FileNotFoundError(src)

    copied = 0
    d.mkdir(parents=True, exist_ok=True)
    for item in s.rglob("*"):
        out = d / item.relative_to(s)
        if item.is_dir() and not item.is_symlink():
            out.mkdir(parents=True, exist_ok=True)
            continue
        if out.exists() or out.is_symlink():
            continue
        out.parent.mkdir(parents=True, exist_ok=True)
        if item.is_symlink():
            out.symlink_to(item.readlink())
        else:
            shutil.copy2(item, out)
        copied += 1
    return copied


def remove_tree(path: str, *, dry_run: bool = False) -> bool:
    """Remove a directory tree (or a stray file/link). Returns True if something was removed."""
    p = Path(path)
    if not (p.exists() or p.is_symlink()):
        return False

    if dry_run:
        logger.info("Would remove %s", str(p))
        return True

    if p.is_dir() and not p.is_symlink():
        shutil.rmtree(p)
    else:
        p.unlink()
    return True


def replace_with_symlink(link: str, target: str, *, dry_run: bool = False) -> None:
    """Make link a symlink to target, removing whatever was there (rm -rf; ln -sf)."""
    lp = Path(link)
    if dry_run:
        logger.info("Would link %s -> %s", str(lp), target)
        return

    if lp.is_symlink() and str(lp.readlink()) == target:
        return
    remove_tree(str(lp))
    lp.parent.mkdir(parents=True, exist_ok=True)
    lp.symlink_to(target)
