"""Tests for :mod:`mw_init.lib.version`."""

from __future__ import annotations

from pathlib import Path

import pytest

from mw_init.lib.version import DEFAULT_BRANCH, detect_version, version_branch


def _defines(root: Path, body: str) -> None:
    (root / "includes").mkdir(parents=True)
    (root / "includes" / "Defines.php").write_text(body, encoding="utf-8")


def test_detect_version(tmp_path: Path) -> None:
    _defines(tmp_path, "<?php\ndefine( 'MW_VERSION', '1.42.3' );\n")
    assert detect_version(str(tmp_path)) == "1.42.3"


def test_detect_version_missing(tmp_path: Path) -> None:
    assert detect_version(str(tmp_path)) is None
    _defines(tmp_path, "<?php\n// nothing here\n")
    assert detect_version(str(tmp_path)) is None


@pytest.mark.parametrize(
    ("version", "branch"),
    [
        ("1.42.3", "REL1_42"),
        ("1.43.0-rc.1", "REL1_43"),
        ("1.44.0-alpha", "REL1_44"),
        ("2.0", "REL2_0"),
        (None, DEFAULT_BRANCH),
        ("", DEFAULT_BRANCH),
        ("garbage", DEFAULT_BRANCH),
        ("1.x", DEFAULT_BRANCH),
    ],
)
def test_version_branch(version, branch: str) -> None:
    assert version_branch(version) == branch
