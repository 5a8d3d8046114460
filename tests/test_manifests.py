"""Tests for :mod:`mw_init.manifests`."""

from __future__ import annotations

from pathlib import Path

from mw_init.manifests import (
    ManifestEntry,
    read_composer_manifest,
    read_manifest,
    write_composer_manifest,
    write_manifest,
)


def test_missing_manifest_is_empty(tmp_path: Path) -> None:
    assert read_manifest(str(tmp_path / "nope"), "extension") == {}
    assert read_composer_manifest(str(tmp_path / "nope")) == []


def test_read_filters_by_type_and_ignores_malformed(tmp_path: Path) -> None:
    manifest = tmp_path / ".managed-manifest"
    manifest.write_text(
        "extension:Cite:git\nskin:Vector:bundled\nnot a record\nextension:PageForms:composer\n\n",
        encoding="utf-8",
    )
    assert read_manifest(str(manifest), "extension") == {"Cite": "git", "PageForms": "composer"}
    assert read_manifest(str(manifest), "skin") == {"Vector": "bundled"}


def test_write_truncates_previous_content(tmp_path: Path) -> None:
    manifest = tmp_path / "sub" / ".managed-manifest"
    write_manifest(str(manifest), [ManifestEntry("extension", "Old", "git")])
    write_manifest(
        str(manifest),
        [ManifestEntry("extension", "Cite", "git"), ManifestEntry("extension", "Math", "existing")],
    )
    assert manifest.read_text(encoding="utf-8") == "extension:Cite:git\nextension:Math:existing\n"


def test_write_empty_manifest(tmp_path: Path) -> None:
    manifest = tmp_path / ".managed-manifest"
    write_manifest(str(manifest), [])
    assert manifest.read_text(encoding="utf-8") == ""


def test_composer_manifest_round_trip(tmp_path: Path) -> None:
    manifest = tmp_path / ".composer-manifest"
    write_composer_manifest(str(manifest), ["mediawiki/page-forms", "vendor/lib"])
    assert read_composer_manifest(str(manifest)) == ["mediawiki/page-forms", "vendor/lib"]
