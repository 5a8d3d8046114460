"""Tests for :mod:`mw_init.lib.names`."""

from __future__ import annotations

import pytest

from mw_init.lib.names import infer_extension_name, kebab_to_pascal, normalize_name


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("PageForms", "PAGEFORMS"),
        ("Semantic-MediaWiki", "SEMANTIC_MEDIAWIKI"),
        ("My Extension", "MY_EXTENSION"),
        ("Cite.v2", "CITE.V2"),
    ],
)
def test_normalize_name(name: str, expected: str) -> None:
    assert normalize_name(name) == expected


@pytest.mark.parametrize("name", ["PageForms", "a-b c", "x_y-z", "ÄÖ-ü", "--  --"])
def test_normalize_name_is_idempotent(name: str) -> None:
    once = normalize_name(name)
    assert normalize_name(once) == once


def test_kebab_to_pascal_only_touches_first_letters() -> None:
    assert kebab_to_pascal("page-forms") == "PageForms"
    assert kebab_to_pascal("semantic-media-wiki") == "SemanticMediaWiki"
    assert kebab_to_pascal("foo--bar") == "FooBar"


def test_infer_extension_name_requires_known_namespace() -> None:
    assert infer_extension_name("mediawiki/page-forms") == "PageForms"
    assert infer_extension_name("vendor/foo-bar", ("vendor/",)) == "FooBar"
    assert infer_extension_name("vendor/foo-bar") is None
    assert infer_extension_name("mediawiki/") is None
