from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .lib.names import normalize_name

TYPE_PREFIXES = {
    "extension": "MW_EXT",
    "skin": "MW_SKIN",
}

# field -> env suffix
FIELDS = {
    "repo": "REPO",
    "branch": "BRANCH",
    "tag": "TAG",
    "commit": "COMMIT",
    "post_install": "POST_INSTALL",
    "load": "LOAD",
}

DEFAULT_REPO_BASE = "https://gerrit.wikimedia.org/r/mediawiki"


def override_key(component_type: str, name: str, field: str) -> str:
    """MW_EXT_PAGE_FORMS_BRANCH style key for a component override."""
    try:
        prefix = TYPE_PREFIXES[component_type]
        suffix = FIELDS[field]
    except KeyError as e:
        raise ValueError(f"Unknown override {component_type}/{field}") from e
    return f"{prefix}_{normalize_name(name)}_{suffix}"


class OverrideLookup:
    """Per-component overrides backed by any key/value source."""

    def __init__(self, source: Mapping[str, str]):
        self._source = source

    def get(self, component_type: str, name: str, field: str) -> Optional[str]:
        value = self._source.get(override_key(component_type, name, field))
        return value or None


@dataclass(frozen=True)
class ComponentConfig:
    component_type: str
    name: str
    repo: str
    branch: Optional[str]
    tag: Optional[str]
    commit: Optional[str]
    post_install: Optional[str]
    load: Optional[str]

    @property
    def ref_kind(self) -> str:
        if self.commit:
            return "commit"
        if self.tag:
            return "tag"
        return "branch"


def default_repo(component_type: str, name: str) -> str:
    return f"{DEFAULT_REPO_BASE}/{component_type}s/{name}"


def component_config(
    overrides: OverrideLookup,
    component_type: str,
    name: str,
    *,
    default_branch: str,
) -> ComponentConfig:
    """Resolve overrides for one component, applying repo/branch defaults.

    The default branch only applies when neither a tag nor a commit is pinned.
    """
    def get(field: str) -> Optional[str]:
        return overrides.get(component_type, name, field)

    branch, tag, commit = get("branch"), get("tag"), get("commit")
    if not (branch or tag or commit):
        branch = default_branch
    return ComponentConfig(
        component_type=component_type,
        name=name,
        repo=get("repo") or default_repo(component_type, name),
        branch=branch,
        tag=tag,
        commit=commit,
        post_install=get("post_install"),
        load=get("load"),
    )
