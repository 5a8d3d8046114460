"""Shared pytest fixtures: temp volumes and fake git/Composer backends."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple

import pytest

from mw_init.lib.command import CmdResult
from mw_init.lib.env import Paths


def ok(*argv: str) -> CmdResult:
    return CmdResult(argv=list(argv), returncode=0, stdout="", stderr="")


def failed(*argv: str, stderr: str = "fatal: boom") -> CmdResult:
    return CmdResult(argv=list(argv), returncode=1, stdout="", stderr=stderr)


class FakeGit:
    """Records calls; clone creates a checkout unless the component is listed in fail_clone."""

    def __init__(
        self,
        *,
        fail_clone: Iterable[str] = (),
        fail_fetch: Iterable[str] = (),
        fail_checkout: Iterable[str] = (),
        fail_reset: Iterable[str] = (),
        fail_post_install: Iterable[str] = (),
    ):
        self.fail_clone = set(fail_clone)
        self.fail_fetch = set(fail_fetch)
        self.fail_checkout = set(fail_checkout)
        self.fail_reset = set(fail_reset)
        self.fail_post_install = set(fail_post_install)
        self.calls: List[Tuple[str, ...]] = []

    def _result(self, failing: set, path: str, *call: str) -> CmdResult:
        self.calls.append(call)
        if Path(path).name in failing:
            return failed(*call)
        return ok(*call)

    def clone(self, repo: str, path: str) -> CmdResult:
        self.calls.append(("clone", repo, path))
        if Path(path).name in self.fail_clone:
            return failed("git", "clone", repo, path)
        (Path(path) / ".git").mkdir(parents=True)
        (Path(path) / "extension.json").write_text("{}", encoding="utf-8")
        return ok("git", "clone", repo, path)

    def fetch(self, path: str) -> CmdResult:
        return self._result(self.fail_fetch, path, "fetch", path)

    def checkout(self, path: str, ref: str) -> CmdResult:
        return self._result(self.fail_checkout, path, "checkout", path, ref)

    def reset_hard(self, path: str, ref: str) -> CmdResult:
        return self._result(self.fail_reset, path, "reset", path, ref)

    def pull(self, path: str) -> CmdResult:
        return self._result(set(), path, "pull", path)

    def run_post_install(self, path: str, command: str) -> CmdResult:
        return self._result(self.fail_post_install, path, "post_install", path, command)

    def calls_for(self, name: str) -> List[Tuple[str, ...]]:
        return [c for c in self.calls if any(Path(a).name == name for a in c[1:])]


class FakeComposer:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.updates: List[str] = []

    def update(self, mediawiki_root: str) -> CmdResult:
        self.updates.append(mediawiki_root)
        if self.fail:
            return failed("composer", "update", stderr="Your requirements could not be resolved")
        return ok("composer", "update")


@pytest.fixture
def paths(tmp_path: Path) -> Paths:
    p = Paths(
        mediawiki_root=str(tmp_path / "html"),
        extensions_dir=str(tmp_path / "extensions"),
        skins_dir=str(tmp_path / "skins"),
        config_dir=str(tmp_path / "config"),
    )
    for d in (p.mediawiki_root, p.extensions_dir, p.skins_dir):
        Path(d).mkdir(parents=True)
    return p


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def fake_composer() -> FakeComposer:
    return FakeComposer()


def make_checkout(path: Path) -> Path:
    (path / ".git").mkdir(parents=True)
    (path / "extension.json").write_text("{}", encoding="utf-8")
    return path
