from __future__ import annotations

import logging
from typing import Optional

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


class GitBackend:
    """Thin wrapper over the git CLI. Every call returns a CmdResult, never raises on exit status."""

    def __init__(self, *, git: str = "git", dry_run: bool = False):
        self.git = git
        self.dry_run = dry_run

    def _git(self, path: str, *args: str) -> CmdResult:
        return run_cmd([self.git, "-C", path, *args], check=False, dry_run=self.dry_run)

    def clone(self, repo: str, path: str) -> CmdResult:
        return run_cmd([self.git, "clone", repo, path], check=False, dry_run=self.dry_run)

    def fetch(self, path: str) -> CmdResult:
        return self._git(path, "fetch", "--all", "--tags")

    def checkout(self, path: str, ref: str) -> CmdResult:
        return self._git(path, "checkout", ref)

    def reset_hard(self, path: str, ref: str) -> CmdResult:
        return self._git(path, "reset", "--hard", ref)

    def pull(self, path: str) -> CmdResult:
        return self._git(path, "pull")

    def run_post_install(self, path: str, command: str) -> CmdResult:
        return run_cmd(["bash", "-c", command], check=False, cwd=path, dry_run=self.dry_run)


def describe_failure(result: CmdResult) -> Optional[str]:
    """Last line of a failed command's output, for one-line warnings."""
    if result.ok:
        return None
    lines = (result.stderr or result.stdout).strip().splitlines()
    return lines[-1] if lines else f"exit {result.returncode}"
