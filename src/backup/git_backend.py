"""GitPython implementation of the VersionControl capability."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from .vcs import GitResult

REMOTE = "origin"
REMOTE_REFS_PREFIX = f"refs/remotes/{REMOTE}/"

# Never block on an interactive credential prompt for private repositories.
NON_INTERACTIVE_ENV = {"GIT_TERMINAL_PROMPT": "0"}


def _stderr(exc: GitCommandError) -> str:
    text = exc.stderr or exc.stdout or str(exc)
    return str(text).strip()


class GitPythonVersionControl:
    """Runs git operations through GitPython; failures become `GitResult(ok=False)`."""

    def _git(self, path: Path, command: str, *args: str) -> GitResult:
        try:
            with Repo(path) as repo:
                output = getattr(repo.git, command)(*args, env=NON_INTERACTIVE_ENV)
        except GitCommandError as exc:
            return GitResult(ok=False, error=_stderr(exc))
        except (InvalidGitRepositoryError, NoSuchPathError) as exc:
            return GitResult(ok=False, error=f"not a git repository: {exc}")
        return GitResult(ok=True, output=output or "")

    def clone(self, url: str, path: Path) -> GitResult:
        try:
            Repo.clone_from(url, path, env=NON_INTERACTIVE_ENV).close()
        except GitCommandError as exc:
            return GitResult(ok=False, error=_stderr(exc))
        return GitResult(ok=True)

    def clone_mirror(self, url: str, path: Path) -> GitResult:
        try:
            Repo.clone_from(url, path, mirror=True, env=NON_INTERACTIVE_ENV).close()
        except GitCommandError as exc:
            return GitResult(ok=False, error=_stderr(exc))
        return GitResult(ok=True)

    def fetch(self, path: Path, *, prune: bool = False) -> GitResult:
        if prune:
            return self._git(path, "fetch", "--all", "--prune")
        return self._git(path, "fetch", "--all")

    def update_mirror(self, path: Path) -> GitResult:
        return self._git(path, "remote", "update", "--prune")

    def checkout(self, path: Path, branch: str) -> GitResult:
        return self._git(path, "checkout", branch)

    def create_tracking_branch(self, path: Path, branch: str) -> GitResult:
        return self._git(path, "checkout", "-b", branch, "--track", f"{REMOTE}/{branch}")

    def pull(self, path: Path, branch: str) -> GitResult:
        return self._git(path, "pull", REMOTE, branch)

    def is_repository(self, path: Path, *, bare: bool = False) -> bool:
        """True when `path` itself is a repository of the requested kind with an origin remote."""
        try:
            with Repo(path) as repo:
                if repo.bare != bare:
                    return False
                return any(remote.name == REMOTE for remote in repo.remotes)
        except (InvalidGitRepositoryError, NoSuchPathError):
            return False

    def local_branches(self, path: Path) -> List[str]:
        with Repo(path) as repo:
            return [head.name for head in repo.heads]

    def remote_branches(self, path: Path) -> List[str]:
        result = self._git(path, "for_each_ref", "--format=%(refname)", f"refs/remotes/{REMOTE}")
        if not result.ok:
            return []
        branches = []
        for line in result.output.splitlines():
            name = line.strip()[len(REMOTE_REFS_PREFIX):]
            if name and name != "HEAD":
                branches.append(name)
        return branches

    def current_branch(self, path: Path) -> Optional[str]:
        with Repo(path) as repo:
            try:
                return repo.active_branch.name
            except TypeError:
                # detached HEAD
                return None

    def remote_head_branch(self, path: Path) -> Optional[str]:
        """Branch the remote advertises as HEAD, per `git remote show origin`."""
        result = self._git(path, "remote", "show", REMOTE)
        if not result.ok:
            return None
        for line in result.output.splitlines():
            line = line.strip()
            if line.startswith("HEAD branch:"):
                branch = line.split(":", 1)[1].strip()
                if branch and branch != "(unknown)":
                    return branch
        return None


__all__ = ["GitPythonVersionControl", "NON_INTERACTIVE_ENV", "REMOTE"]
