"""In-memory VersionControl used to exercise the synchronizer without spawning git."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from src.backup.vcs import GitResult


@dataclass
class FakeRemote:
    branches: List[str]
    head: Optional[str] = "main"


@dataclass
class FakeLocal:
    url: str
    bare: bool
    branches: List[str] = field(default_factory=list)
    current: Optional[str] = None


class FakeVersionControl:
    def __init__(self, remotes: Dict[str, FakeRemote]) -> None:
        self.remotes = remotes
        self.repos: Dict[Path, FakeLocal] = {}
        self.calls: List[Tuple[str, str, str]] = []
        self.advertise_head = True
        self.failing_clones: Set[str] = set()
        self.failing_pulls: Set[str] = set()
        self.failing_checkouts: Set[str] = set()
        self.failing_fetches: Set[str] = set()
        self.failing_tracking: Set[str] = set()
        self.failing_mirror_updates: Set[str] = set()
        self.debris_clones: Set[str] = set()

    def _record(self, op: str, path: Path, arg: str = "") -> None:
        self.calls.append((op, Path(path).name, arg))

    def ops(self, op: str) -> List[Tuple[str, str]]:
        return [(name, arg) for kind, name, arg in self.calls if kind == op]

    def clone(self, url: str, path: Path) -> GitResult:
        self._record("clone", path, url)
        if url in self.failing_clones:
            return GitResult(ok=False, error="fatal: repository not found")
        if url in self.debris_clones:
            path.mkdir(parents=True)
            return GitResult(ok=False, error="fatal: early EOF")
        remote = self.remotes[url]
        path.mkdir(parents=True)
        branches = [remote.head] if remote.head else []
        self.repos[path] = FakeLocal(url=url, bare=False, branches=branches, current=remote.head)
        return GitResult(ok=True)

    def clone_mirror(self, url: str, path: Path) -> GitResult:
        self._record("clone_mirror", path, url)
        if url in self.failing_clones:
            return GitResult(ok=False, error="fatal: repository not found")
        path.mkdir(parents=True)
        self.repos[path] = FakeLocal(url=url, bare=True, branches=list(self.remotes[url].branches))
        return GitResult(ok=True)

    def fetch(self, path: Path, *, prune: bool = False) -> GitResult:
        self._record("fetch", path, "prune" if prune else "")
        if path.name in self.failing_fetches:
            return GitResult(ok=False, error="fatal: unable to access remote")
        return GitResult(ok=True)

    def update_mirror(self, path: Path) -> GitResult:
        self._record("update_mirror", path)
        if path.name in self.failing_mirror_updates:
            return GitResult(ok=False, error="fatal: could not read from remote repository")
        local = self.repos[path]
        local.branches = list(self.remotes[local.url].branches)
        return GitResult(ok=True)

    def checkout(self, path: Path, branch: str) -> GitResult:
        self._record("checkout", path, branch)
        local = self.repos[path]
        if branch in self.failing_checkouts or branch not in local.branches:
            return GitResult(ok=False, error=f"error: pathspec '{branch}' did not match")
        local.current = branch
        return GitResult(ok=True)

    def create_tracking_branch(self, path: Path, branch: str) -> GitResult:
        self._record("create_tracking_branch", path, branch)
        if branch in self.failing_tracking:
            return GitResult(ok=False, error=f"fatal: cannot set up tracking information for {branch}")
        local = self.repos[path]
        if branch in local.branches or branch not in self.remotes[local.url].branches:
            return GitResult(ok=False, error=f"fatal: a branch named '{branch}' already exists")
        local.branches.append(branch)
        local.current = branch
        return GitResult(ok=True)

    def pull(self, path: Path, branch: str) -> GitResult:
        self._record("pull", path, branch)
        if branch in self.failing_pulls:
            return GitResult(ok=False, error="fatal: Not possible to fast-forward, aborting.")
        return GitResult(ok=True)

    def is_repository(self, path: Path, *, bare: bool = False) -> bool:
        local = self.repos.get(path)
        return local is not None and local.bare == bare

    def local_branches(self, path: Path) -> List[str]:
        return list(self.repos[path].branches)

    def remote_branches(self, path: Path) -> List[str]:
        return list(self.remotes[self.repos[path].url].branches)

    def current_branch(self, path: Path) -> Optional[str]:
        return self.repos[path].current

    def remote_head_branch(self, path: Path) -> Optional[str]:
        if not self.advertise_head:
            return None
        return self.remotes[self.repos[path].url].head
