"""Version-control capability used by the synchronizer.

The synchronizer only talks to git through this interface, so its branch
bookkeeping can be exercised against an in-memory fake. The GitPython-backed
implementation lives in `git_backend` and is imported only once the `git`
executable is known to be present.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol


@dataclass(frozen=True)
class GitResult:
    """Outcome of one git operation."""

    ok: bool
    output: str = ""
    error: str = ""


class VersionControl(Protocol):
    def clone(self, url: str, path: Path) -> GitResult: ...

    def clone_mirror(self, url: str, path: Path) -> GitResult: ...

    def fetch(self, path: Path, *, prune: bool = False) -> GitResult: ...

    def update_mirror(self, path: Path) -> GitResult: ...

    def checkout(self, path: Path, branch: str) -> GitResult: ...

    def create_tracking_branch(self, path: Path, branch: str) -> GitResult: ...

    def pull(self, path: Path, branch: str) -> GitResult: ...

    def is_repository(self, path: Path, *, bare: bool = False) -> bool: ...

    def local_branches(self, path: Path) -> List[str]: ...

    def remote_branches(self, path: Path) -> List[str]: ...

    def current_branch(self, path: Path) -> Optional[str]: ...

    def remote_head_branch(self, path: Path) -> Optional[str]: ...


__all__ = ["GitResult", "VersionControl"]
