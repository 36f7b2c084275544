"""Clone or update local copies of discovered repositories."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from src.discovery.repositories import RepositoryRef

from .config import MIRROR_SUFFIX, SyncMode
from .vcs import GitResult, VersionControl

FALLBACK_DEFAULT_BRANCHES = ("main", "master")

CLONED = "cloned"
RECLONED = "recloned"
UPDATED = "updated"
FAILED = "failed"


@dataclass
class RepositorySyncResult:
    """What happened to one repository during a run."""

    name: str
    path: Path
    action: str
    failed_branches: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.action != FAILED


def _first_line(result: GitResult) -> str:
    lines = (result.error or result.output).strip().splitlines()
    return lines[0] if lines else ""


class RepositorySynchronizer:
    """Brings each repository under `backup_dir` up to date, one at a time.

    Whether a repository is present is probed from the filesystem on every
    call; nothing is recorded between runs.
    """

    def __init__(self, backup_dir: Path, mode: SyncMode, vcs: VersionControl) -> None:
        self.backup_dir = Path(backup_dir)
        self.mode = mode
        self.vcs = vcs

    def target_path(self, ref: RepositoryRef) -> Path:
        if self.mode is SyncMode.MIRROR:
            return self.backup_dir / f"{ref.name}{MIRROR_SUFFIX}"
        return self.backup_dir / ref.name

    def sync_all(self, refs: Iterable[RepositoryRef]) -> List[RepositorySyncResult]:
        return [self.sync(ref) for ref in refs]

    def sync(self, ref: RepositoryRef) -> RepositorySyncResult:
        """Clone `ref` when absent, otherwise update it in place."""
        path = self.target_path(ref)
        bare = self.mode is SyncMode.MIRROR
        print(f"Processing: {ref.name}")

        if ref.name in ("", ".", "..") or path.parent != self.backup_dir:
            print(f"  ✗ Refusing to use {path}: repository name {ref.name!r} is not a directory name")
            print("")
            return RepositorySyncResult(ref.name, path, FAILED)

        if path.exists() and not path.is_dir():
            print(f"  ✗ {path} exists and is not a directory")
            print("")
            return RepositorySyncResult(ref.name, path, FAILED)

        recloned = False
        if path.exists() and not self.vcs.is_repository(path, bare=bare):
            print(f"  [warn] {path} is not a complete repository, removing it and cloning again")
            shutil.rmtree(path)
            recloned = True

        if path.exists():
            if bare:
                result = self._update_mirror(ref, path)
            else:
                result = self._update_working_copy(ref, path)
        else:
            if bare:
                result = self._clone_mirror(ref, path)
            else:
                result = self._clone_working_copy(ref, path)
            if recloned and result.ok:
                result.action = RECLONED

        print("")
        return result

    # -- regular mode -------------------------------------------------------

    def _clone_working_copy(self, ref: RepositoryRef, path: Path) -> RepositorySyncResult:
        print("  Cloning repository...")
        cloned = self.vcs.clone(ref.clone_url, path)
        if not path.is_dir() or not self.vcs.is_repository(path):
            print(f"  ✗ Failed to clone: {_first_line(cloned)}")
            return RepositorySyncResult(ref.name, path, FAILED)

        result = RepositorySyncResult(ref.name, path, CLONED)
        fetched = self.vcs.fetch(path)
        if not fetched.ok:
            print(f"    [warn] fetch failed: {_first_line(fetched)}")

        existing = set(self.vcs.local_branches(path))
        current = self.vcs.current_branch(path)
        for branch in self.vcs.remote_branches(path):
            if branch == current or branch in existing:
                continue
            print(f"    Creating local branch: {branch}")
            created = self.vcs.create_tracking_branch(path, branch)
            if created.ok:
                existing.add(branch)
            else:
                print(f"      Could not create branch {branch}: {_first_line(created)}")
                result.failed_branches.append(branch)

        self.checkout_default_branch(path)
        print("  ✓ Cloned successfully")
        return result

    def _update_working_copy(self, ref: RepositoryRef, path: Path) -> RepositorySyncResult:
        print("  Repository exists, updating...")
        fetched = self.vcs.fetch(path, prune=True)
        if not fetched.ok:
            print(f"  ✗ Failed to fetch: {_first_line(fetched)}")
            return RepositorySyncResult(ref.name, path, FAILED)

        result = RepositorySyncResult(ref.name, path, UPDATED)
        local = set(self.vcs.local_branches(path))
        for branch in self.vcs.remote_branches(path):
            print(f"    Updating branch: {branch}")
            if branch in local:
                checked_out = self.vcs.checkout(path, branch)
                if not checked_out.ok:
                    print(f"      Could not checkout {branch}: {_first_line(checked_out)}")
                    result.failed_branches.append(branch)
                    continue
                pulled = self.vcs.pull(path, branch)
                if not pulled.ok:
                    print(f"      Could not pull {branch}: {_first_line(pulled)}")
                    result.failed_branches.append(branch)
            else:
                created = self.vcs.create_tracking_branch(path, branch)
                if created.ok:
                    local.add(branch)
                else:
                    print(f"      Could not checkout {branch}: {_first_line(created)}")
                    result.failed_branches.append(branch)

        self.checkout_default_branch(path)
        print("  ✓ Updated successfully")
        return result

    def resolve_default_branch(self, path: Path) -> Optional[str]:
        """Remote's advertised HEAD, else local `main`, else local `master`, else None."""
        advertised = self.vcs.remote_head_branch(path)
        if advertised:
            return advertised
        local = set(self.vcs.local_branches(path))
        for candidate in FALLBACK_DEFAULT_BRANCHES:
            if candidate in local:
                return candidate
        return None

    def checkout_default_branch(self, path: Path) -> Optional[str]:
        """Check out the resolved default branch; leave the checkout alone when none resolves."""
        branch = self.resolve_default_branch(path)
        if branch is None:
            return None
        checked_out = self.vcs.checkout(path, branch)
        if not checked_out.ok:
            print(f"    [warn] could not return to {branch}: {_first_line(checked_out)}")
        return branch

    # -- mirror mode --------------------------------------------------------

    def _clone_mirror(self, ref: RepositoryRef, path: Path) -> RepositorySyncResult:
        print("  Creating mirror clone...")
        cloned = self.vcs.clone_mirror(ref.clone_url, path)
        if not path.is_dir() or not self.vcs.is_repository(path, bare=True):
            print(f"  ✗ Failed to clone: {_first_line(cloned)}")
            return RepositorySyncResult(ref.name, path, FAILED)
        print("  ✓ Mirrored successfully")
        return RepositorySyncResult(ref.name, path, CLONED)

    def _update_mirror(self, ref: RepositoryRef, path: Path) -> RepositorySyncResult:
        print("  Mirror exists, updating refs...")
        updated = self.vcs.update_mirror(path)
        if not updated.ok:
            print(f"  ✗ Failed to update mirror: {_first_line(updated)}")
            return RepositorySyncResult(ref.name, path, FAILED)
        print("  ✓ Updated successfully")
        return RepositorySyncResult(ref.name, path, UPDATED)


__all__ = [
    "CLONED",
    "RECLONED",
    "UPDATED",
    "FAILED",
    "FALLBACK_DEFAULT_BRANCHES",
    "RepositorySyncResult",
    "RepositorySynchronizer",
]
