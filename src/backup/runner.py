"""Entry point wiring configuration, repository discovery, and synchronization."""

from __future__ import annotations

import os
import shutil
import sys
from collections import Counter
from typing import List, Optional

from src.discovery.http_client import set_auth_header
from src.discovery.repositories import GitHubApiError, list_repositories

from .config import BackupSettings, SyncMode, parse_args, resolve_settings
from .synchronizer import FAILED, RepositorySyncResult, RepositorySynchronizer
from .vcs import VersionControl

BANNER = "=" * 35
RULE = "-" * 35


def ensure_dir(path: str) -> None:
    """Create the backup directory as-needed without raising for existing folders."""
    os.makedirs(path, exist_ok=True)


def require_git() -> None:
    """Exit with status 1 when the git executable cannot be found."""
    if shutil.which("git") is None:
        print("Error: git is required but not installed.")
        print("Please install git: sudo apt-get install git (Debian/Ubuntu) or sudo pacman -S git (Arch)")
        sys.exit(1)


def _build_vcs() -> VersionControl:
    # GitPython refuses to import without a git executable, so it is loaded after require_git().
    from .git_backend import GitPythonVersionControl

    return GitPythonVersionControl()


def print_header(settings: BackupSettings) -> None:
    print(BANNER)
    print("GitHub Backup")
    print(BANNER)
    print(f"User: {settings.username}")
    print(f"Backup directory: {settings.backup_dir}")
    if settings.mode is SyncMode.MIRROR:
        print("Mode: mirror (bare clones with all refs)")
    else:
        print("Mode: regular (working copies with all branches)")
    print(RULE)
    if settings.token:
        print("Using authenticated API (with token)")
    else:
        print("Using unauthenticated API (rate limit: 60 requests/hour)")
        print("Set GITHUB_TOKEN environment variable for higher rate limits and private repo access")
    print(RULE)


def print_summary(results: List[RepositorySyncResult], settings: BackupSettings) -> None:
    counts = Counter(result.action for result in results)
    print(BANNER)
    print("Backup completed!")
    print(", ".join(f"{action}: {count}" for action, count in sorted(counts.items())))
    failed = [result for result in results if result.action == FAILED]
    if failed:
        print("Failed repositories:")
        for result in failed:
            print(f"  - {result.name}")
    partial = [result for result in results if result.ok and result.failed_branches]
    if partial:
        print("Branches that could not be updated:")
        for result in partial:
            print(f"  - {result.name}: {', '.join(result.failed_branches)}")
    print(f"All repositories backed up to: {settings.backup_dir}")
    print(BANNER)


def run(settings: BackupSettings, vcs: Optional[VersionControl] = None) -> List[RepositorySyncResult]:
    """Enumerate the user's repositories, then clone or update each of them in turn."""

    ensure_dir(str(settings.backup_dir))
    print_header(settings)
    set_auth_header(settings.token)

    print("Fetching repository list...")
    try:
        repos = list_repositories(settings.username)
    except GitHubApiError as exc:
        print(f"Error from GitHub API: {exc}")
        sys.exit(1)

    if not repos:
        print(f"No repositories found for user: {settings.username}")
        return []

    print(f"Found {len(repos)} repositories")
    print(BANNER)
    print("")

    synchronizer = RepositorySynchronizer(settings.backup_dir, settings.mode, vcs or _build_vcs())
    results = synchronizer.sync_all(repos)
    print_summary(results, settings)
    return results


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: `github-backup [--mirror] [backup_directory] [github_username]`."""

    args = parse_args(argv)
    settings = resolve_settings(args)
    require_git()
    run(settings)


__all__ = ["main", "run", "require_git", "ensure_dir", "print_header", "print_summary"]
