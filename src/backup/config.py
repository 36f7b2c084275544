"""Configuration helpers for the backup workflow."""

from __future__ import annotations

import argparse
import enum
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from src.discovery.config import GITHUB_TOKEN

DEFAULT_BACKUP_DIR = os.getenv("GITHUB_BACKUP_DIR", "~/github_backup")
DEFAULT_USER = os.getenv("GITHUB_BACKUP_USER", "krzysbaranski")
MIRROR_SUFFIX = ".git"


class SyncMode(enum.Enum):
    REGULAR = "regular"
    MIRROR = "mirror"


@dataclass(frozen=True)
class BackupSettings:
    """Resolved runtime settings for a backup run."""

    backup_dir: Path
    username: str
    mode: SyncMode
    token: Optional[str]


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser used by the backup entry point."""

    parser = argparse.ArgumentParser(
        prog="github-backup",
        description="Back up every repository of a GitHub user, with all branches or as bare mirrors.",
    )
    parser.add_argument(
        "--mirror",
        action="store_true",
        help="create bare mirror clones ({name}.git) instead of working copies",
    )
    parser.add_argument("backup_dir", nargs="?", default=DEFAULT_BACKUP_DIR)
    parser.add_argument("username", nargs="?", default=DEFAULT_USER)
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments; accepts argv overrides for testing."""

    parser = build_arg_parser()
    return parser.parse_args(argv)


def resolve_settings(args: Optional[argparse.Namespace] = None) -> BackupSettings:
    """Return immutable settings built from CLI arguments and the environment."""

    args = args or parse_args()
    return BackupSettings(
        backup_dir=Path(args.backup_dir).expanduser().resolve(),
        username=args.username,
        mode=SyncMode.MIRROR if args.mirror else SyncMode.REGULAR,
        token=GITHUB_TOKEN,
    )


__all__ = [
    "DEFAULT_BACKUP_DIR",
    "DEFAULT_USER",
    "MIRROR_SUFFIX",
    "SyncMode",
    "BackupSettings",
    "build_arg_parser",
    "parse_args",
    "resolve_settings",
]
