"""Convenience shim to run the backup workflow."""

from __future__ import annotations

import sys

from src.backup.runner import main as backup_main


if __name__ == "__main__":
    backup_main(sys.argv[1:])
