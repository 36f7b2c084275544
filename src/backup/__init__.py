"""Back up a GitHub user's repositories as working copies or bare mirrors."""

from .config import BackupSettings, SyncMode
from .runner import main, run
from .synchronizer import RepositorySyncResult, RepositorySynchronizer

__all__ = [
    "BackupSettings",
    "SyncMode",
    "RepositorySyncResult",
    "RepositorySynchronizer",
    "main",
    "run",
]
