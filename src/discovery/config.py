"""Central configuration constants for repository discovery."""

from __future__ import annotations

import os
from typing import Optional

from src.secrets import github_token_from_secrets, load_local_secrets

_SECRETS = load_local_secrets()
GITHUB_TOKEN: Optional[str] = os.getenv("GITHUB_TOKEN") or github_token_from_secrets(_SECRETS)
USER_AGENT = "github-backup/1.0"
BASE_URL = "https://api.github.com"
PER_PAGE = 100
REPO_TYPE = "all"
REQUEST_TIMEOUT = int(os.getenv("GITHUB_REQUEST_TIMEOUT", "90"))

__all__ = [
    "GITHUB_TOKEN",
    "USER_AGENT",
    "BASE_URL",
    "PER_PAGE",
    "REPO_TYPE",
    "REQUEST_TIMEOUT",
]
