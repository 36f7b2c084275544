"""Utilities for loading local (gitignored) credentials."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_SECRETS_FILENAME = "local_secrets.json"


def _default_secrets_path() -> Path:
    root = Path(__file__).resolve().parents[1]
    return root / DEFAULT_SECRETS_FILENAME


def load_local_secrets(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Load secrets from a JSON file; return {} when the file is absent or unreadable."""

    candidate = path or os.getenv("LOCAL_SECRETS_FILE") or _default_secrets_path()
    secrets_path = Path(candidate).expanduser()
    if not secrets_path.exists():
        return {}
    try:
        with secrets_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError) as exc:
        print(f"[warn] could not read {secrets_path}: {exc}")
        return {}
    return data if isinstance(data, dict) else {}


def github_token_from_secrets(secrets: Dict[str, Any]) -> Optional[str]:
    """Return the configured GitHub token, accepting a single token or the first of a list."""

    token = secrets.get("github_token")
    if not token:
        tokens = secrets.get("github_tokens") or []
        token = tokens[0] if isinstance(tokens, list) and tokens else None
    return str(token) if token else None


__all__ = ["load_local_secrets", "github_token_from_secrets", "DEFAULT_SECRETS_FILENAME"]
