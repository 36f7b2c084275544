"""Paginated listing of a user's repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List
from urllib.parse import quote

from .config import BASE_URL, PER_PAGE, REPO_TYPE
from .http_client import get_json


class GitHubApiError(RuntimeError):
    """Raised when the API answers with an error payload instead of a repository list."""


@dataclass(frozen=True)
class RepositoryRef:
    """A repository to back up: its name (used as directory name) and clone URL."""

    name: str
    clone_url: str

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RepositoryRef":
        return cls(name=payload.get("name") or "", clone_url=payload.get("clone_url") or "")


def repos_url(user: str, page: int) -> str:
    return (
        f"{BASE_URL}/users/{quote(user, safe='')}/repos"
        f"?page={page}&per_page={PER_PAGE}&type={REPO_TYPE}"
    )


def fetch_repository_page(user: str, page: int) -> List[Dict[str, Any]]:
    """Return the raw repository objects of one page, raising on an error payload."""
    payload = get_json(repos_url(user, page))
    if isinstance(payload, dict) and "message" in payload:
        raise GitHubApiError(str(payload.get("message")))
    if not isinstance(payload, list):
        raise GitHubApiError(f"unexpected response for page {page}: {type(payload).__name__}")
    return payload


def list_repositories(user: str) -> List[RepositoryRef]:
    """Collect every page until the API returns an empty one, preserving API order."""
    refs: List[RepositoryRef] = []
    page = 1
    while True:
        batch = fetch_repository_page(user, page)
        if not batch:
            break
        for entry in batch:
            ref = RepositoryRef.from_payload(entry)
            if not ref.name or not ref.clone_url:
                print(f"[warn] skipping repository entry without name or clone_url on page {page}")
                continue
            refs.append(ref)
        page += 1
    return refs


__all__ = [
    "GitHubApiError",
    "RepositoryRef",
    "repos_url",
    "fetch_repository_page",
    "list_repositories",
]
