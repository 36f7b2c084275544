"""HTTP helpers shared by the discovery workflow."""

from __future__ import annotations

from typing import Any, Optional

import requests

from .config import REQUEST_TIMEOUT, USER_AGENT

SESSION = requests.Session()
SESSION.headers.update(
    {
        "Accept": "application/vnd.github.v3+json",
        "User-Agent": USER_AGENT,
    }
)


def set_auth_header(token: Optional[str]) -> None:
    """Set or clear the SESSION Authorization header."""
    if token:
        SESSION.headers["Authorization"] = f"token {token}"
    else:
        SESSION.headers.pop("Authorization", None)



def log_http_error(resp: requests.Response, url: str) -> None:
    """Print a short, human-readable message when GitHub returns an error."""
    try:
        body = resp.json()
    except ValueError:
        body = {"text": (resp.text or "")[:300]}
    if not isinstance(body, dict):
        body = {"text": str(body)[:300]}
    msg = body.get("message") or body.get("error") or body.get("text")
    print(f"[error] HTTP {resp.status_code} for {url}\n  -> {msg}")


def get_json(url: str) -> Any:
    """GET `url` once and return the decoded JSON body.

    GitHub reports API-level failures (rate limits, unknown users, bad
    credentials) as an object with a `message` field, so the body is returned
    regardless of status and the caller decides. Transport errors propagate.
    """
    resp = SESSION.get(url, timeout=REQUEST_TIMEOUT)
    if resp.status_code >= 400:
        log_http_error(resp, url)
    try:
        return resp.json()
    except ValueError:
        return {"message": f"HTTP {resp.status_code}: {(resp.text or '')[:200]}"}


__all__ = [
    "SESSION",
    "set_auth_header",
    "log_http_error",
    "get_json",
]
