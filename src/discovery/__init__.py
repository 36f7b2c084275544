"""Enumerate a GitHub user's repositories through the REST API."""

from .repositories import GitHubApiError, RepositoryRef, list_repositories

__all__ = ["GitHubApiError", "RepositoryRef", "list_repositories"]
