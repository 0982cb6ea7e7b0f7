"""Business logic services for repo-cache."""

from repo_cache.services.repositories import RepositoryService, extract_repo_name

__all__ = [
    "RepositoryService",
    "extract_repo_name",
]
