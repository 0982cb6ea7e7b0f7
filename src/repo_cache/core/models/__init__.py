"""Domain models for repo-cache."""

from repo_cache.core.models.process import ProcessResult
from repo_cache.core.models.repository import RepositoryInfo

__all__ = [
    "ProcessResult",
    "RepositoryInfo",
]
