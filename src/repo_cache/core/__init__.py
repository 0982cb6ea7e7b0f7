"""Core domain models and exceptions for repo-cache."""

from repo_cache.core.exceptions import (
    CommandError,
    CommandFailed,
    CommandNotInstalled,
    ConfigurationError,
    RepoCacheError,
    RepositoryError,
    RepositoryExists,
    RepositoryNotFound,
    ValidationError,
)
from repo_cache.core.models import ProcessResult, RepositoryInfo

__all__ = [
    # Models
    "ProcessResult",
    "RepositoryInfo",
    # Exceptions
    "RepoCacheError",
    "ConfigurationError",
    "ValidationError",
    "RepositoryError",
    "RepositoryNotFound",
    "RepositoryExists",
    "CommandError",
    "CommandNotInstalled",
    "CommandFailed",
]
