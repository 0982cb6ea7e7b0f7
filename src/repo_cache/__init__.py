"""repo-cache: a local cache of third-party git repositories."""

from repo_cache.core.exceptions import (
    CommandFailed,
    CommandNotInstalled,
    RepoCacheError,
    RepositoryExists,
    RepositoryNotFound,
)
from repo_cache.git.repository import Repository, open_repository
from repo_cache.registry.cache_dir import CacheDir
from repo_cache.services.repositories import RepositoryService

__version__ = "0.1.0"

__all__ = [
    "Repository",
    "open_repository",
    "CacheDir",
    "RepositoryService",
    "RepoCacheError",
    "RepositoryNotFound",
    "RepositoryExists",
    "CommandNotInstalled",
    "CommandFailed",
]
