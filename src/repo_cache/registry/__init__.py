"""Repository registries."""

from repo_cache.registry.base import RepositoryRegistry
from repo_cache.registry.cache_dir import CacheDir

__all__ = ["RepositoryRegistry", "CacheDir"]
