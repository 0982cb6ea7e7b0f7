"""Configuration for repo-cache."""

from repo_cache.config.logging import configure_logging
from repo_cache.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging"]
