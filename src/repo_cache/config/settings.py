"""Application settings using Pydantic Settings."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from repo_cache.core.exceptions import ConfigurationError


def _default_cache_dir() -> str:
    xdg_cache = os.environ.get("XDG_CACHE_HOME") or "~/.cache"
    return str(Path(xdg_cache) / "repo-cache")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REPO_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Cache root; every installed repository is one subdirectory of it
    cache_dir: str = Field(default_factory=_default_cache_dir)

    # External tool
    git_executable: str = "git"

    # Logging
    log_level: str = "WARNING"
    json_logs: bool = False

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.cache_dir = str(Path(self.cache_dir).expanduser())

    @property
    def cache_path(self) -> Path:
        return Path(self.cache_dir)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    try:
        return Settings()
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"invalid configuration: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False)},
        ) from e
