"""Exception hierarchy for repo-cache."""

from typing import Any


class RepoCacheError(Exception):
    """Base exception for all repo-cache errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(RepoCacheError):
    """Invalid or missing configuration."""


class ValidationError(RepoCacheError):
    """An argument failed validation (bad repository name, bad depth, ...)."""


class RepositoryError(RepoCacheError):
    """Base class for errors about an installed repository."""


class RepositoryNotFound(RepositoryError):
    """The repository path does not exist or is not a directory."""


class RepositoryExists(RepositoryError):
    """A repository with the same name is already installed."""


class CommandError(RepoCacheError):
    """Base class for errors raised while running the external tool."""


class CommandNotInstalled(CommandError):
    """The external executable could not be found or started."""


class CommandFailed(CommandError):
    """The external executable ran and exited with a non-zero status."""
