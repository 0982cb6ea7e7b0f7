"""Registry interface mapping repository names to installed repositories."""

from pathlib import Path
from typing import Iterator, Protocol, runtime_checkable

from repo_cache.git.repository import Repository
from repo_cache.git.runner import ProcessRunner


@runtime_checkable
class RepositoryRegistry(Protocol):
    """Name-keyed view of the installed repositories.

    Implementations decide where repositories live; callers only deal in
    names and ``Repository`` objects.
    """

    @property
    def root(self) -> Path: ...

    @property
    def runner(self) -> ProcessRunner: ...

    def names(self) -> list[str]:
        """Names of all installed repositories, sorted."""
        ...

    def has(self, name: str) -> bool: ...

    def get(self, name: str) -> Repository:
        """Resolve a name, raising ``RepositoryNotFound`` if it is unknown."""
        ...

    def path_for(self, name: str) -> Path:
        """Directory a repository called ``name`` occupies (or would occupy)."""
        ...

    def purge(self) -> None: ...

    def __iter__(self) -> Iterator[Repository]: ...

    def __len__(self) -> int: ...

    def __contains__(self, name: object) -> bool: ...
