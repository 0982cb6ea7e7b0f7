"""Repository management service."""

import re
from pathlib import Path

import structlog

from repo_cache.core.exceptions import (
    CommandFailed,
    RepositoryExists,
    ValidationError,
)
from repo_cache.core.models.repository import RepositoryInfo
from repo_cache.git.repository import DEFAULT_LIST_PATTERN, Repository
from repo_cache.registry.base import RepositoryRegistry

logger = structlog.get_logger(__name__)

_NO_REMOTE_RE = re.compile(r"No such remote", re.IGNORECASE)


def extract_repo_name(uri: str) -> str:
    """Derive a repository name from a clone URI.

    Handles ``https://``, ``ssh://`` and ``file://`` URLs, scp-style
    ``git@host:org/repo.git`` addresses and plain local paths.
    """
    url = str(uri).strip().rstrip("/")
    if url.endswith(".git"):
        url = url[:-4]
    # scp-style: git@github.com:org/repo
    url = re.sub(r"^[^/:]+@[^/:]+:", "", url)
    name = re.split(r"[/\\:]", url)[-1]
    if not name or name in (".", ".."):
        raise ValidationError(
            f"cannot derive a repository name from URI: {uri!r}",
            details={"uri": str(uri)},
        )
    return name


class RepositoryService:
    """Install, update and look up repositories held by a registry."""

    def __init__(self, registry: RepositoryRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> RepositoryRegistry:
        return self._registry

    def install(
        self,
        uri: str,
        name: str | None = None,
        branch: str | None = None,
        tag: str | None = None,
        depth: int | None = None,
    ) -> Repository:
        """Clone ``uri`` into the cache under ``name``.

        A clone that fails part-way is left on disk for inspection.
        """
        name = name or extract_repo_name(uri)
        path = self._registry.path_for(name)

        if path.exists():
            raise RepositoryExists(
                f"repository already exists: {name!r}",
                details={"name": name, "path": str(path)},
            )

        self._registry.root.mkdir(parents=True, exist_ok=True)
        repo = Repository.install(
            uri,
            path,
            branch=branch,
            tag=tag,
            depth=depth,
            runner=self._registry.runner,
        )
        logger.info("Repository installed", name=repo.name, uri=uri, branch=branch, tag=tag)
        return repo

    def get(self, name: str) -> Repository:
        return self._registry.get(name)

    def list_repositories(self) -> list[Repository]:
        return list(self._registry)

    def update(
        self,
        name: str | None = None,
        branch: str | None = None,
        tag: str | None = None,
    ) -> list[Repository]:
        """Update one repository, or every installed repository in name order."""
        repos = [self._registry.get(name)] if name else self.list_repositories()

        for repo in repos:
            repo.update(branch=branch, tag=tag)
            logger.info("Repository updated", name=repo.name, branch=branch, tag=tag)

        return repos

    def remove(self, name: str) -> Repository:
        repo = self._registry.get(name)
        repo.delete()
        logger.info("Repository removed", name=name)
        return repo

    def purge(self) -> None:
        self._registry.purge()

    def show(self, name: str) -> RepositoryInfo:
        """Snapshot of a repository's location, origin URL and last commit date.

        The URL is ``None`` when no ``origin`` remote is configured. Any other
        git failure propagates.
        """
        repo = self._registry.get(name)

        try:
            url = repo.url()
        except CommandFailed as e:
            if not _NO_REMOTE_RE.search(e.details.get("stderr", "")):
                raise
            url = None

        return RepositoryInfo(
            name=repo.name,
            path=repo.path,
            url=url,
            last_updated_at=repo.last_updated_at(),
        )

    # Lookups across every installed repository

    def find_file(self, relative_path: str) -> Path | None:
        """First matching file, searching repositories in name order."""
        for repo in self._registry:
            path = repo.find_file(relative_path)
            if path is not None:
                return path
        return None

    def glob(self, pattern: str) -> list[Path]:
        matches: list[Path] = []
        for repo in self._registry:
            matches.extend(repo.glob(pattern))
        return matches

    def list_files(self, pattern: str = DEFAULT_LIST_PATTERN) -> list[str]:
        """Relative paths present in any repository, de-duplicated and sorted."""
        files: set[str] = set()
        for repo in self._registry:
            files.update(repo.list_files(pattern))
        return sorted(files)
