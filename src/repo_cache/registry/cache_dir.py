"""Directory-backed registry: each subdirectory of the cache root is a repository."""

from pathlib import Path
from typing import Iterator

import structlog

from repo_cache.core.exceptions import RepositoryNotFound, ValidationError
from repo_cache.git.repository import Repository, default_runner, remove_tree
from repo_cache.git.runner import ProcessRunner

logger = structlog.get_logger(__name__)


class CacheDir:
    """Registry over a cache root directory.

    There is no manifest file. The non-hidden subdirectories of ``root`` are
    the installed repositories and their base names are the repository names.
    """

    def __init__(
        self, root: str | Path | None = None, runner: ProcessRunner | None = None
    ) -> None:
        if root is None:
            from repo_cache.config.settings import get_settings

            root = get_settings().cache_dir

        self._root = Path(root).expanduser().resolve()
        self._runner = runner or default_runner()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def runner(self) -> ProcessRunner:
        return self._runner

    def _repo_dirs(self) -> list[Path]:
        if not self._root.is_dir():
            return []
        return sorted(
            child
            for child in self._root.iterdir()
            if child.is_dir() and not child.name.startswith(".")
        )

    def names(self) -> list[str]:
        return [path.name for path in self._repo_dirs()]

    def path_for(self, name: str) -> Path:
        """Directory for ``name`` under the cache root.

        Raises:
            ValidationError: ``name`` is empty, hidden, or contains a path
                separator, so it cannot be a single directory under the root.
        """
        if (
            not name
            or name in (".", "..")
            or name.startswith(".")
            or "/" in name
            or "\\" in name
        ):
            raise ValidationError(
                f"invalid repository name: {name!r}",
                details={"name": name},
            )
        return self._root / name

    def has(self, name: str) -> bool:
        try:
            return self.path_for(name).is_dir()
        except ValidationError:
            return False

    def get(self, name: str) -> Repository:
        if not self.has(name):
            raise RepositoryNotFound(
                f"repository not found: {name!r}",
                details={"name": name, "cache_dir": str(self._root)},
            )
        return Repository(self.path_for(name), runner=self._runner)

    def purge(self) -> None:
        """Delete the whole cache root, including every repository in it."""
        if not self._root.exists():
            return
        logger.info("Purging cache directory", cache_dir=str(self._root))
        remove_tree(self._root)

    def __getitem__(self, name: str) -> Repository:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __iter__(self) -> Iterator[Repository]:
        for path in self._repo_dirs():
            yield Repository(path, runner=self._runner)

    def __len__(self) -> int:
        return len(self._repo_dirs())

    def __repr__(self) -> str:
        return f"CacheDir(root={str(self._root)!r})"
