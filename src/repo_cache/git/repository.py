"""An installed git repository and the git operations performed on it."""

import glob as _glob
import os
import re
import shutil
import stat
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterator

import structlog

from repo_cache.core.exceptions import (
    CommandFailed,
    CommandNotInstalled,
    RepositoryError,
    RepositoryNotFound,
    ValidationError,
)
from repo_cache.core.models.process import ProcessResult
from repo_cache.git.runner import ProcessRunner, SubprocessRunner

logger = structlog.get_logger(__name__)

DEFAULT_LIST_PATTERN = "**/*.*"

# git reports an unborn HEAD differently depending on its version
_NO_COMMITS_RE = re.compile(
    r"does not have any commits yet|bad default revision 'HEAD'"
)


def default_runner() -> SubprocessRunner:
    """Create a runner for the configured git executable."""
    from repo_cache.config.settings import get_settings

    return SubprocessRunner(get_settings().git_executable)


def _check_result(result: ProcessResult) -> ProcessResult:
    """Map a process result onto the command exceptions."""
    if result.not_found:
        executable = result.args[0] if result.args else "git"
        raise CommandNotInstalled(
            f"{executable} is not installed",
            details={"args": result.args},
        )
    if not result.ok:
        raise CommandFailed(
            f"command failed: {result.command_line}",
            details={
                "args": result.args,
                "returncode": result.returncode,
                "stderr": result.stderr.strip(),
            },
        )
    return result


def _make_writable(func, path, _exc) -> None:
    # git marks pack files read-only, which blocks removal on Windows
    os.chmod(path, stat.S_IWRITE)
    func(path)


def remove_tree(path: Path) -> None:
    """Recursively delete ``path``, including read-only files git leaves behind."""
    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=_make_writable)
    else:
        shutil.rmtree(path, onerror=_make_writable)


class Repository:
    """An installed repository rooted at a directory.

    Version-control state (remote URL, last commit time) is never cached on
    the instance; every query asks git again.
    """

    def __init__(self, path: str | Path, runner: ProcessRunner | None = None) -> None:
        resolved = Path(path).expanduser().resolve()

        if not resolved.exists():
            raise RepositoryNotFound(
                f"repository does not exist: {str(resolved)!r}",
                details={"path": str(resolved)},
            )
        if not resolved.is_dir():
            raise RepositoryNotFound(
                f"path is not a directory: {str(resolved)!r}",
                details={"path": str(resolved)},
            )

        self._path = resolved
        self._name = resolved.name
        self._runner = runner or default_runner()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def name(self) -> str:
        return self._name

    @property
    def runner(self) -> ProcessRunner:
        return self._runner

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    @classmethod
    def clone(
        cls,
        uri: str,
        path: str | Path,
        depth: int | None = None,
        runner: ProcessRunner | None = None,
    ) -> "Repository":
        """Clone ``uri`` into ``path`` and return the new repository.

        Raises:
            CommandNotInstalled: git could not be started.
            CommandFailed: ``git clone`` exited with a non-zero status. A
                partially created directory is left in place.
        """
        runner = runner or default_runner()
        destination = Path(path).expanduser().resolve()

        args = ["clone"]
        if depth is not None:
            if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
                raise ValidationError(
                    f"clone depth must be a positive integer: {depth!r}",
                    details={"depth": depth},
                )
            args.extend(["--depth", str(depth)])
        args.extend([str(uri), str(destination)])

        logger.debug("Cloning repository", uri=str(uri), path=str(destination), depth=depth)
        _check_result(runner.run(args))

        return cls(destination, runner=runner)

    @classmethod
    def install(
        cls,
        uri: str,
        path: str | Path,
        branch: str | None = None,
        tag: str | None = None,
        **clone_kwargs,
    ) -> "Repository":
        """Clone a repository and optionally check out a branch or tag.

        The branch wins when both ``branch`` and ``tag`` are given. Errors from
        either step propagate unchanged and nothing is rolled back.
        """
        repo = cls.clone(uri, path, **clone_kwargs)

        ref = branch or tag
        if ref:
            repo.checkout(ref)

        return repo

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _git(self, *args: str) -> ProcessResult:
        """Run git inside the repository directory."""
        return self._runner.run(list(args), cwd=self._path)

    def url(self) -> str:
        """The URL of the ``origin`` remote."""
        result = _check_result(self._git("remote", "get-url", "origin"))
        return result.stdout.strip()

    def last_updated_at(self) -> datetime | None:
        """Committer date of the most recent commit.

        Returns ``None`` for a repository that has no commits yet.
        """
        result = self._git("log", "--date=iso8601-strict", "--pretty=format:%cd", "-1")

        if result.returncode not in (None, 0) and _NO_COMMITS_RE.search(result.stderr):
            return None
        _check_result(result)

        output = result.stdout.strip()
        if not output:
            return None

        try:
            return datetime.fromisoformat(re.sub(r"Z$", "+00:00", output))
        except ValueError as e:
            raise RepositoryError(
                f"unable to parse commit date from git log: {output!r}",
                details={"path": str(self._path), "output": output},
            ) from e

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def pull(
        self, remote: str = "origin", branch: str | None = None, tags: bool = False
    ) -> None:
        """Pull new commits (and optionally tags) from ``remote``."""
        args = ["pull"]
        if tags:
            args.append("--tags")
        args.append(str(remote))
        if branch:
            args.append(str(branch))

        logger.debug("Pulling repository", name=self._name, remote=remote, branch=branch, tags=tags)
        _check_result(self._git(*args))

    def checkout(self, branch_or_tag: str) -> None:
        """Check out a branch or tag."""
        logger.debug("Checking out ref", name=self._name, ref=branch_or_tag)
        _check_result(self._git("checkout", str(branch_or_tag)))

    def update(
        self, branch: str | None = None, tag: str | None = None, **pull_kwargs
    ) -> None:
        """Pull the repository and optionally switch to a branch or tag.

        Tags are fetched only when no branch is targeted, so that a following
        tag checkout can find the tag.
        """
        self.pull(branch=branch, tags=branch is None, **pull_kwargs)

        ref = branch or tag
        if ref:
            self.checkout(ref)

    def delete(self) -> None:
        """Remove the repository directory. Missing directories are ignored."""
        if not os.path.lexists(self._path):
            return

        logger.debug("Deleting repository", name=self._name, path=str(self._path))
        remove_tree(self._path)

    # ------------------------------------------------------------------
    # Content lookup
    # ------------------------------------------------------------------

    def join(self, relative_path: str | Path) -> Path:
        """Absolute path of ``relative_path`` inside the repository.

        Leading separators are dropped, so ``"/a/b"`` is treated as ``"a/b"``.
        """
        relative = str(relative_path).lstrip("/" + os.sep)
        return self._path / relative if relative else self._path

    def has_file(self, relative_path: str | Path) -> bool:
        return self.join(relative_path).is_file()

    def has_directory(self, relative_path: str | Path) -> bool:
        return self.join(relative_path).is_dir()

    def find_file(self, relative_path: str | Path) -> Path | None:
        """Absolute path of the file, or ``None`` if it is not a regular file.

        Example:
            >>> repo.find_file("wordlists/cities.txt")
            PosixPath('/home/user/.cache/repo-cache/foo/wordlists/cities.txt')
        """
        path = self.join(relative_path)
        return path if path.is_file() else None

    def _relative_matches(self, pattern: str) -> Iterator[str]:
        pattern = pattern.lstrip("/" + os.sep)
        if not pattern:
            return iter(())
        return _glob.iglob(pattern, root_dir=self._path, recursive=True)

    def iglob(self, pattern: str) -> Iterator[Path]:
        """Lazily yield absolute paths matching ``pattern``."""
        for match in self._relative_matches(pattern):
            yield self._path / match

    def glob(self, pattern: str) -> list[Path]:
        """Absolute paths of everything matching ``pattern``, sorted.

        Example:
            >>> repo.glob("wordlists/*.txt")
            [PosixPath('.../foo/wordlists/cities.txt'), PosixPath('.../foo/wordlists/states.txt')]
        """
        return sorted(self.iglob(pattern))

    def list_files(self, pattern: str = DEFAULT_LIST_PATTERN) -> list[str]:
        """Paths matching ``pattern``, relative to the repository root."""
        return sorted(self._relative_matches(pattern))

    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Repository(name={self._name!r}, path={str(self._path)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Repository):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)


def open_repository(path: str | Path, runner: ProcessRunner | None = None) -> Repository:
    """Open an existing repository directory."""
    return Repository(path, runner=runner)

