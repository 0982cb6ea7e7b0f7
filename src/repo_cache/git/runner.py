"""Process runner used to drive the git CLI."""

import os
import subprocess
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

import structlog

from repo_cache.core.models.process import ProcessResult

logger = structlog.get_logger(__name__)


def _untranslated_env() -> dict[str, str]:
    """Current environment with git messages forced to untranslated English."""
    env = dict(os.environ)
    env.pop("LANGUAGE", None)
    env["LC_ALL"] = "C"
    return env


@runtime_checkable
class ProcessRunner(Protocol):
    """Runs one external command and reports how it ended."""

    def run(
        self, args: Sequence[str], cwd: str | Path | None = None
    ) -> ProcessResult: ...


class SubprocessRunner:
    """Runs the git executable through subprocess.

    Arguments are always passed as a vector (never through a shell) and the
    working directory is handed to the child process, so the current directory
    of this process is left untouched. Git runs in the C locale so that its
    diagnostics can be matched regardless of the user's language.
    """

    def __init__(self, executable: str = "git") -> None:
        self._executable = executable

    @property
    def executable(self) -> str:
        return self._executable

    def run(
        self, args: Sequence[str], cwd: str | Path | None = None
    ) -> ProcessResult:
        argv = [self._executable, *(str(arg) for arg in args)]
        logger.debug("Running command", args=argv, cwd=str(cwd) if cwd else None)

        try:
            completed = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
                env=_untranslated_env(),
            )
        except OSError as e:
            if cwd is not None and not Path(cwd).is_dir():
                # The working directory is missing, not the executable.
                raise
            logger.debug(
                "Executable could not be started",
                executable=self._executable,
                error=str(e),
            )
            return ProcessResult(args=argv, returncode=None)

        if completed.returncode != 0:
            logger.debug(
                "Command exited with non-zero status",
                args=argv,
                returncode=completed.returncode,
                stderr=completed.stderr.strip(),
            )

        return ProcessResult(
            args=argv,
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
