"""Git integration module for repo-cache."""

from repo_cache.git.repository import Repository, open_repository
from repo_cache.git.runner import ProcessRunner, SubprocessRunner

__all__ = ["Repository", "open_repository", "ProcessRunner", "SubprocessRunner"]
