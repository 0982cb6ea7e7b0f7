"""Pytest configuration and fixtures."""

import shutil
import subprocess
from pathlib import Path

import pytest

from repo_cache.git.repository import Repository
from repo_cache.registry.cache_dir import CacheDir
from tests.fakes import FakeRunner

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """An empty directory standing in for an installed repository."""
    path = tmp_path / "cache" / "foo"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def repo(repo_dir: Path, fake_runner: FakeRunner) -> Repository:
    return Repository(repo_dir, runner=fake_runner)


@pytest.fixture
def cache_dir(tmp_path: Path, fake_runner: FakeRunner) -> CacheDir:
    """A cache root with two installed repositories."""
    root = tmp_path / "cache"
    for name, files in {
        "alpha": {"wordlists/cities.txt": "paris\n", "README.md": "# alpha\n"},
        "beta": {"wordlists/states.txt": "ohio\n", "README.md": "# beta\n"},
    }.items():
        for relative, content in files.items():
            path = root / name / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
    return CacheDir(root, runner=fake_runner)


def _git(*args: str, cwd: Path) -> None:
    subprocess.run(["git", *args], cwd=cwd, capture_output=True, check=True)


@pytest.fixture
def git_origin(tmp_path: Path) -> Path:
    """A local git repository with a ``dev`` branch and a ``v1.0`` tag."""
    origin = tmp_path / "origin" / "plugins"
    origin.mkdir(parents=True)

    _git("init", cwd=origin)
    _git("config", "user.email", "test@test.com", cwd=origin)
    _git("config", "user.name", "Test", cwd=origin)

    (origin / "wordlists").mkdir()
    (origin / "wordlists" / "cities.txt").write_text("paris\nberlin\n")
    (origin / "README.md").write_text("# Plugins\n")
    _git("add", ".", cwd=origin)
    _git("commit", "-m", "Initial commit", cwd=origin)
    _git("tag", "v1.0", cwd=origin)

    _git("checkout", "-b", "dev", cwd=origin)
    (origin / "wordlists" / "states.txt").write_text("ohio\n")
    _git("add", ".", cwd=origin)
    _git("commit", "-m", "Add states", cwd=origin)
    _git("checkout", "-", cwd=origin)

    return origin
