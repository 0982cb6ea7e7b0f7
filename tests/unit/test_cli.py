"""Tests for the command line interface."""

import pytest
from click.testing import CliRunner

from repo_cache import cli as cli_module
from repo_cache.cli import cli
from repo_cache.registry.cache_dir import CacheDir
from repo_cache.services.repositories import RepositoryService
from tests.fakes import FakeRunner


@pytest.fixture
def service(cache_dir: CacheDir, monkeypatch: pytest.MonkeyPatch) -> RepositoryService:
    service = RepositoryService(cache_dir)
    monkeypatch.setattr(cli_module, "_create_service", lambda cache_dir=None: service)
    return service


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.mark.unit
class TestCli:
    """Tests for the repo-cache commands."""

    def test_list(self, runner: CliRunner, service: RepositoryService) -> None:
        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["alpha", "beta"]

    def test_install(
        self, runner: CliRunner, service: RepositoryService, fake_runner: FakeRunner
    ) -> None:
        result = runner.invoke(
            cli, ["install", "https://github.com/org/gamma.git", "--branch", "dev"]
        )
        assert result.exit_code == 0
        assert "Installing repository from https://github.com/org/gamma.git" in result.output
        assert "Installed gamma into" in result.output
        assert fake_runner.subcommands == ["clone", "checkout"]

    def test_install_existing(self, runner: CliRunner, service: RepositoryService) -> None:
        result = runner.invoke(cli, ["install", "https://github.com/org/alpha.git"])
        assert result.exit_code == 1
        assert "Error: repository already exists: 'alpha'" in result.output

    def test_install_rejects_zero_depth(self, runner: CliRunner, service: RepositoryService) -> None:
        result = runner.invoke(cli, ["install", "https://github.com/org/gamma.git", "--depth", "0"])
        assert result.exit_code == 2

    def test_install_git_missing(
        self, runner: CliRunner, service: RepositoryService, fake_runner: FakeRunner
    ) -> None:
        fake_runner.missing = True
        result = runner.invoke(cli, ["install", "https://github.com/org/gamma.git"])
        assert result.exit_code == 1
        assert "Error: git is not installed" in result.output

    def test_update_all(self, runner: CliRunner, service: RepositoryService) -> None:
        result = runner.invoke(cli, ["update"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["Updated alpha", "Updated beta"]

    def test_update_nothing_installed(self, runner: CliRunner, service: RepositoryService) -> None:
        service.purge()
        result = runner.invoke(cli, ["update"])
        assert result.exit_code == 0
        assert "No repositories installed." in result.output

    def test_update_failure(
        self, runner: CliRunner, service: RepositoryService, fake_runner: FakeRunner
    ) -> None:
        fake_runner.respond("pull", returncode=1, stderr="fatal: no remote")
        result = runner.invoke(cli, ["update", "alpha"])
        assert result.exit_code == 1
        assert "Error: command failed: git pull --tags origin" in result.output

    def test_remove(self, runner: CliRunner, service: RepositoryService) -> None:
        result = runner.invoke(cli, ["remove", "alpha"])
        assert result.exit_code == 0
        assert "Removed alpha" in result.output
        assert service.registry.names() == ["beta"]

    def test_remove_unknown(self, runner: CliRunner, service: RepositoryService) -> None:
        result = runner.invoke(cli, ["remove", "gamma"])
        assert result.exit_code == 1
        assert "Error: repository not found: 'gamma'" in result.output

    def test_purge_requires_confirmation(
        self, runner: CliRunner, service: RepositoryService
    ) -> None:
        result = runner.invoke(cli, ["purge"], input="n\n")
        assert result.exit_code == 1
        assert service.registry.names() == ["alpha", "beta"]

    def test_purge(self, runner: CliRunner, service: RepositoryService) -> None:
        result = runner.invoke(cli, ["purge", "--yes"])
        assert result.exit_code == 0
        assert "Purged all repositories." in result.output
        assert service.registry.names() == []

    def test_show(
        self, runner: CliRunner, service: RepositoryService, fake_runner: FakeRunner
    ) -> None:
        fake_runner.respond("remote", stdout="https://github.com/org/alpha.git\n")
        fake_runner.respond("log", stdout="2024-01-02T03:04:05+00:00")

        result = runner.invoke(cli, ["show", "alpha"])
        assert result.exit_code == 0
        assert "Name:         alpha" in result.output
        assert "URL:          https://github.com/org/alpha.git" in result.output
        assert "Last updated: 2024-01-02T03:04:05+00:00" in result.output

    def test_show_without_origin_or_commits(
        self, runner: CliRunner, service: RepositoryService, fake_runner: FakeRunner
    ) -> None:
        fake_runner.respond("remote", returncode=2, stderr="error: No such remote 'origin'")
        fake_runner.respond(
            "log",
            returncode=128,
            stderr="fatal: your current branch 'main' does not have any commits yet",
        )

        result = runner.invoke(cli, ["show", "beta"])
        assert result.exit_code == 0
        assert "URL:          N/A" in result.output
        assert "Last updated: never" in result.output
