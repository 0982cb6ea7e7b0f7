"""CLI for repo-cache."""

import functools
import sys

import click
import structlog

from repo_cache.config.logging import configure_logging
from repo_cache.core.exceptions import RepoCacheError

logger = structlog.get_logger(__name__)


def _create_service(cache_dir: str | None = None):
    """Create the repository service for the configured cache directory."""
    from repo_cache.config.settings import get_settings
    from repo_cache.git.runner import SubprocessRunner
    from repo_cache.registry.cache_dir import CacheDir
    from repo_cache.services.repositories import RepositoryService

    settings = get_settings()
    registry = CacheDir(
        root=cache_dir or settings.cache_dir,
        runner=SubprocessRunner(settings.git_executable),
    )
    return RepositoryService(registry)


def handle_errors(func):
    """Report library errors as ``Error: ...`` and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except RepoCacheError as e:
            logger.debug("Command failed", error=e.message, details=e.details)
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)

    return wrapper


@click.group()
@click.option(
    "--cache-dir",
    "-C",
    type=click.Path(file_okay=False),
    help="Cache directory holding the repositories",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
@handle_errors
def cli(ctx: click.Context, cache_dir: str | None, verbose: bool) -> None:
    """repo-cache: manage a local cache of third-party git repositories."""
    from repo_cache.config.settings import get_settings

    settings = get_settings()
    log_level = "DEBUG" if verbose else settings.log_level
    configure_logging(log_level=log_level, json_logs=settings.json_logs)

    ctx.ensure_object(dict)
    ctx.obj["cache_dir"] = cache_dir


@cli.command()
@click.argument("uri")
@click.option("--name", "-n", help="Repository name (default: derived from URI)")
@click.option("--branch", "-b", help="Branch to check out after cloning")
@click.option("--tag", "-t", help="Tag to check out after cloning")
@click.option("--depth", "-d", type=click.IntRange(min=1), help="Shallow clone depth")
@click.pass_context
@handle_errors
def install(
    ctx: click.Context,
    uri: str,
    name: str | None,
    branch: str | None,
    tag: str | None,
    depth: int | None,
) -> None:
    """Install a repository from a git URI."""
    service = _create_service(ctx.obj["cache_dir"])

    click.echo(f"Installing repository from {uri} ...")
    repo = service.install(uri, name=name, branch=branch, tag=tag, depth=depth)
    click.echo(f"Installed {repo.name} into {repo.path}")


@cli.command()
@click.argument("name", required=False)
@click.option("--branch", "-b", help="Branch to update from")
@click.option("--tag", "-t", help="Tag to update to")
@click.pass_context
@handle_errors
def update(
    ctx: click.Context, name: str | None, branch: str | None, tag: str | None
) -> None:
    """Update one repository, or all of them."""
    service = _create_service(ctx.obj["cache_dir"])

    repos = service.update(name, branch=branch, tag=tag)
    if not repos:
        click.echo("No repositories installed.")
        return
    for repo in repos:
        click.echo(f"Updated {repo.name}")


@cli.command()
@click.argument("name")
@click.pass_context
@handle_errors
def remove(ctx: click.Context, name: str) -> None:
    """Remove an installed repository."""
    service = _create_service(ctx.obj["cache_dir"])

    repo = service.remove(name)
    click.echo(f"Removed {repo.name}")


@cli.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@handle_errors
def purge(ctx: click.Context, yes: bool) -> None:
    """Delete every installed repository."""
    service = _create_service(ctx.obj["cache_dir"])

    if not yes:
        click.confirm(
            f"Delete all repositories in {service.registry.root}?", abort=True
        )
    service.purge()
    click.echo("Purged all repositories.")


@cli.command(name="list")
@click.pass_context
@handle_errors
def list_command(ctx: click.Context) -> None:
    """List installed repositories."""
    service = _create_service(ctx.obj["cache_dir"])

    for name in service.registry.names():
        click.echo(name)


@cli.command()
@click.argument("name")
@click.pass_context
@handle_errors
def show(ctx: click.Context, name: str) -> None:
    """Show details about an installed repository."""
    service = _create_service(ctx.obj["cache_dir"])

    info = service.show(name)
    last_updated = info.last_updated_at.isoformat() if info.last_updated_at else "never"
    click.echo(f"Name:         {info.name}")
    click.echo(f"Path:         {info.path}")
    click.echo(f"URL:          {info.url or 'N/A'}")
    click.echo(f"Last updated: {last_updated}")


if __name__ == "__main__":
    cli()
