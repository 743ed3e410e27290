"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import logging
import sys
from pathlib import Path

import structlog
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from release_changelog.changelog.driver import run_handle_release_workflow
from release_changelog.changelog.exceptions import ChangelogGenerationError
from release_changelog.changelog.models import ChangelogStatus
from release_changelog.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    RequiredConfigurationElementError,
)
from release_changelog.configuration.reconcile import reconcile_handle_release_configuration
from release_changelog.github.branch_commits import fetch_releases_for_commit

load_dotenv()

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


def configure_logging(debug: bool) -> None:
    """Configure structlog to write to stderr, at debug level when requested."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


@typer_app.command(name="handle-release")
def handle_release_cli(
    event_path: Annotated[
        Path | None,
        Argument(envvar="GITHUB_EVENT_PATH", help="Path to the JSON payload of the release event."),
    ] = None,
    repo: Annotated[str | None, Option(envvar="REPO", help="Repository name (owner/repo). Defaults to GITHUB_REPOSITORY.")] = None,
    github_api_url: Annotated[str, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = "https://api.github.com",
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    github_app_id: Annotated[int | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")] = None,
    github_app_private_key_path: Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")] = None,
    github_app_installation_id: Annotated[int | None, Option(envvar="GITHUB_APP_INSTALLATION_ID", help="GitHub App Installation ID.")] = None,
    release_config_path: Annotated[
        str | None,
        Option(envvar="RELEASE_CONFIG_PATH", help="Repository path of the changelog configuration file."),
    ] = None,
    config_file: Annotated[
        Path | None,
        Option("--config-file", help="Local changelog configuration file to use instead of the one in the repository."),
    ] = None,
    dry_run: Annotated[bool, Option("--dry-run", help="Print the changelog instead of updating the release.")] = False,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Generate the changelog of a newly created release and write it into the release body."""
    configure_logging(debug)

    try:
        config = asyncio.run(
            reconcile_handle_release_configuration(
                cli_debug=debug,
                cli_github_api_url=github_api_url,
                cli_github_pat_token=github_pat_token,
                cli_github_app_id=github_app_id,
                cli_github_app_private_key_path=github_app_private_key_path,
                cli_github_app_installation_id=github_app_installation_id,
                cli_repo=repo,
                cli_event_path=event_path,
                cli_release_config_path=release_config_path,
                cli_dry_run=dry_run,
            )
        )
    except (RequiredConfigurationElementError, GitHubAuthenticationConfigurationUndefinedError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    if config_file is not None and not config_file.is_file():
        typer.echo(f"Changelog configuration file not found or not a file: {config_file.absolute()}", err=True)
        raise typer.Exit(1)

    try:
        result = asyncio.run(run_handle_release_workflow(config, changelog_config_file=config_file))
    except (ChangelogGenerationError, RuntimeError, ValueError) as exc:
        logger.error("Changelog generation failed", error=str(exc), error_type=type(exc).__name__)
        typer.echo(f"Failed to generate changelog: {exc}", err=True)
        raise typer.Exit(1) from exc

    if result.status == ChangelogStatus.SKIPPED:
        typer.echo(f"Skipped release {result.release_tag}")
    elif result.status == ChangelogStatus.DRY_RUN:
        typer.echo(result.body)
    else:
        typer.echo(f"Updated release {result.release_tag} with {result.pull_request_count} pull request(s) from {result.commit_count} commit(s)")


@typer_app.command(name="releases-for-commit")
def releases_for_commit_cli(
    sha: Annotated[str, Argument(help="Commit SHA to look up.")],
    repo: Annotated[str, Option(envvar=["REPO", "GITHUB_REPOSITORY"], help="Repository name (owner/repo).")],
    github_api_url: Annotated[str, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = "https://api.github.com",
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """List the tags of the releases that contain a commit."""
    configure_logging(debug)

    try:
        tags = asyncio.run(fetch_releases_for_commit(repo, sha, github_api_url=github_api_url))
    except (ChangelogGenerationError, ValueError) as exc:
        typer.echo(f"Failed to look up releases for commit {sha}: {exc}", err=True)
        raise typer.Exit(1) from exc

    if not tags:
        typer.echo(f"No releases contain commit {sha}")
        return
    for tag in tags:
        typer.echo(tag)


if __name__ == "__main__":
    typer_app()
