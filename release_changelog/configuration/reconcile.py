"""Reconciles configuration between CLI arguments and environment variables."""

from pathlib import Path
from typing import TypeVar

from release_changelog.configuration.env import settings
from release_changelog.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    RequiredConfigurationElementError,
)
from release_changelog.configuration.models import GitHubAuthenticationType, HandleReleaseConfig

T = TypeVar("T")


def _prefer_cli(cli_value: T | None, env_value: T | None) -> T | None:
    """Return the CLI value if one was given, otherwise the environment value."""
    return cli_value if cli_value is not None else env_value


async def validate_github_authentication_configuration(
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub PAT token.
        github_app_id (int | None): The GitHub App ID.
        github_app_private_key_path (Path | None): The path to the GitHub App private key.
        github_app_installation_id (int | None): The GitHub App installation ID.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If both or neither of the PAT
            and App configurations are defined, or the App configuration is incomplete.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used.
    """
    app_settings = {
        "GitHub App ID": ("github_app_id", "GITHUB_APP_ID", github_app_id),
        "GitHub App private key path": ("github_app_private_key_path", "GITHUB_APP_PRIVATE_KEY_PATH", github_app_private_key_path),
        "GitHub App installation ID": ("github_app_installation_id", "GITHUB_APP_INSTALLATION_ID", github_app_installation_id),
    }
    app_values_set = [bool(value) for _, _, value in app_settings.values()]

    if github_pat_token and any(app_values_set):
        raise GitHubAuthenticationConfigurationUndefinedError("Both PAT and GitHub App configurations are defined. Please use one or the other.")

    if github_pat_token:
        return GitHubAuthenticationType.PAT

    if all(app_values_set):
        return GitHubAuthenticationType.APP

    if any(app_values_set):
        msg = "Incomplete GitHub App configuration - missing settings include " + ", ".join(
            f"{name} (command line option {cli_name}, environment variable {env_name})"
            for name, (cli_name, env_name, value) in app_settings.items()
            if not value
        )
        raise GitHubAuthenticationConfigurationUndefinedError(msg)

    raise GitHubAuthenticationConfigurationUndefinedError(
        "No GitHub authentication configuration provided. Please provide either a PAT or a GitHub App configuration."
    )


async def reconcile_handle_release_configuration(
    cli_debug: bool | None = None,
    cli_github_api_url: str | None = None,
    cli_github_pat_token: str | None = None,
    cli_github_app_id: int | None = None,
    cli_github_app_private_key_path: Path | None = None,
    cli_github_app_installation_id: int | None = None,
    cli_repo: str | None = None,
    cli_event_path: Path | None = None,
    cli_release_config_path: str | None = None,
    cli_dry_run: bool = False,
) -> HandleReleaseConfig:
    """Reconcile CLI arguments with environment settings for the handle-release command.

    CLI arguments take precedence over environment variables.

    Raises:
        RequiredConfigurationElementError: If the repository or event path cannot be determined.
        GitHubAuthenticationConfigurationUndefinedError: If the authentication configuration is invalid.
    """
    github_pat_token = _prefer_cli(cli_github_pat_token, settings.GITHUB_PAT_TOKEN)
    github_app_id = _prefer_cli(cli_github_app_id, settings.GITHUB_APP_ID)
    github_app_private_key_path = _prefer_cli(cli_github_app_private_key_path, settings.GITHUB_APP_PRIVATE_KEY_PATH)
    github_app_installation_id = _prefer_cli(cli_github_app_installation_id, settings.GITHUB_APP_INSTALLATION_ID)

    repo = _prefer_cli(cli_repo, settings.REPO) or settings.GITHUB_REPOSITORY
    if not repo:
        raise RequiredConfigurationElementError(name="Repository", cli_name="--repo", env_name="REPO")

    event_path = _prefer_cli(cli_event_path, settings.GITHUB_EVENT_PATH)
    if event_path is None:
        raise RequiredConfigurationElementError(name="Release event path", cli_name="EVENT_PATH", env_name="GITHUB_EVENT_PATH")

    github_authentication_type = await validate_github_authentication_configuration(
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
    )

    return HandleReleaseConfig(
        debug=bool(_prefer_cli(cli_debug, settings.DEBUG)),
        github_api_url=_prefer_cli(cli_github_api_url, settings.GITHUB_API_URL) or settings.GITHUB_API_URL,
        github_authentication_type=github_authentication_type,
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
        repo=repo,
        event_path=event_path,
        release_config_path=_prefer_cli(cli_release_config_path, settings.RELEASE_CONFIG_PATH) or settings.RELEASE_CONFIG_PATH,
        dry_run=cli_dry_run,
    )
