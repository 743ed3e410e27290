"""Unit tests for reconciling CLI arguments with environment settings."""

from pathlib import Path
from typing import Any, Generator
from unittest.mock import MagicMock, patch

import pytest

from release_changelog.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    RequiredConfigurationElementError,
)
from release_changelog.configuration.models import GitHubAuthenticationType
from release_changelog.configuration.reconcile import (
    reconcile_handle_release_configuration,
    validate_github_authentication_configuration,
)


@pytest.fixture
def env_settings() -> Generator[MagicMock, None, None]:
    """Provide environment settings with nothing configured."""
    with patch("release_changelog.configuration.reconcile.settings") as settings:
        settings.DEBUG = False
        settings.GITHUB_API_URL = "https://api.github.com"
        settings.GITHUB_PAT_TOKEN = None
        settings.GITHUB_APP_ID = None
        settings.GITHUB_APP_PRIVATE_KEY_PATH = None
        settings.GITHUB_APP_INSTALLATION_ID = None
        settings.REPO = None
        settings.GITHUB_REPOSITORY = None
        settings.GITHUB_EVENT_PATH = None
        settings.RELEASE_CONFIG_PATH = ".github/release.yml"
        yield settings


@pytest.mark.asyncio
async def test_validate_pat() -> None:
    """Test that a PAT alone selects PAT authentication."""
    assert await validate_github_authentication_configuration("token", None, None, None) == GitHubAuthenticationType.PAT


@pytest.mark.asyncio
async def test_validate_app() -> None:
    """Test that a complete App configuration selects App authentication."""
    result = await validate_github_authentication_configuration(None, 1, Path("key.pem"), 2)
    assert result == GitHubAuthenticationType.APP


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kwargs,match",
    [
        pytest.param(
            {"github_pat_token": "token", "github_app_id": 1, "github_app_private_key_path": None, "github_app_installation_id": None},
            "Both PAT and GitHub App",
            id="both",
        ),
        pytest.param(
            {"github_pat_token": None, "github_app_id": None, "github_app_private_key_path": None, "github_app_installation_id": None},
            "No GitHub authentication",
            id="neither",
        ),
        pytest.param(
            {"github_pat_token": None, "github_app_id": 1, "github_app_private_key_path": None, "github_app_installation_id": 2},
            "GITHUB_APP_PRIVATE_KEY_PATH",
            id="incomplete app",
        ),
    ],
)
async def test_validate_invalid(kwargs: dict[str, Any], match: str) -> None:
    """Test that ambiguous or missing authentication is rejected."""
    with pytest.raises(GitHubAuthenticationConfigurationUndefinedError, match=match):
        await validate_github_authentication_configuration(**kwargs)


@pytest.mark.asyncio
async def test_reconcile_prefers_cli(env_settings: MagicMock) -> None:
    """Test that CLI arguments take precedence over environment settings."""
    env_settings.GITHUB_PAT_TOKEN = "env-token"
    env_settings.REPO = "env/repo"
    env_settings.GITHUB_EVENT_PATH = Path("env-event.json")

    config = await reconcile_handle_release_configuration(
        cli_github_pat_token="cli-token",
        cli_repo="cli/repo",
        cli_event_path=Path("cli-event.json"),
        cli_release_config_path=".github/changelog.yml",
        cli_dry_run=True,
    )

    assert config.github_pat_token == "cli-token"
    assert config.repo == "cli/repo"
    assert config.event_path == Path("cli-event.json")
    assert config.release_config_path == ".github/changelog.yml"
    assert config.dry_run is True
    assert config.github_authentication_type == GitHubAuthenticationType.PAT


@pytest.mark.asyncio
async def test_reconcile_falls_back_to_actions_environment(env_settings: MagicMock) -> None:
    """Test that the repository and event path default to the GitHub Actions environment."""
    env_settings.GITHUB_PAT_TOKEN = "env-token"
    env_settings.GITHUB_REPOSITORY = "octocat/hello-world"
    env_settings.GITHUB_EVENT_PATH = Path("/github/workflow/event.json")

    config = await reconcile_handle_release_configuration()

    assert config.repo == "octocat/hello-world"
    assert config.event_path == Path("/github/workflow/event.json")
    assert config.release_config_path == ".github/release.yml"
    assert config.github_api_url == "https://api.github.com"
    assert config.debug is False


@pytest.mark.asyncio
async def test_reconcile_requires_repo(env_settings: MagicMock) -> None:
    """Test that a missing repository is reported."""
    env_settings.GITHUB_PAT_TOKEN = "env-token"
    with pytest.raises(RequiredConfigurationElementError, match="--repo"):
        await reconcile_handle_release_configuration(cli_event_path=Path("event.json"))


@pytest.mark.asyncio
async def test_reconcile_requires_event_path(env_settings: MagicMock) -> None:
    """Test that a missing event path is reported."""
    env_settings.GITHUB_PAT_TOKEN = "env-token"
    with pytest.raises(RequiredConfigurationElementError, match="GITHUB_EVENT_PATH"):
        await reconcile_handle_release_configuration(cli_repo="octocat/hello-world")


@pytest.mark.asyncio
async def test_validate_app_without_installation_id() -> None:
    """Test that App authentication requires an installation ID."""
    with pytest.raises(GitHubAuthenticationConfigurationUndefinedError, match="GitHub App installation ID"):
        await validate_github_authentication_configuration(None, 1, Path("key.pem"), None)
