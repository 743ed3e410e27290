"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from release_changelog.utils.constants import DEFAULT_RELEASE_CONFIG_PATH


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # GitHub API settings
    GITHUB_API_URL: str = "https://api.github.com"
    REPO: str | None = None
    # Set by GitHub Actions; used when REPO is not set
    GITHUB_REPOSITORY: str | None = None

    # GitHub PAT settings
    GITHUB_PAT_TOKEN: str | None = None

    # GitHub App settings
    GITHUB_APP_ID: int | None = None
    GITHUB_APP_PRIVATE_KEY_PATH: Path | None = None
    GITHUB_APP_INSTALLATION_ID: int | None = None

    # Release event settings
    GITHUB_EVENT_PATH: Path | None = None
    RELEASE_CONFIG_PATH: str = DEFAULT_RELEASE_CONFIG_PATH


settings = Settings()
