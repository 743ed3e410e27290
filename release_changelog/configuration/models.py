"""Reconciled application configuration models."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    PAT = "pat"
    APP = "app"


@dataclass
class BaseConfig:
    """Configuration shared by every command of the release changelog CLI."""

    debug: bool
    github_api_url: str
    github_authentication_type: GitHubAuthenticationType
    github_pat_token: str | None
    github_app_id: int | None
    github_app_private_key_path: Path | None
    github_app_installation_id: int | None
    repo: str


@dataclass
class HandleReleaseConfig(BaseConfig):
    """Configuration for the handle-release command."""

    event_path: Path
    release_config_path: str
    dry_run: bool
