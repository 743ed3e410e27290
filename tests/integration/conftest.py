"""Pytest configuration for integration tests."""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv
from githubkit import GitHub

from release_changelog.github.adapter import GitHubKitAdapter


@pytest.fixture(autouse=True, scope="session")
def load_env() -> None:
    """Load environment variables from .env.integration, then .env, before running integration tests.

    Values from .env.integration take precedence over .env.
    """
    project_root = Path(__file__).parent.parent.parent

    integration_env = project_root / ".env.integration"
    if integration_env.exists():
        load_dotenv(dotenv_path=integration_env)

    default_env = project_root / ".env"
    if default_env.exists():
        load_dotenv(dotenv_path=default_env)

    required_vars = ["REPO", "GITHUB_PAT_TOKEN"]
    missing_vars = [var for var in required_vars if not os.getenv(var)]
    if missing_vars:
        raise ValueError(
            f"Missing required environment variables: {', '.join(missing_vars)}. Please ensure they are set in either .env.integration or .env"
        )


@pytest.fixture
def github_adapter() -> GitHubKitAdapter:
    """Provide an adapter for the integration repository, authenticated with a PAT."""
    owner, repo_name = os.environ["REPO"].strip("/").split("/")
    return GitHubKitAdapter(GitHub(os.environ["GITHUB_PAT_TOKEN"]), owner, repo_name)
