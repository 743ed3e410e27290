"""Unit tests for loading the changelog configuration."""

from typing import Any

import pytest

from release_changelog.changelog.config import load_changelog_config, merge_changelog_config, parse_changelog_config
from release_changelog.changelog.exceptions import InvalidChangelogConfigurationError
from release_changelog.changelog.models import ChangelogConfig, ChangelogSections, PartialChangelogConfig


def test_merge_changelog_config_without_block() -> None:
    """Test that a missing changelog block yields the defaults."""
    config = merge_changelog_config(None)
    assert config.sections == ChangelogSections(security="security", features="features", bugfixes="bugfixes")
    assert config.ignored_labels == frozenset({"release"})


def test_merge_changelog_config_partial_sections() -> None:
    """Test that configured section labels override only the sections they name."""
    partial = PartialChangelogConfig.model_validate({"sections": {"features": "enhancement", "bugfixes": ""}})

    config = merge_changelog_config(partial)

    assert config.sections == ChangelogSections(security="security", features="enhancement", bugfixes="bugfixes")
    assert config.ignored_labels == frozenset({"release"})


def test_merge_changelog_config_keeps_empty_ignore_list() -> None:
    """Test that an explicitly empty ignore-list disables ignoring."""
    partial = PartialChangelogConfig.model_validate({"ignoredLabels": []})
    assert merge_changelog_config(partial).ignored_labels == frozenset()


def test_parse_changelog_config_yaml() -> None:
    """Test parsing a full configuration file."""
    content = """
changelog:
  sections:
    security: vulnerability
    features: enhancement
    bugfixes: bug
  ignoredLabels:
    - skip-changelog
    - dependencies
"""
    config = parse_changelog_config(content)

    assert config == ChangelogConfig(
        sections=ChangelogSections(security="vulnerability", features="enhancement", bugfixes="bug"),
        ignored_labels=frozenset({"skip-changelog", "dependencies"}),
    )


@pytest.mark.parametrize(
    "content",
    [
        pytest.param(None, id="missing file"),
        pytest.param("", id="empty file"),
        pytest.param("changelog:\n", id="empty block"),
        pytest.param("other:\n  key: value\n", id="no changelog block"),
    ],
)
def test_parse_changelog_config_defaults(content: str | None) -> None:
    """Test that files without a changelog block yield the defaults."""
    assert parse_changelog_config(content) == ChangelogConfig()


@pytest.mark.parametrize(
    "content",
    [
        pytest.param("changelog: [unclosed", id="invalid yaml"),
        pytest.param("- a\n- b\n", id="top level list"),
        pytest.param("changelog:\n  ignoredLabels: 5\n", id="ignore list not a list"),
        pytest.param("changelog:\n  sections: nope\n", id="sections not a mapping"),
    ],
)
def test_parse_changelog_config_invalid(content: str) -> None:
    """Test that a malformed configuration file is reported with its path."""
    with pytest.raises(InvalidChangelogConfigurationError) as exc_info:
        parse_changelog_config(content, ".github/changelog.yml")
    assert exc_info.value.path == ".github/changelog.yml"


@pytest.mark.asyncio
async def test_load_changelog_config_from_repository(fake_github_client: Any) -> None:
    """Test that the configuration is read from the repository file."""
    client = fake_github_client(files={".github/release.yml": "changelog:\n  sections:\n    security: sec\n"})

    config = await load_changelog_config(client)

    assert config.sections.security == "sec"
    assert config.sections.features == "features"


@pytest.mark.asyncio
async def test_load_changelog_config_missing_file(fake_github_client: Any) -> None:
    """Test that a repository without the configuration file uses the defaults."""
    assert await load_changelog_config(fake_github_client(), ".github/missing.yml") == ChangelogConfig()
