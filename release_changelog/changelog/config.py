"""Load the changelog configuration of a repository and apply defaults."""

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError
from ruamel.yaml import YAMLError

from ..utils.constants import CHANGELOG_CONFIG_KEY, DEFAULT_RELEASE_CONFIG_PATH
from ..utils.yaml import load_yaml_string
from .exceptions import InvalidChangelogConfigurationError
from .models import (
    ChangelogConfig,
    ChangelogSections,
    PartialChangelogConfig,
    PartialChangelogSections,
)

if TYPE_CHECKING:
    from ..github.abc import GitHubClientBase

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def merge_changelog_config(partial: PartialChangelogConfig | None) -> ChangelogConfig:
    """Fill the fields missing from a configured changelog block with defaults.

    An empty section label counts as missing. An explicitly configured
    ignore-list is kept as is, even when empty.
    """
    defaults = ChangelogConfig()
    if partial is None:
        return defaults

    sections = partial.sections or PartialChangelogSections()
    return ChangelogConfig(
        sections=ChangelogSections(
            security=sections.security or defaults.sections.security,
            features=sections.features or defaults.sections.features,
            bugfixes=sections.bugfixes or defaults.sections.bugfixes,
        ),
        ignored_labels=frozenset(partial.ignored_labels) if partial.ignored_labels is not None else defaults.ignored_labels,
    )


def parse_changelog_config(content: str | None, path: str = DEFAULT_RELEASE_CONFIG_PATH) -> ChangelogConfig:
    """Parse the content of a configuration file into an effective changelog configuration."""
    if content is None:
        return merge_changelog_config(None)

    try:
        data: Any = load_yaml_string(content)
    except YAMLError as exc:
        raise InvalidChangelogConfigurationError(path, f"not valid YAML ({exc})") from exc

    if data is None:
        return merge_changelog_config(None)
    if not isinstance(data, dict):
        raise InvalidChangelogConfigurationError(path, "top level is not a mapping")

    block = data.get(CHANGELOG_CONFIG_KEY)
    if block is None:
        return merge_changelog_config(None)

    try:
        partial = PartialChangelogConfig.model_validate(block)
    except ValidationError as exc:
        raise InvalidChangelogConfigurationError(path, str(exc)) from exc
    return merge_changelog_config(partial)


async def load_changelog_config(client: "GitHubClientBase", path: str = DEFAULT_RELEASE_CONFIG_PATH) -> ChangelogConfig:
    """Load the changelog configuration from the repository's default branch.

    A missing configuration file yields the default configuration.
    """
    content = await client.get_file_content(path)
    if content is None:
        logger.info("No changelog configuration found, using defaults", path=path)
    config = parse_changelog_config(content, path)
    logger.debug(
        "Loaded changelog configuration",
        path=path,
        sections=config.sections.model_dump(),
        ignored_labels=sorted(config.ignored_labels),
    )
    return config
