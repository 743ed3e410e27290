"""Orchestrates a changelog run for a release event."""

from pathlib import Path

import structlog

from release_changelog.configuration.models import HandleReleaseConfig
from release_changelog.github.adapter import GitHubKitAdapter

from .config import parse_changelog_config
from .event import load_release_event
from .exceptions import InvalidChangelogConfigurationError
from .generator import ReleaseChangelogGenerator
from .models import ChangelogResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def run_handle_release_workflow(config: HandleReleaseConfig, changelog_config_file: Path | None = None) -> ChangelogResult:
    """Run the handle-release workflow: load the event, generate the changelog and publish it.

    When ``changelog_config_file`` is given it is used instead of the
    configuration file stored in the repository.
    """
    event = load_release_event(config.event_path)

    changelog_config = None
    if changelog_config_file is not None:
        logger.info("Using local changelog configuration", path=str(changelog_config_file))
        try:
            content = changelog_config_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InvalidChangelogConfigurationError(str(changelog_config_file), f"cannot be read ({exc})") from exc
        changelog_config = parse_changelog_config(content, str(changelog_config_file))

    github_adapter = await GitHubKitAdapter.create(
        repo=config.repo,
        github_auth_type=config.github_authentication_type,
        github_pat_token=config.github_pat_token,
        github_app_id=config.github_app_id,
        github_app_private_key_path=config.github_app_private_key_path,
        github_app_installation_id=config.github_app_installation_id,
        github_api_url=config.github_api_url,
    )

    generator = ReleaseChangelogGenerator(
        github_adapter,
        release_config_path=config.release_config_path,
        changelog_config=changelog_config,
    )
    return await generator.generate(event, dry_run=config.dry_run)
