"""Main changelog generation orchestration."""

import time
from typing import TYPE_CHECKING

import structlog

from ..utils.constants import DEFAULT_RELEASE_CONFIG_PATH, HANDLED_RELEASE_ACTIONS
from .ancestry import resolve_change_range
from .classifier import classify
from .config import load_changelog_config
from .markdown import render_changelog
from .models import ChangelogConfig, ChangelogResult, ChangelogStatus, ReleaseEvent
from .release_index import build_release_index

if TYPE_CHECKING:
    from ..github.abc import GitHubClientBase

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class ReleaseChangelogGenerator:
    """Generates the changelog of a release and writes it into the release body.

    Every call to ``generate`` is one self-contained run: the release index and
    commit cache are built from scratch and discarded afterwards. All reads
    happen before the release is updated, so a failed run never leaves a
    partial changelog behind.
    """

    def __init__(
        self,
        client: "GitHubClientBase",
        release_config_path: str = DEFAULT_RELEASE_CONFIG_PATH,
        changelog_config: ChangelogConfig | None = None,
    ) -> None:
        """Initialize with a GitHub client.

        Args:
            client: GitHub client providing the listings and the release update
            release_config_path: Repository path of the changelog configuration file
            changelog_config: Configuration to use instead of loading it from the repository
        """
        self.client = client
        self.release_config_path = release_config_path
        self.changelog_config = changelog_config

    async def generate(self, event: ReleaseEvent, dry_run: bool = False) -> ChangelogResult:
        """Generate the changelog for the release of an event.

        Args:
            event: The release event that triggered the run
            dry_run: If True, render the changelog but don't update the release

        Returns:
            Result of the run

        Raises:
            ChangelogGenerationError: If the changelog cannot be computed. The
                release is left untouched.
        """
        release = event.release
        if event.action not in HANDLED_RELEASE_ACTIONS:
            logger.info("Ignoring release event", action=event.action, tag_name=release.tag_name)
            return ChangelogResult(status=ChangelogStatus.SKIPPED, release_tag=release.tag_name)

        start_time = time.time()
        logger.info("Generating changelog", tag_name=release.tag_name, boundary_commit_id=release.boundary_commit_id)

        release_index = await build_release_index(self.client.iter_release_pages())

        change_range = await resolve_change_range(
            self.client.iter_commit_pages,
            release_index,
            release.boundary_commit_id,
            [release.boundary_commit_id],
        )
        previous_release = None
        if change_range.boundaries.parent_release_boundary_id is not None:
            previous_release = release_index.get(change_range.boundaries.parent_release_boundary_id)
        logger.info(
            "Resolved commit range",
            tag_name=release.tag_name,
            previous_tag_name=previous_release.tag_name if previous_release else None,
            commit_count=len(change_range.commit_ids),
        )

        config = self.changelog_config or await load_changelog_config(self.client, self.release_config_path)
        buckets = await classify(self.client.iter_closed_pull_request_pages(), change_range.commit_ids, config)
        body = render_changelog(buckets)

        result = ChangelogResult(
            status=ChangelogStatus.DRY_RUN if dry_run else ChangelogStatus.SUCCESS,
            release_tag=release.tag_name,
            body=body,
            commit_count=len(change_range.commit_ids),
            pull_request_count=buckets.total(),
        )

        if dry_run:
            logger.info("Dry run mode - not updating release", tag_name=release.tag_name)
            return result

        await self.client.update_release(release.id, release.tag_name, body)
        logger.info(
            "Published changelog",
            tag_name=release.tag_name,
            pull_request_count=result.pull_request_count,
            duration=round(time.time() - start_time, 2),
        )
        return result
