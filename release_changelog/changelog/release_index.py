"""Index of releases keyed by the commit each release points at."""

from typing import AsyncIterator, Iterator

import structlog

from .models import Release
from .pagination import walk_pages

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class ReleaseIndex:
    """Mapping of boundary commit identifier to the release cut from it."""

    def __init__(self) -> None:
        """Initialize an empty index."""
        self._releases: dict[str, Release] = {}

    def add(self, release: Release) -> None:
        """Add a release, replacing any release already indexed under the same commit."""
        existing = self._releases.get(release.boundary_commit_id)
        if existing is not None and existing.id != release.id:
            logger.warning(
                "Multiple releases point at the same commit, keeping the later one",
                boundary_commit_id=release.boundary_commit_id,
                replaced_tag=existing.tag_name,
                kept_tag=release.tag_name,
            )
        self._releases[release.boundary_commit_id] = release

    def get(self, commit_id: str) -> Release | None:
        """Return the release cut from a commit, if any."""
        return self._releases.get(commit_id)

    def __contains__(self, commit_id: object) -> bool:
        return commit_id in self._releases

    def __len__(self) -> int:
        return len(self._releases)

    def __iter__(self) -> Iterator[str]:
        return iter(self._releases)


async def build_release_index(release_pages: AsyncIterator[list[Release]]) -> ReleaseIndex:
    """Drain every page of releases into a new index."""
    index = ReleaseIndex()

    def add_page(releases: list[Release]) -> None:
        for release in releases:
            index.add(release)

    await walk_pages(release_pages, add_page)
    logger.info("Built release index", release_count=len(index))
    return index
