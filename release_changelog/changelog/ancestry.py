"""Resolve the boundary commits of a release by walking its commit ancestry.

History is only available as a paginated listing of commits reachable from a
starting commit, newest first. The walk therefore stops as soon as both
boundaries are known, and every visited commit is cached so that later walks
from other starting points never re-read history that was already seen.
"""

from typing import AsyncIterator, Callable, Iterable

import structlog

from .commit_cache import CommitCache
from .exceptions import UnresolvedBoundaryError
from .linearize import build_range
from .models import ChangeRange, Commit, ResolvedBoundaries
from .pagination import walk_pages
from .release_index import ReleaseIndex

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

CommitHistorySource = Callable[[str], AsyncIterator[list[Commit]]]


async def resolve_boundaries(
    history_source: CommitHistorySource,
    start_commit_id: str,
    commit_cache: CommitCache,
    release_index: ReleaseIndex,
    target_boundary_id: str,
) -> ResolvedBoundaries | None:
    """Find the boundary commit of a release and of the nearest earlier release.

    Args:
        history_source: Returns the pages of commits reachable from a commit.
        start_commit_id: Commit to start walking from.
        commit_cache: Commits visited so far in this run; extended in place.
        release_index: Releases keyed by boundary commit.
        target_boundary_id: Boundary commit of the release being documented.

    Returns:
        The resolved boundaries, or None if ``start_commit_id`` was already
        visited, in which case no page is requested.

    Raises:
        UnresolvedBoundaryError: If the walk ends without reaching ``target_boundary_id``.
    """
    if start_commit_id in commit_cache:
        logger.debug("Start commit already visited, skipping", start_commit_id=start_commit_id)
        return None

    # Most recent release seen walking towards the past. When the target commit
    # is reached this is the release actually responsible for it.
    nearest_release_seen = start_commit_id
    release_boundary_id: str | None = None
    parent_release_boundary_id: str | None = None

    def visit(commits: list[Commit]) -> bool:
        nonlocal nearest_release_seen, release_boundary_id, parent_release_boundary_id
        for commit in commits:
            if commit.id in commit_cache:
                # Its whole ancestry was visited by an earlier walk.
                return True
            commit_cache.add(commit)
            if commit.id == target_boundary_id:
                release_boundary_id = nearest_release_seen
            elif commit.id in release_index:
                nearest_release_seen = commit.id
                if release_boundary_id is not None:
                    if commit.id != release_boundary_id:
                        parent_release_boundary_id = commit.id
                    return True
        return False

    await walk_pages(history_source(start_commit_id), visit)

    if release_boundary_id is None:
        raise UnresolvedBoundaryError(target_boundary_id)

    logger.info(
        "Resolved release boundaries",
        start_commit_id=start_commit_id,
        release_boundary_id=release_boundary_id,
        parent_release_boundary_id=parent_release_boundary_id,
        visited_commit_count=len(commit_cache),
    )
    return ResolvedBoundaries(release_boundary_id=release_boundary_id, parent_release_boundary_id=parent_release_boundary_id)


async def resolve_change_range(
    history_source: CommitHistorySource,
    release_index: ReleaseIndex,
    target_boundary_id: str,
    start_commit_ids: Iterable[str],
) -> ChangeRange:
    """Resolve and linearize the commits introduced by a release.

    Starting points are tried in order; those already visited are skipped and
    the first one that resolves determines the range. A fresh commit cache is
    used for every call.
    """
    commit_cache = CommitCache()
    for start_commit_id in start_commit_ids:
        boundaries = await resolve_boundaries(history_source, start_commit_id, commit_cache, release_index, target_boundary_id)
        if boundaries is None:
            continue
        commit_ids = build_range(commit_cache, boundaries.release_boundary_id, boundaries.parent_release_boundary_id)
        return ChangeRange(boundaries=boundaries, commit_ids=commit_ids)
    raise UnresolvedBoundaryError(target_boundary_id)
