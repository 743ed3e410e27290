"""Linearize the commit range between two release boundaries."""

import structlog

from .commit_cache import CommitCache
from .exceptions import NonLinearRangeError, UnresolvedBoundaryError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def build_range(commit_cache: CommitCache, release_boundary_id: str, parent_release_boundary_id: str | None) -> list[str]:
    """Return the commits from the newer boundary (inclusive) to the older boundary (exclusive).

    The first-parent chain is followed from ``release_boundary_id``. When
    ``parent_release_boundary_id`` is None the chain runs to the root commit.

    Raises:
        NonLinearRangeError: If a commit in the range has more than one parent.
        UnresolvedBoundaryError: If the chain leaves the visited history before
            reaching the older boundary.
    """
    commit_ids: list[str] = []
    current_id: str | None = release_boundary_id
    while current_id is not None and current_id != parent_release_boundary_id:
        commit = commit_cache.get(current_id)
        if commit is None:
            raise UnresolvedBoundaryError(
                parent_release_boundary_id or release_boundary_id,
                f"Commit {current_id} was not visited while resolving the range ending at {release_boundary_id}",
            )
        commit_ids.append(commit.id)
        if len(commit.parent_ids) > 1:
            raise NonLinearRangeError(commit.id, commit.parent_ids)
        current_id = commit.parent_ids[0] if commit.parent_ids else None

    if current_id is None and parent_release_boundary_id is not None:
        raise UnresolvedBoundaryError(
            parent_release_boundary_id,
            f"Reached the root commit before the previous release boundary {parent_release_boundary_id}",
        )

    logger.debug(
        "Built commit range",
        release_boundary_id=release_boundary_id,
        parent_release_boundary_id=parent_release_boundary_id,
        commit_count=len(commit_ids),
    )
    return commit_ids
