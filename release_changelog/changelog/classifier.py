"""Classify the pull requests merged in a commit range into changelog sections."""

from typing import AsyncIterator, Iterable

import structlog

from .models import ChangelogBuckets, ChangelogConfig, PullRequest
from .pagination import walk_pages

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def bucket_for_pull_request(pull_request: PullRequest, config: ChangelogConfig) -> str | None:
    """Return the bucket a pull request belongs in, or None if it carries an ignored label."""
    if pull_request.labels & config.ignored_labels:
        return None
    # Checked in priority order; the first matching section wins.
    for bucket in ("security", "features", "bugfixes"):
        if getattr(config.sections, bucket) in pull_request.labels:
            return bucket
    return "other"


async def classify(
    pull_request_pages: AsyncIterator[list[PullRequest]],
    commit_range: Iterable[str],
    config: ChangelogConfig,
) -> ChangelogBuckets:
    """Bucket every pull request merged as one of the commits in ``commit_range``."""
    commit_ids = set(commit_range)
    buckets = ChangelogBuckets()
    ignored: int = 0

    def add_page(pull_requests: list[PullRequest]) -> None:
        nonlocal ignored
        for pull_request in pull_requests:
            if pull_request.merge_commit_id is None or pull_request.merge_commit_id not in commit_ids:
                continue
            bucket = bucket_for_pull_request(pull_request, config)
            if bucket is None:
                logger.debug("Ignoring pull request", number=pull_request.number, labels=sorted(pull_request.labels))
                ignored += 1
                continue
            logger.debug("Classified pull request", number=pull_request.number, bucket=bucket)
            getattr(buckets, bucket).append(pull_request)

    await walk_pages(pull_request_pages, add_page)
    logger.info(
        "Classified pull requests",
        security=len(buckets.security),
        features=len(buckets.features),
        bugfixes=len(buckets.bugfixes),
        other=len(buckets.other),
        ignored=ignored,
    )
    return buckets
