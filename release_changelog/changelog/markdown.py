"""Markdown rendering for release changelogs."""

from ..utils.constants import CHANGELOG_SECTION_HEADINGS, CHANGELOG_TITLE, NO_RELEASE_NOTES_LINE
from .models import ChangelogBuckets, PullRequest


def format_change_item(pull_request: PullRequest) -> str:
    """Format a pull request as a Markdown bullet linking to it."""
    return f"* {pull_request.title} ([#{pull_request.number}]({pull_request.url}))"


def render_changelog(buckets: ChangelogBuckets) -> str:
    """Render the changelog, one heading per non-empty section in a fixed order."""
    lines = [CHANGELOG_TITLE]
    for bucket, heading in CHANGELOG_SECTION_HEADINGS:
        pull_requests: list[PullRequest] = getattr(buckets, bucket)
        if not pull_requests:
            continue
        lines.append(f"### {heading}")
        lines.extend(format_change_item(pull_request) for pull_request in pull_requests)

    if len(lines) == 1:
        lines.append(NO_RELEASE_NOTES_LINE)

    return "\n".join(lines)
