"""Look up which releases contain a commit.

GitHub's web UI renders the tags containing a commit in an HTML fragment
served from ``/<owner>/<repo>/branch_commits/<sha>``. There is no REST
equivalent, so the release tag links are scraped from that fragment.
"""

import httpx
import structlog

from release_changelog.changelog.exceptions import SourceUnavailableError
from release_changelog.utils.constants import release_tag_link_regex
from release_changelog.utils.github import split_repository_in_configuration, web_url_for_api_url

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def parse_release_tags(html: str, repo: str) -> list[str]:
    """Return the unique release tags linked from a branch_commits fragment, in order of appearance."""
    tags: list[str] = []
    for match in release_tag_link_regex(repo).finditer(html):
        tag = match.group(1)
        if tag not in tags:
            tags.append(tag)
    return tags


async def fetch_releases_for_commit(
    repo: str,
    sha: str,
    github_api_url: str = "https://api.github.com",
    client: httpx.AsyncClient | None = None,
) -> list[str]:
    """Fetch the tags of the releases whose history contains a commit.

    Raises:
        SourceUnavailableError: If the fragment cannot be fetched.
    """
    owner, repo_name = await split_repository_in_configuration(repo)
    repo = f"{owner}/{repo_name}"
    url = f"{web_url_for_api_url(github_api_url)}/{repo}/branch_commits/{sha}"
    logger.debug("Fetching releases for commit", url=url, sha=sha)

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=30.0) as new_client:
                resp = await new_client.get(url)
        else:
            resp = await client.get(url)
        resp.raise_for_status()
    except (httpx.HTTPStatusError, httpx.TransportError) as exc:
        raise SourceUnavailableError("branch commits", str(exc)) from exc

    tags = parse_release_tags(resp.text, repo)
    logger.info("Found releases for commit", sha=sha, tags=tags)
    return tags
