"""Fixtures for unit tests."""

from collections import deque
from typing import Any, AsyncIterator, Callable, Generator

import pytest
import structlog

from release_changelog.changelog.models import Commit, PullRequest, Release
from release_changelog.changelog.pagination import paginate
from release_changelog.github.abc import GitHubClientBase


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


class FakeGitHubClient(GitHubClientBase):
    """In-memory GitHub client that records every page it serves."""

    def __init__(
        self,
        releases: list[Release] | None = None,
        commits: list[Commit] | None = None,
        pull_requests: list[PullRequest] | None = None,
        files: dict[str, str] | None = None,
        per_page: int = 2,
    ) -> None:
        """Initialize the fake with the repository content it serves."""
        self.releases = releases or []
        self.commits = {commit.id: commit for commit in commits or []}
        self.pull_requests = pull_requests or []
        self.files = files or {}
        self.per_page = per_page
        self.requested_pages: list[tuple[str, int]] = []
        self.updated_releases: list[tuple[int, str, str]] = []

    def history(self, sha: str) -> list[Commit]:
        """Return the commits reachable from ``sha``, descendants before ancestors."""
        history: list[Commit] = []
        seen: set[str] = set()
        queue = deque([sha])
        while queue:
            commit_id = queue.popleft()
            if commit_id in seen or commit_id not in self.commits:
                continue
            seen.add(commit_id)
            commit = self.commits[commit_id]
            history.append(commit)
            queue.extend(commit.parent_ids)
        return history

    def _listing(self, source: str, items: list[Any]) -> AsyncIterator[list[Any]]:
        async def fetch_page(page: int) -> list[Any]:
            self.requested_pages.append((source, page))
            start = (page - 1) * self.per_page
            return items[start : start + self.per_page]

        return paginate(fetch_page, self.per_page, source=source)

    def pages_requested(self, source: str) -> int:
        """Return how many pages of a source were requested."""
        return sum(1 for requested_source, _ in self.requested_pages if requested_source == source)

    async def get_file_content(self, file_path: str, ref: str | None = None) -> str | None:
        return self.files.get(file_path)

    def iter_release_pages(self, per_page: int = 100) -> AsyncIterator[list[Release]]:
        return self._listing("releases", self.releases)

    async def update_release(self, release_id: int, tag_name: str, body: str) -> Any:
        self.updated_releases.append((release_id, tag_name, body))

    def iter_commit_pages(self, sha: str, per_page: int = 100) -> AsyncIterator[list[Commit]]:
        return self._listing("commits", self.history(sha))

    def iter_closed_pull_request_pages(self, per_page: int = 100) -> AsyncIterator[list[PullRequest]]:
        return self._listing("pull requests", self.pull_requests)


def _linear_commits(*commit_ids: str) -> list[Commit]:
    """Build a linear chain, newest first: each commit's parent is the next one."""
    return [
        Commit(id=commit_id, parent_ids=(commit_ids[index + 1],) if index + 1 < len(commit_ids) else ())
        for index, commit_id in enumerate(commit_ids)
    ]


def _pull_request(number: int, merge_commit_id: str | None, *labels: str) -> PullRequest:
    return PullRequest(
        number=number,
        title=f"Change {number}",
        url=f"https://github.com/octocat/hello-world/pull/{number}",
        merge_commit_id=merge_commit_id,
        labels=frozenset(labels),
    )


@pytest.fixture
def fake_github_client() -> type[FakeGitHubClient]:
    """Provide the in-memory GitHub client class."""
    return FakeGitHubClient


@pytest.fixture
def linear_commits() -> Callable[..., list[Commit]]:
    """Provide a builder of linear commit chains."""
    return _linear_commits


@pytest.fixture
def make_pull_request() -> Callable[..., PullRequest]:
    """Provide a builder of pull requests."""
    return _pull_request
