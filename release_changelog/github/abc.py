"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator

from release_changelog.changelog.models import Commit, PullRequest, Release
from release_changelog.utils.constants import DEFAULT_PER_PAGE


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients.

    Listings are returned as lazy async iterators of pages; a page is only
    requested when the consumer advances the iterator.
    """

    # Repository content
    @abstractmethod
    async def get_file_content(self, file_path: str, ref: str | None = None) -> str | None:
        """Get the content of a file, or None if it does not exist. Defaults to the default branch."""
        pass

    # Release Operations
    @abstractmethod
    def iter_release_pages(self, per_page: int = DEFAULT_PER_PAGE) -> AsyncIterator[list[Release]]:
        """Iterate over the pages of all releases of the repository."""
        pass

    @abstractmethod
    async def update_release(self, release_id: int, tag_name: str, body: str) -> Any:
        """Replace the body of a release."""
        pass

    # Commit Operations
    @abstractmethod
    def iter_commit_pages(self, sha: str, per_page: int = DEFAULT_PER_PAGE) -> AsyncIterator[list[Commit]]:
        """Iterate over the pages of commits reachable from a commit, newest first."""
        pass

    # Pull Request Operations
    @abstractmethod
    def iter_closed_pull_request_pages(self, per_page: int = DEFAULT_PER_PAGE) -> AsyncIterator[list[PullRequest]]:
        """Iterate over the pages of closed pull requests of the repository."""
        pass
