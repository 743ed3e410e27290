"""GitHub client adapter for the githubkit library."""

import base64
from functools import wraps
from pathlib import Path
from typing import Any, AsyncIterator, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import GitHubException, RequestFailed
from githubkit.versions.latest.models import PullRequestSimple
from githubkit.versions.latest.models import Release as GitHubRelease

from release_changelog.changelog.exceptions import InvalidChangelogConfigurationError, ReleaseUpdateError, SourceUnavailableError
from release_changelog.changelog.models import Commit, PullRequest, Release
from release_changelog.changelog.pagination import paginate
from release_changelog.configuration.models import GitHubAuthenticationType
from release_changelog.utils.constants import DEFAULT_PER_PAGE
from release_changelog.utils.github import split_repository_in_configuration
from release_changelog.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_422(func: F) -> F:
    """Decorator to handle GitHub 422 Unprocessable Entity errors, logging and raising with details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code == 422:
                try:
                    error_data = exc.response.json()
                except Exception:
                    error_data = {}
                message = error_data.get("message", "Unprocessable Entity")
                errors = error_data.get("errors", [])
                logger.error(
                    "GitHub 422 Unprocessable Entity",
                    function=func.__name__,
                    message=message,
                    errors=errors,
                    url=getattr(exc.response, "url", None),
                    status_code=422,
                )
                raise ValueError(
                    f"GitHub 422 error in {func.__name__}: {message} | errors: {errors} | url: {getattr(exc.response, 'url', None)}"
                ) from exc
            raise

    return wrapper  # type: ignore


def source_unavailable_on_error(source: str) -> Callable[[F], F]:
    """Decorator that turns a failed GitHub read into a SourceUnavailableError for ``source``."""

    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except GitHubException as exc:
                logger.error(
                    "Failed to fetch from GitHub",
                    source=source,
                    function=func.__name__,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                raise SourceUnavailableError(source, str(exc)) from exc

        return wrapper  # type: ignore

    return decorator


def release_update_failed_on_error(func: F) -> F:
    """Decorator that turns a rejected or failed release update into a ReleaseUpdateError."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except (GitHubException, ValueError) as exc:
            logger.error("Failed to update release", function=func.__name__, error=str(exc), error_type=type(exc).__name__)
            raise ReleaseUpdateError(str(exc)) from exc

    return wrapper  # type: ignore


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    def _omit_null_parameters(self, **kwargs: Any) -> dict[str, Any]:
        """Omit parameters that are None."""
        return {k: v for k, v in kwargs.items() if v is not None}

    @classmethod
    async def create(
        cls,
        repo: str,
        github_auth_type: GitHubAuthenticationType,
        github_pat_token: str | None = None,
        github_app_id: int | None = None,
        github_app_private_key_path: Path | None = None,
        github_app_installation_id: int | None = None,
        github_api_url: str = "https://api.github.com",
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_auth_type: Type of authentication (PAT or APP)
            github_pat_token: Personal access token (required for PAT auth)
            github_app_id: GitHub App ID (required for APP auth)
            github_app_private_key_path: Path to private key file (required for APP auth)
            github_app_installation_id: Installation ID (required for APP auth)
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance
        """
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = await get_github_client(
            github_auth_type=github_auth_type,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            github_api_url=github_api_url,
        )
        return cls(client, owner, repo_name)

    # Repository content
    @source_unavailable_on_error("configuration")
    @retry_on_rate_limit()
    async def get_file_content(self, file_path: str, ref: str | None = None) -> str | None:
        """Get the content of a file, or None if it does not exist. Defaults to the default branch."""
        params = self._omit_null_parameters(ref=ref)
        try:
            response = await self.client.rest.repos.async_get_content(
                owner=self.owner,
                repo=self.repo_name,
                path=file_path,
                **params,
            )
        except RequestFailed as exc:
            if exc.response.status_code == 404:
                logger.debug("File not found", file_path=file_path, ref=ref)
                return None
            raise
        content = getattr(response.parsed_data, "content", None)
        if content is None:
            # A directory listing or a submodule, not a file
            return None
        try:
            return base64.b64decode(content).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidChangelogConfigurationError(file_path, "not valid UTF-8") from exc

    # Release Operations
    @source_unavailable_on_error("releases")
    @retry_on_rate_limit()
    async def _fetch_release_page(self, page: int, per_page: int) -> list[Release]:
        response: Response[list[GitHubRelease]] = await self.client.rest.repos.async_list_releases(
            owner=self.owner,
            repo=self.repo_name,
            per_page=per_page,
            page=page,
        )
        releases = [Release.from_github(release) for release in response.parsed_data]
        for release in releases:
            logger.debug("Release found", tag_name=release.tag_name, boundary_commit_id=release.boundary_commit_id)
        return releases

    def iter_release_pages(self, per_page: int = DEFAULT_PER_PAGE) -> AsyncIterator[list[Release]]:
        """Iterate over the pages of all releases of the repository."""
        return paginate(lambda page: self._fetch_release_page(page, per_page), per_page, source="releases")

    @release_update_failed_on_error
    @handle_github_422
    async def update_release(self, release_id: int, tag_name: str, body: str) -> GitHubRelease:
        """Replace the body of a release. Not retried."""
        response: Response[GitHubRelease] = await self.client.rest.repos.async_update_release(
            owner=self.owner,
            repo=self.repo_name,
            release_id=release_id,
            tag_name=tag_name,
            body=body,
        )
        logger.info("Updated release body", release_id=release_id, tag_name=tag_name)
        return response.parsed_data

    # Commit Operations
    @source_unavailable_on_error("commits")
    @retry_on_rate_limit()
    async def _fetch_commit_page(self, sha: str, page: int, per_page: int) -> list[Commit]:
        response = await self.client.rest.repos.async_list_commits(
            owner=self.owner,
            repo=self.repo_name,
            sha=sha,
            per_page=per_page,
            page=page,
        )
        # Use raw JSON to avoid Pydantic validation issues with commit verification field
        return [Commit.from_github(commit) for commit in response.json()]

    def iter_commit_pages(self, sha: str, per_page: int = DEFAULT_PER_PAGE) -> AsyncIterator[list[Commit]]:
        """Iterate over the pages of commits reachable from a commit, newest first."""
        return paginate(lambda page: self._fetch_commit_page(sha, page, per_page), per_page, source="commits")

    # Pull Request Operations
    @source_unavailable_on_error("pull requests")
    @retry_on_rate_limit()
    async def _fetch_closed_pull_request_page(self, page: int, per_page: int) -> list[PullRequest]:
        response: Response[list[PullRequestSimple]] = await self.client.rest.pulls.async_list(
            owner=self.owner,
            repo=self.repo_name,
            state="closed",
            per_page=per_page,
            page=page,
        )
        return [PullRequest.from_github(pull_request) for pull_request in response.parsed_data]

    def iter_closed_pull_request_pages(self, per_page: int = DEFAULT_PER_PAGE) -> AsyncIterator[list[PullRequest]]:
        """Iterate over the pages of closed pull requests of the repository."""
        return paginate(lambda page: self._fetch_closed_pull_request_page(page, per_page), per_page, source="pull requests")
