"""Data models for changelog generation."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChangelogStatus(str, Enum):
    """Status of a changelog generation run."""

    SUCCESS = "success"
    DRY_RUN = "dry_run"
    SKIPPED = "skipped"


class Release(BaseModel):
    """A release and the commit it was cut from."""

    model_config = ConfigDict(frozen=True)

    id: int
    tag_name: str
    boundary_commit_id: str
    body: str | None = None

    @classmethod
    def from_github(cls, release: Any) -> "Release":
        """Build a release from a githubkit release model or a raw payload dictionary."""
        if isinstance(release, dict):
            return cls(
                id=release["id"],
                tag_name=release["tag_name"],
                boundary_commit_id=release["target_commitish"],
                body=release.get("body"),
            )
        return cls(
            id=release.id,
            tag_name=release.tag_name,
            boundary_commit_id=release.target_commitish,
            body=release.body,
        )


class Commit(BaseModel):
    """A commit reduced to its identity and ordered parent identifiers."""

    model_config = ConfigDict(frozen=True)

    id: str
    parent_ids: tuple[str, ...] = ()

    @classmethod
    def from_github(cls, commit: dict[str, Any]) -> "Commit":
        """Build a commit from the raw JSON of the list-commits endpoint."""
        return cls(id=commit["sha"], parent_ids=tuple(parent["sha"] for parent in commit.get("parents", [])))


class PullRequest(BaseModel):
    """A closed pull request with the commit it was merged as."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    url: str
    merge_commit_id: str | None = None
    labels: frozenset[str] = frozenset()

    @classmethod
    def from_github(cls, pull_request: Any) -> "PullRequest":
        """Build a pull request from a githubkit simple pull request model."""
        return cls(
            number=pull_request.number,
            title=pull_request.title,
            url=pull_request.html_url,
            merge_commit_id=pull_request.merge_commit_sha,
            labels=frozenset(label.name for label in pull_request.labels if label.name),
        )


class ChangelogSections(BaseModel):
    """Label names that route pull requests into the labelled changelog sections."""

    model_config = ConfigDict(frozen=True)

    security: str = "security"
    features: str = "features"
    bugfixes: str = "bugfixes"


class ChangelogConfig(BaseModel):
    """Effective changelog configuration for one run."""

    model_config = ConfigDict(frozen=True)

    sections: ChangelogSections = Field(default_factory=ChangelogSections)
    ignored_labels: frozenset[str] = frozenset({"release"})


class PartialChangelogSections(BaseModel):
    """Section labels as written in the configuration file; unset fields are None."""

    security: str | None = None
    features: str | None = None
    bugfixes: str | None = None


class PartialChangelogConfig(BaseModel):
    """The ``changelog`` block of the configuration file before defaults are applied."""

    model_config = ConfigDict(populate_by_name=True)

    sections: PartialChangelogSections | None = None
    ignored_labels: list[str] | None = Field(default=None, alias="ignoredLabels")


class ChangelogBuckets(BaseModel):
    """Pull requests grouped by changelog section, each in discovery order."""

    security: list[PullRequest] = Field(default_factory=list)
    features: list[PullRequest] = Field(default_factory=list)
    bugfixes: list[PullRequest] = Field(default_factory=list)
    other: list[PullRequest] = Field(default_factory=list)

    def total(self) -> int:
        """Return the number of classified pull requests."""
        return len(self.security) + len(self.features) + len(self.bugfixes) + len(self.other)


class ResolvedBoundaries(BaseModel):
    """Boundary commits of a release and of the release preceding it."""

    model_config = ConfigDict(frozen=True)

    release_boundary_id: str
    parent_release_boundary_id: str | None = None


class ChangeRange(BaseModel):
    """Linearized commits introduced by a release, newest first."""

    boundaries: ResolvedBoundaries
    commit_ids: list[str] = Field(default_factory=list)


class ReleaseEvent(BaseModel):
    """A ``release`` event as delivered by a GitHub webhook or Actions run."""

    action: str
    release: Release

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ReleaseEvent":
        """Build an event from the decoded JSON payload."""
        return cls(action=payload["action"], release=Release.from_github(payload["release"]))


class ChangelogResult(BaseModel):
    """Result of a changelog generation run."""

    status: ChangelogStatus
    release_tag: str
    body: str | None = None
    commit_count: int = 0
    pull_request_count: int = 0
