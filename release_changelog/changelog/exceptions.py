"""Contains exceptions raised while generating a release changelog."""


class ChangelogGenerationError(Exception):
    """Base class for errors that abort a changelog generation run."""

    pass


class UnresolvedBoundaryError(ChangelogGenerationError):
    """Raised when the boundary commit of a release cannot be reached in its own history."""

    def __init__(self, target_boundary_id: str, message: str | None = None) -> None:
        """Initializes the exception with the boundary commit that was never reached."""
        super().__init__(message or f"Unexpected state: boundary commit {target_boundary_id} was not found in its commit history")
        self.target_boundary_id = target_boundary_id


class NonLinearRangeError(ChangelogGenerationError):
    """Raised when the commit range between two releases contains a merge commit."""

    def __init__(self, commit_id: str, parent_ids: tuple[str, ...]) -> None:
        """Initializes the exception with the offending commit and its parents."""
        super().__init__(f"Commit {commit_id} has multiple parents ({', '.join(parent_ids)})")
        self.commit_id = commit_id
        self.parent_ids = parent_ids


class SourceUnavailableError(ChangelogGenerationError):
    """Raised when a page of a GitHub listing cannot be fetched."""

    def __init__(self, source: str, reason: str) -> None:
        """Initializes the exception with the failing source and the underlying reason."""
        super().__init__(f"Failed to fetch {source}: {reason}")
        self.source = source
        self.reason = reason


class InvalidChangelogConfigurationError(ChangelogGenerationError):
    """Raised when the changelog configuration file exists but cannot be used."""

    def __init__(self, path: str, reason: str) -> None:
        """Initializes the exception with the configuration path and the reason it was rejected."""
        super().__init__(f"Invalid changelog configuration in {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidReleaseEventError(ChangelogGenerationError):
    """Raised when a release event payload is missing or malformed."""

    pass


class ReleaseUpdateError(ChangelogGenerationError):
    """Raised when the rendered changelog cannot be written into the release."""

    def __init__(self, reason: str) -> None:
        """Initializes the exception with the reason the update failed."""
        super().__init__(f"Failed to update release: {reason}")
        self.reason = reason
