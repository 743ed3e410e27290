"""Release changelog generation module."""

from .ancestry import resolve_boundaries, resolve_change_range
from .classifier import classify
from .commit_cache import CommitCache
from .config import load_changelog_config, merge_changelog_config, parse_changelog_config
from .exceptions import (
    ChangelogGenerationError,
    InvalidChangelogConfigurationError,
    InvalidReleaseEventError,
    NonLinearRangeError,
    ReleaseUpdateError,
    SourceUnavailableError,
    UnresolvedBoundaryError,
)
from .generator import ReleaseChangelogGenerator
from .linearize import build_range
from .markdown import render_changelog
from .models import (
    ChangeRange,
    ChangelogBuckets,
    ChangelogConfig,
    ChangelogResult,
    ChangelogStatus,
    Commit,
    PullRequest,
    Release,
    ReleaseEvent,
)
from .pagination import walk_pages
from .release_index import ReleaseIndex, build_release_index

__all__ = [
    "ChangelogStatus",
    "Release",
    "Commit",
    "PullRequest",
    "ChangelogConfig",
    "ChangelogBuckets",
    "ChangeRange",
    "ChangelogResult",
    "ReleaseEvent",
    "ChangelogGenerationError",
    "UnresolvedBoundaryError",
    "NonLinearRangeError",
    "SourceUnavailableError",
    "ReleaseUpdateError",
    "InvalidChangelogConfigurationError",
    "InvalidReleaseEventError",
    "CommitCache",
    "ReleaseIndex",
    "walk_pages",
    "build_release_index",
    "resolve_boundaries",
    "resolve_change_range",
    "build_range",
    "classify",
    "load_changelog_config",
    "merge_changelog_config",
    "parse_changelog_config",
    "render_changelog",
    "ReleaseChangelogGenerator",
]
