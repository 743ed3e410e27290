"""Utility modules for shared functionality."""

from .constants import (
    CHANGELOG_SECTION_HEADINGS,
    CHANGELOG_TITLE,
    DEFAULT_PER_PAGE,
    DEFAULT_RELEASE_CONFIG_PATH,
    NO_RELEASE_NOTES_LINE,
)
from .retry import retry_on_rate_limit

__all__ = [
    "CHANGELOG_TITLE",
    "CHANGELOG_SECTION_HEADINGS",
    "NO_RELEASE_NOTES_LINE",
    "DEFAULT_RELEASE_CONFIG_PATH",
    "DEFAULT_PER_PAGE",
    "retry_on_rate_limit",
]
