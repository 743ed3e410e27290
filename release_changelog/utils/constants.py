"""Shared constants used across the application."""

# This file is intended to hold shared constants.

import re

# Changelog Constants
# -------------------

CHANGELOG_TITLE = "## Release Notes"
"""First line of every rendered changelog."""

CHANGELOG_SECTION_HEADINGS: tuple[tuple[str, str], ...] = (
    ("security", "Security Updates"),
    ("features", "New Features"),
    ("bugfixes", "Bug Fixes"),
    ("other", "Other Changes"),
)
"""Changelog buckets and their headings, in rendering order."""

NO_RELEASE_NOTES_LINE = "No release notes available for this release."
"""Line rendered instead of any section when no pull request was classified."""

# Configuration Constants
# -----------------------

DEFAULT_RELEASE_CONFIG_PATH = ".github/release.yml"
"""Repository path of the changelog configuration file."""

CHANGELOG_CONFIG_KEY = "changelog"
"""Top-level key of the changelog block in the configuration file."""

# Event Constants
# ---------------

HANDLED_RELEASE_ACTIONS = frozenset({"created", "published"})
"""Release event actions that trigger changelog generation."""

# GitHub Listing Constants
# ------------------------

DEFAULT_PER_PAGE = 100
"""Page size requested from GitHub list endpoints (GitHub's maximum)."""

RELEASE_TAG_LINK_PATTERN = r'<a href="/{repo}/releases/tag/([\s\S]+?)">'
"""Pattern (formatted with an escaped ``owner/repo``) matching release tag links in GitHub's branch_commits fragment."""


def release_tag_link_regex(repo: str) -> re.Pattern[str]:
    """Compile the release tag link pattern for a repository."""
    return re.compile(RELEASE_TAG_LINK_PATTERN.format(repo=re.escape(repo)))
