"""Unit tests for linearizing the commit range between two releases."""

from typing import Callable

import pytest

from release_changelog.changelog.commit_cache import CommitCache
from release_changelog.changelog.exceptions import NonLinearRangeError, UnresolvedBoundaryError
from release_changelog.changelog.linearize import build_range
from release_changelog.changelog.models import Commit


def cache_of(commits: list[Commit]) -> CommitCache:
    cache = CommitCache()
    for commit in commits:
        cache.add(commit)
    return cache


@pytest.mark.parametrize(
    "chain,parent_release_boundary_id,expected",
    [
        pytest.param(["c5", "c4", "c3", "c2", "c1"], "c1", ["c5", "c4", "c3", "c2"], id="previous release"),
        pytest.param(["c2", "c1"], "c1", ["c2"], id="single commit range"),
        pytest.param(["c3", "c2", "c1"], None, ["c3", "c2", "c1"], id="first release runs to root"),
        pytest.param(["c1"], None, ["c1"], id="root commit release"),
    ],
)
def test_build_range_linear(
    linear_commits: Callable[..., list[Commit]],
    chain: list[str],
    parent_release_boundary_id: str | None,
    expected: list[str],
) -> None:
    """Test that a linear chain yields the newer boundary through to the older boundary, exclusive."""
    cache = cache_of(linear_commits(*chain))
    assert build_range(cache, chain[0], parent_release_boundary_id) == expected


def test_build_range_same_boundary_is_empty(linear_commits: Callable[..., list[Commit]]) -> None:
    """Test that a release cut from the previous release's commit introduces no commits."""
    cache = cache_of(linear_commits("c2", "c1"))
    assert build_range(cache, "c2", "c2") == []


def test_build_range_rejects_merge_commit() -> None:
    """Test that a commit with two parents inside the range is rejected."""
    cache = cache_of(
        [
            Commit(id="c5", parent_ids=("c4",)),
            Commit(id="c4", parent_ids=("c3",)),
            Commit(id="c3", parent_ids=("c2", "x1")),
            Commit(id="c2", parent_ids=("c1",)),
            Commit(id="c1", parent_ids=()),
        ]
    )
    with pytest.raises(NonLinearRangeError, match="c3"):
        build_range(cache, "c5", "c1")


def test_build_range_ignores_merge_outside_range() -> None:
    """Test that a merge commit older than the previous release does not matter."""
    cache = cache_of(
        [
            Commit(id="c3", parent_ids=("c2",)),
            Commit(id="c2", parent_ids=("c1",)),
            Commit(id="c1", parent_ids=("c0", "x0")),
        ]
    )
    assert build_range(cache, "c3", "c1") == ["c3", "c2"]


def test_build_range_missing_commit() -> None:
    """Test that a chain leaving the visited history is reported as unresolved."""
    cache = cache_of([Commit(id="c3", parent_ids=("c2",))])
    with pytest.raises(UnresolvedBoundaryError):
        build_range(cache, "c3", "c1")


def test_build_range_root_before_previous_release(linear_commits: Callable[..., list[Commit]]) -> None:
    """Test that reaching the root before the previous release is reported as unresolved."""
    cache = cache_of(linear_commits("c3", "c2"))
    with pytest.raises(UnresolvedBoundaryError):
        build_range(cache, "c3", "c9")


def test_commit_cache_is_write_once() -> None:
    """Test that a commit cannot be cached twice."""
    cache = cache_of([Commit(id="c1")])
    with pytest.raises(ValueError):
        cache.add(Commit(id="c1"))
