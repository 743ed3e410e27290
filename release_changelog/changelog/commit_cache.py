"""Run-scoped cache of commits visited while walking history."""

from typing import Iterator

from .models import Commit


class CommitCache:
    """Write-once mapping of commit identifier to commit."""

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._commits: dict[str, Commit] = {}

    def add(self, commit: Commit) -> None:
        """Cache a commit that has not been visited before."""
        if commit.id in self._commits:
            raise ValueError(f"Commit {commit.id} is already cached")
        self._commits[commit.id] = commit

    def get(self, commit_id: str) -> Commit | None:
        """Return a cached commit, if it was visited."""
        return self._commits.get(commit_id)

    def __contains__(self, commit_id: object) -> bool:
        return commit_id in self._commits

    def __len__(self) -> int:
        return len(self._commits)

    def __iter__(self) -> Iterator[str]:
        return iter(self._commits)
