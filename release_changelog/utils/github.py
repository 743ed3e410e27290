"""Contains utility functions for GitHub interactions."""


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits the repository in the configuration into owner and repository."""
    if repo is None:
        raise ValueError("A repository in 'owner/repo' format is required.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def web_url_for_api_url(github_api_url: str) -> str:
    """Derive the web URL of a GitHub instance from its API URL.

    e.g. "https://api.github.com" -> "https://github.com"
    or "https://github.example.com/api/v3" -> "https://github.example.com"
    """
    if "api.github.com" in github_api_url:
        return "https://github.com"
    # For GitHub Enterprise, remove /api/v3 suffix
    return github_api_url.rstrip("/").replace("/api/v3", "").replace("/api", "")
