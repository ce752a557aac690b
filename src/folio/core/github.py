"""Public repository listing from the GitHub REST API"""

import logging
from typing import Optional

import httpx
from pydantic import TypeAdapter

from folio.core.models import Repository


logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"

_repositories = TypeAdapter(list[Repository])


def select_repos(repos: list[Repository], limit: int = 6) -> list[Repository]:
    """Drop forks, sort by stars (most first), and keep the first `limit`."""
    owned = [r for r in repos if not r.fork]
    return sorted(owned, key=lambda r: r.stargazers_count, reverse=True)[:limit]


async def fetch_repos(
    username: str,
    limit: int = 6,
    client: Optional[httpx.AsyncClient] = None,
    api_url: str = GITHUB_API_URL,
    timeout: float = 10.0,
    ) -> list[Repository]:
    """Fetch a user's most recently updated repositories; logs and returns [] on failure."""
    url = f"{api_url.rstrip('/')}/users/{username}/repos"
    params = {"sort": "updated", "per_page": limit}
    headers = {"Accept": "application/vnd.github+json"}
    try:
        if client is not None:
            response = await client.get(url, params=params, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=timeout) as own:
                response = await own.get(url, params=params, headers=headers)
        response.raise_for_status()
        repos = _repositories.validate_python(response.json())
    except httpx.HTTPStatusError as e:
        logger.error("GitHub API error for %s: %s", username, e.response.status_code)
        return []
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Error fetching GitHub repos for %s: %s", username, e)
        return []
    logger.debug("Fetched %d repositories for %s", len(repos), username)
    return select_repos(repos, limit)
