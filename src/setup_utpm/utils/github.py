from typing import Dict, Optional

from setup_utpm.constants import (
    GITHUB_API_BASE,
    GITHUB_API_VERSION,
    GITHUB_REPOS_PATH,
    RELEASES_PATH,
    USER_AGENT,
)


def releases_url(owner: str, repo: str, api_base: str = GITHUB_API_BASE) -> str:
    return f"{api_base}/{GITHUB_REPOS_PATH}/{owner}/{repo}/{RELEASES_PATH}"


def github_headers(token: Optional[str] = None) -> Dict[str, str]:
    """Request headers for the GitHub REST API, authenticated when a token is given."""
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers
