"""Release listing for the upstream utpm repository."""

import json
from typing import Any, List, Optional

import aiohttp

from setup_utpm.constants import GITHUB_API_BASE, RELEASES_PER_PAGE, UTPM_OWNER, UTPM_REPO
from setup_utpm.errors import ListingError
from setup_utpm.logging import get_logger
from setup_utpm.utils.github import github_headers, releases_url

logger = get_logger(__name__)


def extract_tag_names(records: Any, url: str, rate_limit_hint: bool = True) -> List[str]:
    """Pull ``tag_name`` out of every release record, keeping server order."""
    if not isinstance(records, list):
        raise ListingError(url, "expected a list of release records", rate_limit_hint)

    tags = []
    for record in records:
        tag = record.get("tag_name") if isinstance(record, dict) else None
        if not isinstance(tag, str):
            raise ListingError(url, "release record without a tag_name", rate_limit_hint)
        tags.append(tag)
    return tags


async def list_releases_authenticated(
    token: str,
    owner: str = UTPM_OWNER,
    repo: str = UTPM_REPO,
    api_base: str = GITHUB_API_BASE,
) -> List[str]:
    """List every release tag, following pagination links."""
    url: Optional[str] = f"{releases_url(owner, repo, api_base)}?per_page={RELEASES_PER_PAGE}"
    tags: List[str] = []

    async with aiohttp.ClientSession(headers=github_headers(token)) as session:
        while url:
            logger.debug({"event": "fetching_release_page", "url": url})
            try:
                async with session.get(url) as response:
                    response.raise_for_status()
                    records = await response.json(content_type=None)
                    next_link = response.links.get("next")
            except aiohttp.ClientError as e:
                raise ListingError(url, str(e), rate_limit_hint=False) from e
            except json.JSONDecodeError as e:
                raise ListingError(url, str(e), rate_limit_hint=False) from e

            tags.extend(extract_tag_names(records, url, rate_limit_hint=False))
            url = str(next_link["url"]) if next_link else None

    return tags


async def list_releases_anonymous(
    owner: str = UTPM_OWNER,
    repo: str = UTPM_REPO,
    api_base: str = GITHUB_API_BASE,
) -> List[str]:
    """List release tags with a single unauthenticated request."""
    url = f"{releases_url(owner, repo, api_base)}?per_page={RELEASES_PER_PAGE}"
    logger.debug(f"Fetching releases list from {url} without authentication.")

    try:
        async with aiohttp.ClientSession(headers=github_headers()) as session:
            async with session.get(url) as response:
                status = response.status
                body = await response.text()
    except aiohttp.ClientError as e:
        raise ListingError(url, str(e)) from e

    if status != 200:
        raise ListingError(url, f"HTTP {status} {body.strip()[:200]}")

    try:
        records = json.loads(body)
    except json.JSONDecodeError as e:
        raise ListingError(url, str(e)) from e

    logger.debug(f"Successfully downloaded releases list from {url}.")
    return extract_tag_names(records, url)


async def list_releases(
    token: Optional[str] = None,
    owner: str = UTPM_OWNER,
    repo: str = UTPM_REPO,
    api_base: str = GITHUB_API_BASE,
) -> List[str]:
    """List release tags, authenticated when a token is supplied."""
    logger.info(f"Fetching releases list for repository {owner}/{repo}.")

    if token:
        tags = await list_releases_authenticated(token, owner, repo, api_base)
    else:
        tags = await list_releases_anonymous(owner, repo, api_base)

    logger.debug({"event": "releases_listed", "count": len(tags)})
    return tags
