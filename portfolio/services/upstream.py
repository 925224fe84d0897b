"""Upstream content fetching — posts API, project catalog, and OAuth token.

Every fetch is a single attempt. Failures are raised as ContentError
subclasses so callers decide whether to keep serving what they already have.
"""

import asyncio
import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from portfolio.errors import DecodingError, HTTPStatusError, NetworkError
from portfolio.models.content import ContentFeed, ContentSnapshot, Project
from portfolio.services.catalog import PROJECTS
from portfolio.services.http_client import get_shared_client, upstream_headers

logger = logging.getLogger(__name__)


async def fetch_posts(endpoint: str, auth_token: str) -> ContentFeed:
    """Fetch recent and featured posts from the posts API.

    Raises:
        NetworkError: If the request could not be sent or completed.
        HTTPStatusError: If the API answered with a non-2xx status.
        DecodingError: If the body is not a valid posts payload.
    """
    client = get_shared_client()
    try:
        resp = await client.get(endpoint, headers=upstream_headers(auth_token))
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        # ValueError covers headers or URLs httpx cannot encode
        raise NetworkError(f"error making request to {endpoint}: {e}") from e

    if not resp.is_success:
        raise HTTPStatusError(resp.status_code, endpoint)

    try:
        return ContentFeed.model_validate_json(resp.content)
    except PydanticValidationError as e:
        raise DecodingError(f"error decoding posts from {endpoint}: {e}") from e


async def fetch_projects() -> list[Project]:
    """Return the project catalog.

    The catalog is static for now but keeps the same async contract and
    error shape as fetch_posts so a real endpoint can replace it.
    """
    return list(PROJECTS)


async def fetch_all(endpoint: str, auth_token: str) -> ContentSnapshot:
    """Fetch posts and projects concurrently and assemble a snapshot.

    Both fetches always run to completion. If either failed, its error is
    raised (the posts error first when both failed) and no snapshot is built.
    """
    posts, projects = await asyncio.gather(
        fetch_posts(endpoint, auth_token),
        fetch_projects(),
        return_exceptions=True,
    )

    if isinstance(posts, BaseException):
        if isinstance(projects, BaseException):
            logger.warning("Projects fetch also failed: %s", projects)
        raise posts
    if isinstance(projects, BaseException):
        raise projects

    return ContentSnapshot(projects=projects, posts=posts)


async def fetch_access_token(blog_url: str, client_id: str, client_secret: str) -> str:
    """Exchange client credentials for a bearer token at ``{blog_url}/oauth/token``.

    Raises:
        NetworkError: If the token endpoint could not be reached.
        HTTPStatusError: If it answered with a non-2xx status.
        DecodingError: If the response has no usable access_token.
    """
    url = f"{blog_url.rstrip('/')}/oauth/token"
    payload = {
        "grant_type": "client_credentials",
        "client_id": client_id,
        "client_secret": client_secret,
        "scope": "",
    }
    client = get_shared_client()
    try:
        resp = await client.post(
            url, json=payload, headers={"Content-Type": "application/json"}
        )
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        raise NetworkError(f"error requesting token from {url}: {e}") from e

    if not resp.is_success:
        raise HTTPStatusError(resp.status_code, url)

    try:
        data = resp.json()
    except ValueError as e:
        raise DecodingError(f"error decoding token response from {url}: {e}") from e

    token = data.get("access_token") if isinstance(data, dict) else None
    if not isinstance(token, str) or not token:
        raise DecodingError(f"token response from {url} has no access_token")
    return token
