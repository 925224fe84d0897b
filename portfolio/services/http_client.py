"""Shared HTTP client utilities — reusable httpx client."""

import httpx

# Identifies this server to the posts API
USER_AGENT = "Mozilla/5.0 (compatible; PortfolioClient/1.1)"

# Module-level shared client (created lazily, lives for the process lifetime)
_client: httpx.AsyncClient | None = None


def get_shared_client() -> httpx.AsyncClient:
    """Return a shared httpx.AsyncClient, creating it on first call.

    No timeout is set: a hung upstream blocks the awaiting request until the
    connection is dropped.
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(timeout=None)
    return _client


async def close_shared_client() -> None:
    """Close the shared client if one was created."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
    _client = None


def upstream_headers(token: str) -> dict[str, str]:
    """Build request headers for the posts API.

    The Authorization header is always sent, an empty token included.
    """
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {token}",
        "User-Agent": USER_AGENT,
    }
