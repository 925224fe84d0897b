"""
Portfolio Server

Renders the home and about pages from cached content that is refreshed
from the blog API.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from portfolio.config import get_settings
from portfolio.errors import ContentError
from portfolio.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from portfolio.routers import contact, pages
from portfolio.services.csrf import CSRFTokenIssuer
from portfolio.services.freshness import FreshnessController
from portfolio.services.http_client import close_shared_client
from portfolio.services.snapshot_store import SnapshotStore
from portfolio.services.upstream import fetch_access_token

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


async def _resolve_api_token() -> str:
    """Return the static API token, or exchange client credentials for one."""
    settings = get_settings()
    if settings.blog_api_token or not settings.has_client_credentials:
        return settings.blog_api_token
    try:
        token = await fetch_access_token(
            settings.blog_url, settings.blog_client_id, settings.blog_client_secret
        )
    except ContentError as e:
        logger.warning("Could not obtain blog API token: %s", e)
        return ""
    logger.info("Obtained blog API token via client credentials")
    return token


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: load content and create shared state on startup."""
    settings = get_settings()
    freshness = FreshnessController(
        SnapshotStore(settings.cache_file),
        endpoint=settings.blog_api,
        auth_token=await _resolve_api_token(),
    )
    try:
        await freshness.ensure_data()
    except ContentError as e:
        # Still serve, from whatever snapshot could be installed
        logger.warning("Error loading from API: %s", e)

    app.state.freshness = freshness
    app.state.csrf = CSRFTokenIssuer(ttl=settings.csrf_ttl_seconds)
    yield
    await close_shared_client()


app = FastAPI(
    title="Portfolio",
    description="Personal portfolio with cached blog posts and projects",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)
# Request ID (added last — outermost middleware)
app.add_middleware(RequestIDMiddleware)

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

# Routers
app.include_router(pages.router)
app.include_router(contact.router)


@app.get("/health")
async def health_check(request: Request) -> JSONResponse:
    """Report held content counts and cache file presence."""
    freshness: FreshnessController | None = getattr(request.app.state, "freshness", None)
    if freshness is None:
        return JSONResponse(content={"status": "starting"}, status_code=503)

    snapshot = freshness.current_snapshot()
    result: dict[str, Any] = {
        "status": "degraded" if snapshot.is_empty else "ok",
        "service": "portfolio",
        "version": "0.1.0",
        "content": {
            "projects": len(snapshot.projects),
            "recent_posts": len(snapshot.posts.recent),
            "featured_posts": len(snapshot.posts.featured),
        },
        "cache_file": freshness.store.path.exists(),
    }
    if snapshot.is_empty:
        logger.warning("Health check degraded — no content held")
    return JSONResponse(content=result, status_code=200)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    settings = get_settings()
    logger.info("Starting server on :%d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
