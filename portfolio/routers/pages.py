"""HTML page endpoints — home and about."""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from portfolio.config import get_settings
from portfolio.errors import ContentError
from portfolio.routers.deps import get_csrf, get_freshness, templates
from portfolio.services.csrf import CSRFTokenIssuer
from portfolio.services.freshness import FreshnessController

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

# Banner shown after a contact form redirect: status -> (css class, message)
SUBMISSION_BANNERS: dict[str, tuple[str, str]] = {
    "success": ("border-green-500", "Contact form submitted successfully"),
    "error": (
        "border-red-500",
        "An error occurred while submitting the contact form",
    ),
}


def _site_links() -> dict[str, str]:
    settings = get_settings()
    return {"blog_url": settings.blog_url, "projects_url": settings.projects_url}


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    status: str | None = Query(default=None),
    freshness: FreshnessController = Depends(get_freshness),
    csrf: CSRFTokenIssuer = Depends(get_csrf),
):
    """Render the home page with projects, recent posts and the contact form.

    Content is refreshed first; a failed refresh is logged and the page is
    served from whatever snapshot is held.
    """
    token = csrf.issue()
    try:
        await freshness.refresh_if_stale()
    except ContentError as e:
        logger.warning("Error fetching data: %s", e)

    snapshot = freshness.current_snapshot()
    submitted_class, submitted_message = "hidden", ""
    banner = SUBMISSION_BANNERS.get(status or "")
    if banner:
        submitted_class, submitted_message = banner
        logger.info("Contact form submitted: %s", submitted_message)

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": f"Welcome To My Portfolio | {get_settings().site_owner}",
            **_site_links(),
            "projects": snapshot.projects,
            "posts": snapshot.posts.recent,
            "submitted": banner is not None,
            "submitted_class": submitted_class,
            "submitted_message": submitted_message,
            "csrf": token,
        },
    )


@router.get("/about", response_class=HTMLResponse)
async def about(request: Request):
    """Render the about page."""
    return templates.TemplateResponse(
        request,
        "about.html",
        {"title": f"About Me | {get_settings().site_owner}", **_site_links()},
    )
