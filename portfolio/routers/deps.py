"""Request dependencies for the shared content controller and CSRF issuer."""

from pathlib import Path

from fastapi import HTTPException, Request
from fastapi.templating import Jinja2Templates

from portfolio.services.csrf import CSRFTokenIssuer
from portfolio.services.freshness import FreshnessController

_templates_dir = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=_templates_dir)


def get_freshness(request: Request) -> FreshnessController:
    """Return the controller created at startup."""
    controller = getattr(request.app.state, "freshness", None)
    if controller is None:
        raise HTTPException(status_code=503, detail="Content not initialised")
    return controller


def get_csrf(request: Request) -> CSRFTokenIssuer:
    """Return the CSRF issuer created at startup."""
    issuer = getattr(request.app.state, "csrf", None)
    if issuer is None:
        raise HTTPException(status_code=503, detail="CSRF issuer not initialised")
    return issuer
