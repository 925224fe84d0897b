"""Contact form endpoint — JSON for scripted clients, redirect for plain forms."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from portfolio.errors import ValidationError
from portfolio.models.contact import ContactForm, ContactResponse
from portfolio.routers.deps import get_csrf
from portfolio.services.csrf import CSRFTokenIssuer

router = APIRouter(prefix="/contact", tags=["contact"])
logger = logging.getLogger(__name__)

CONTACT_ANCHOR = "contactForm"


def require_csrf(issuer: CSRFTokenIssuer, candidate: str | None) -> None:
    """Raise ValidationError unless *candidate* is the live CSRF token."""
    if not issuer.validate(candidate):
        raise ValidationError("Invalid CSRF token")


def _wants_json(request: Request) -> bool:
    return "application/json" in request.headers.get("accept", "")


def _redirect(status: str) -> RedirectResponse:
    return RedirectResponse(url=f"/?status={status}#{CONTACT_ANCHOR}", status_code=303)


def _json(status_code: int, status: str, message: str) -> JSONResponse:
    body = ContactResponse(status=status, message=message)
    return JSONResponse(content=body.model_dump(), status_code=status_code)


async def _read_fields(request: Request) -> dict[str, str]:
    """Read submitted fields from a JSON or form-encoded body."""
    if request.headers.get("content-type", "").startswith("application/json"):
        try:
            data: Any = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    form = await request.form()
    return {k: v for k, v in form.items() if isinstance(v, str)}


@router.post("")
async def submit_contact(request: Request, csrf: CSRFTokenIssuer = Depends(get_csrf)):
    """Accept a contact form submission guarded by the CSRF token."""
    wants_json = _wants_json(request)
    fields = await _read_fields(request)

    try:
        require_csrf(csrf, fields.get("csrf"))
    except ValidationError as e:
        logger.warning("%s from %s", e, request.client.host if request.client else "unknown")
        if wants_json:
            return _json(403, "error", str(e))
        return _redirect("error")

    form = ContactForm(**{k: fields[k] for k in ("name", "email", "message") if k in fields})
    logger.info("Received contact form submission: %s", form.model_dump())

    if wants_json:
        return _json(200, "success", "Contact form submitted successfully")
    return _redirect("success")


@router.api_route("", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def contact_method_not_allowed(request: Request):
    """Answer non-POST requests the same way the form flow reports errors."""
    logger.warning("Method not allowed: %s", request.method)
    if _wants_json(request):
        return _json(405, "error", "Method not allowed")
    return _redirect("error")
