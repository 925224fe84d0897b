"""Contact form models."""

from pydantic import BaseModel


class ContactForm(BaseModel):
    """Contact form submission."""

    name: str = ""
    email: str = ""
    message: str = ""


class ContactResponse(BaseModel):
    """JSON answer to a contact form submission."""

    status: str
    message: str
