from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from taxsathi.deps import form_data, get_gateway, templates
from taxsathi.gateway import Gateway, GatewayError
from taxsathi.models import InquiryForm
from taxsathi.notifications import ERROR, SUCCESS, notify

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


def _page(request: Request, template: str, active: str, **context):
    return templates(request).TemplateResponse(
        request, template, {"active": active, **context}
    )


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    return _page(request, "pages/home.html", "home")


@router.get("/about", response_class=HTMLResponse)
def about(request: Request):
    return _page(request, "pages/about.html", "about")


@router.get("/services", response_class=HTMLResponse)
def services(request: Request):
    return _page(request, "pages/services.html", "services")


@router.get("/contact", response_class=HTMLResponse)
def contact(request: Request):
    return _page(request, "pages/contact.html", "contact")


@router.post("/contact")
def submit_contact(
    request: Request,
    data: dict = Depends(form_data),
    gateway: Gateway = Depends(get_gateway),
):
    try:
        inquiry = InquiryForm.model_validate(data)
    except ValidationError as exc:
        logger.info("Rejected contact form: %s", exc)
        notify(request, ERROR, "Please provide your name, a valid email and a message.")
        return RedirectResponse(url="/contact", status_code=303)
    try:
        gateway.insert(None, "contact_inquiries", inquiry.payload())
    except GatewayError as exc:
        logger.error("Error submitting contact inquiry: %s", exc)
        notify(request, ERROR, "Error sending message. Please try again.")
        return RedirectResponse(url="/contact", status_code=303)
    notify(
        request,
        SUCCESS,
        "Message Sent! Thank you for contacting us. We'll get back to you within 24 hours.",
    )
    return RedirectResponse(url="/contact", status_code=303)
