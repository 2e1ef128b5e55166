from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from taxsathi.deps import get_gateway, require_user
from taxsathi.gateway import Gateway, GatewayError, UserContext
from taxsathi.models import ContactInquiry, InquiryStatusUpdate
from taxsathi.notifications import ERROR, SUCCESS, notify
from taxsathi.routes.dashboard import fragment, render
from taxsathi.screens import RecordScreen

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard/inquiries", tags=["inquiries"])

LIST_URL = "/dashboard/inquiries"

screen = RecordScreen(
    table="contact_inquiries",
    label="Inquiry",
    plural="contact inquiries",
    row_model=ContactInquiry,
)


def mark_responded(request: Request, gateway: Gateway, ctx: UserContext, inquiry_id: str) -> bool:
    update = InquiryStatusUpdate.responded()
    try:
        gateway.update(ctx, "contact_inquiries", inquiry_id, update.model_dump(mode="json"))
    except GatewayError as exc:
        logger.error("Error updating inquiry status: %s", exc)
        notify(request, ERROR, "Error updating inquiry status")
        return False
    notify(request, SUCCESS, "Inquiry marked as responded")
    return True


@router.get("", response_class=HTMLResponse)
def list_inquiries(
    request: Request,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    inquiries = screen.fetch(request, gateway, ctx)
    return render(
        request, "dashboard/inquiries/list.html", gateway, ctx, "inquiries", inquiries=inquiries
    )


@router.get("/{inquiry_id}", response_class=HTMLResponse)
def inquiry_detail(
    request: Request,
    inquiry_id: str,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    inquiry = screen.load(gateway, ctx, inquiry_id)
    if not inquiry:
        return HTMLResponse("Inquiry not found", status_code=404)
    return fragment(request, "dashboard/inquiries/detail.html", inquiry=inquiry)


@router.post("/{inquiry_id}/respond")
def respond_to_inquiry(
    request: Request,
    inquiry_id: str,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    mark_responded(request, gateway, ctx, inquiry_id)
    return RedirectResponse(url=LIST_URL, status_code=303)
