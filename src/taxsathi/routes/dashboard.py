from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from taxsathi.deps import get_gateway, require_user, templates
from taxsathi.gateway import Gateway, GatewayError, UserContext
from taxsathi.models import Profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

TABS = [
    ("clients", "Clients"),
    ("services", "Services"),
    ("documents", "Documents"),
    ("appointments", "Appointments"),
    ("inquiries", "Inquiries"),
]


def fetch_profile(gateway: Gateway, ctx: UserContext) -> Profile | None:
    try:
        return Profile.model_validate(gateway.get(ctx, "profiles", ctx.user_id))
    except (GatewayError, ValidationError) as exc:
        logger.error("Error fetching profile: %s", exc)
        return None


def render(
    request: Request, template: str, gateway: Gateway, ctx: UserContext, active: str, **context
):
    """Render a full dashboard tab inside the shared header and tab bar."""
    profile = fetch_profile(gateway, ctx)
    greeting = (profile.full_name if profile else None) or ctx.email
    return templates(request).TemplateResponse(
        request,
        template,
        {"user": ctx, "greeting": greeting, "tabs": TABS, "active": active, **context},
    )


def fragment(request: Request, template: str, **context):
    return templates(request).TemplateResponse(request, template, context)


@router.get("")
def dashboard_home(ctx: UserContext = Depends(require_user)):
    return RedirectResponse(url="/dashboard/clients", status_code=302)
