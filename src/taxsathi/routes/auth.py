from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from taxsathi.deps import SESSION_KEY, get_gateway, session_user, templates
from taxsathi.gateway import Gateway, GatewayError
from taxsathi.notifications import ERROR, SUCCESS, notify

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("", response_class=HTMLResponse)
def auth_page(request: Request, mode: str = "sign-in"):
    if session_user(request):
        return RedirectResponse(url="/dashboard", status_code=302)
    return templates(request).TemplateResponse(
        request, "auth.html", {"mode": mode, "active": "auth"}
    )


@router.post("/sign-in")
def sign_in(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    gateway: Gateway = Depends(get_gateway),
):
    try:
        ctx = gateway.sign_in(email.strip(), password)
    except GatewayError as exc:
        logger.info("Sign in failed for %s: %s", email, exc)
        notify(request, ERROR, "Invalid email or password")
        return RedirectResponse(url="/auth", status_code=303)
    request.session[SESSION_KEY] = ctx.to_session()
    notify(request, SUCCESS, "Signed in successfully")
    return RedirectResponse(url="/dashboard", status_code=303)


@router.post("/sign-up")
def sign_up(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    full_name: str = Form(""),
    gateway: Gateway = Depends(get_gateway),
):
    try:
        ctx = gateway.sign_up(email.strip(), password, full_name.strip())
    except GatewayError as exc:
        logger.error("Error signing up %s: %s", email, exc)
        notify(request, ERROR, "Error creating account")
        return RedirectResponse(url="/auth?mode=sign-up", status_code=303)
    if ctx is None:
        notify(request, SUCCESS, "Check your email to confirm your account")
        return RedirectResponse(url="/auth", status_code=303)
    request.session[SESSION_KEY] = ctx.to_session()
    notify(request, SUCCESS, "Account created successfully")
    return RedirectResponse(url="/dashboard", status_code=303)


@router.post("/sign-out")
def sign_out(request: Request, gateway: Gateway = Depends(get_gateway)):
    ctx = session_user(request)
    if ctx is not None:
        try:
            gateway.sign_out(ctx)
        except GatewayError as exc:
            logger.error("Error signing out: %s", exc)
            notify(request, ERROR, "Error signing out")
            return RedirectResponse(url="/dashboard", status_code=303)
    request.session.pop(SESSION_KEY, None)
    notify(request, SUCCESS, "Successfully signed out")
    return RedirectResponse(url="/", status_code=303)
