from __future__ import annotations

import logging

from fastapi import Depends, Request

from taxsathi.gateway import Gateway, GatewayError, UserContext

logger = logging.getLogger(__name__)

SESSION_KEY = "user"


class LoginRequired(Exception):
    """No valid session; the app answers with a redirect to the sign-in page."""


def templates(request: Request):
    return request.app.state.templates


def get_gateway(request: Request) -> Gateway:
    return request.app.state.gateway


def get_settings(request: Request):
    return request.app.state.settings


async def form_data(request: Request) -> dict:
    """Submitted form fields; file inputs arrive as ``UploadFile``."""
    form = await request.form()
    return dict(form.items())


def session_user(request: Request) -> UserContext | None:
    return UserContext.from_session(request.session.get(SESSION_KEY))


def require_user(request: Request, gateway: Gateway = Depends(get_gateway)) -> UserContext:
    """Resolve the signed-in user for a dashboard request.

    The session is re-validated with the gateway on every request; a refreshed
    token replaces the stored one, a rejected one clears it.
    """
    ctx = session_user(request)
    if ctx is None:
        raise LoginRequired()
    try:
        current = gateway.get_user(ctx)
    except GatewayError as exc:
        logger.info("Session for %s rejected: %s", ctx.email, exc)
        request.session.pop(SESSION_KEY, None)
        raise LoginRequired() from exc
    if current != ctx:
        request.session[SESSION_KEY] = current.to_session()
    return current
