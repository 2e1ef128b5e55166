from __future__ import annotations

from fastapi import Request

_KEY = "_toasts"

SUCCESS = "success"
ERROR = "error"


def notify(request: Request, level: str, message: str) -> None:
    """Queue a toast for the next rendered page."""
    toasts = request.session.get(_KEY, [])
    toasts.append({"level": level, "message": message})
    request.session[_KEY] = toasts


def pop_notifications(request: Request) -> list[dict[str, str]]:
    return request.session.pop(_KEY, [])


def toast_context(request: Request) -> dict:
    # Only the full-page layout calls this, so htmx fragments leave toasts queued.
    return {"pop_toasts": lambda: pop_notifications(request)}
