from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.sessions import SessionMiddleware

from taxsathi import content
from taxsathi.config import Settings
from taxsathi.deps import LoginRequired
from taxsathi.gateway import Gateway, build_gateway
from taxsathi.notifications import toast_context
from taxsathi.routes import appointments, auth, clients, dashboard, documents, inquiries, pages
from taxsathi.routes import services as services_routes

BASE_DIR = Path(__file__).resolve().parent


def _datetime(value: datetime | None) -> str:
    return value.strftime("%b %d, %Y at %I:%M %p") if value else "—"


def _date(value: date | datetime | None) -> str:
    return value.strftime("%b %d, %Y") if value else "—"


def _datetime_local(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%dT%H:%M") if value else ""


def _filesize(size: int | None) -> str:
    if size is None:
        return "—"
    for unit in ("B", "KB", "MB"):
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def _label(value) -> str:
    return str(getattr(value, "value", value)).replace("_", " ").capitalize()


def create_app(settings: Settings | None = None, gateway: Gateway | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="Tax Sathi")
    app.add_middleware(SessionMiddleware, secret_key=settings.secret_key, same_site="lax")
    app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")

    templates = Jinja2Templates(
        directory=BASE_DIR / "templates", context_processors=[toast_context]
    )
    templates.env.filters.update(
        datetime=_datetime,
        date=_date,
        datetime_local=_datetime_local,
        filesize=_filesize,
        label=_label,
    )
    templates.env.globals["content"] = content
    app.state.templates = templates
    app.state.settings = settings
    app.state.gateway = gateway or build_gateway(settings)

    app.include_router(pages.router)
    app.include_router(auth.router)
    app.include_router(dashboard.router)
    app.include_router(clients.router)
    app.include_router(services_routes.router)
    app.include_router(documents.router)
    app.include_router(appointments.router)
    app.include_router(inquiries.router)

    @app.exception_handler(LoginRequired)
    async def login_required(request: Request, exc: LoginRequired):
        if request.headers.get("HX-Request"):
            return Response(headers={"HX-Redirect": "/auth"})
        return RedirectResponse(url="/auth", status_code=303)

    return app
