from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from taxsathi.deps import form_data, get_gateway, require_user
from taxsathi.gateway import Gateway, UserContext
from taxsathi.models import Service, ServiceForm, ServiceStatus
from taxsathi.routes.dashboard import fragment, render
from taxsathi.screens import CLIENT_NAME, RecordScreen, client_options

router = APIRouter(prefix="/dashboard/services", tags=["services"])

LIST_URL = "/dashboard/services"

screen = RecordScreen(
    table="services",
    label="Service",
    plural="services",
    row_model=Service,
    form_model=ServiceForm,
    relations=(CLIENT_NAME,),
)


def _form(request: Request, gateway: Gateway, ctx: UserContext, service: Service | None):
    return fragment(
        request,
        "dashboard/services/form.html",
        service=service,
        clients=client_options(gateway, ctx),
        statuses=list(ServiceStatus),
    )


@router.get("", response_class=HTMLResponse)
def list_services(
    request: Request,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    services = screen.fetch(request, gateway, ctx)
    return render(
        request, "dashboard/services/list.html", gateway, ctx, "services", services=services
    )


@router.get("/new", response_class=HTMLResponse)
def new_service(
    request: Request,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    return _form(request, gateway, ctx, None)


@router.get("/{service_id}/edit", response_class=HTMLResponse)
def edit_service(
    request: Request,
    service_id: str,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    service = screen.load(gateway, ctx, service_id)
    if not service:
        return HTMLResponse("Service not found", status_code=404)
    return _form(request, gateway, ctx, service)


@router.post("")
def create_service(
    request: Request,
    data: dict = Depends(form_data),
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    screen.save(request, gateway, ctx, data)
    return RedirectResponse(url=LIST_URL, status_code=303)


@router.post("/{service_id}")
def update_service(
    request: Request,
    service_id: str,
    data: dict = Depends(form_data),
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    screen.save(request, gateway, ctx, data, record_id=service_id)
    return RedirectResponse(url=LIST_URL, status_code=303)


@router.delete("/{service_id}")
def delete_service(
    request: Request,
    service_id: str,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    screen.remove(request, gateway, ctx, service_id)
    return HTMLResponse(headers={"HX-Redirect": LIST_URL})
