from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from taxsathi.deps import form_data, get_gateway, require_user
from taxsathi.gateway import Gateway, UserContext
from taxsathi.models import Client, ClientForm, ClientType
from taxsathi.routes.dashboard import fragment, render
from taxsathi.screens import RecordScreen

router = APIRouter(prefix="/dashboard/clients", tags=["clients"])

LIST_URL = "/dashboard/clients"

screen = RecordScreen(
    table="clients",
    label="Client",
    plural="clients",
    row_model=Client,
    form_model=ClientForm,
)


def _form(request: Request, client: Client | None):
    return fragment(
        request, "dashboard/clients/form.html", client=client, client_types=list(ClientType)
    )


@router.get("", response_class=HTMLResponse)
def list_clients(
    request: Request,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    clients = screen.fetch(request, gateway, ctx)
    return render(
        request, "dashboard/clients/list.html", gateway, ctx, "clients", clients=clients
    )


@router.get("/new", response_class=HTMLResponse)
def new_client(request: Request, ctx: UserContext = Depends(require_user)):
    return _form(request, None)


@router.get("/{client_id}/edit", response_class=HTMLResponse)
def edit_client(
    request: Request,
    client_id: str,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    client = screen.load(gateway, ctx, client_id)
    if not client:
        return HTMLResponse("Client not found", status_code=404)
    return _form(request, client)


@router.post("")
def create_client(
    request: Request,
    data: dict = Depends(form_data),
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    screen.save(request, gateway, ctx, data)
    return RedirectResponse(url=LIST_URL, status_code=303)


@router.post("/{client_id}")
def update_client(
    request: Request,
    client_id: str,
    data: dict = Depends(form_data),
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    screen.save(request, gateway, ctx, data, record_id=client_id)
    return RedirectResponse(url=LIST_URL, status_code=303)


@router.delete("/{client_id}")
def delete_client(
    request: Request,
    client_id: str,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    screen.remove(request, gateway, ctx, client_id)
    return HTMLResponse(headers={"HX-Redirect": LIST_URL})
