from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from taxsathi.deps import form_data, get_gateway, require_user
from taxsathi.gateway import Gateway, UserContext
from taxsathi.models import Appointment, AppointmentForm, AppointmentStatus
from taxsathi.routes.dashboard import fragment, render
from taxsathi.screens import CLIENT_NAME, RecordScreen, client_options

router = APIRouter(prefix="/dashboard/appointments", tags=["appointments"])

LIST_URL = "/dashboard/appointments"

# Soonest first.
screen = RecordScreen(
    table="appointments",
    label="Appointment",
    plural="appointments",
    row_model=Appointment,
    form_model=AppointmentForm,
    order_by="appointment_date",
    descending=False,
    relations=(CLIENT_NAME,),
)


def _form(request: Request, gateway: Gateway, ctx: UserContext, appointment: Appointment | None):
    return fragment(
        request,
        "dashboard/appointments/form.html",
        appointment=appointment,
        clients=client_options(gateway, ctx),
        statuses=list(AppointmentStatus),
    )


@router.get("", response_class=HTMLResponse)
def list_appointments(
    request: Request,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    appointments = screen.fetch(request, gateway, ctx)
    return render(
        request,
        "dashboard/appointments/list.html",
        gateway,
        ctx,
        "appointments",
        appointments=appointments,
    )


@router.get("/new", response_class=HTMLResponse)
def new_appointment(
    request: Request,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    return _form(request, gateway, ctx, None)


@router.get("/{appointment_id}/edit", response_class=HTMLResponse)
def edit_appointment(
    request: Request,
    appointment_id: str,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    appointment = screen.load(gateway, ctx, appointment_id)
    if not appointment:
        return HTMLResponse("Appointment not found", status_code=404)
    return _form(request, gateway, ctx, appointment)


@router.post("")
def create_appointment(
    request: Request,
    data: dict = Depends(form_data),
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    screen.save(request, gateway, ctx, data)
    return RedirectResponse(url=LIST_URL, status_code=303)


@router.post("/{appointment_id}")
def update_appointment(
    request: Request,
    appointment_id: str,
    data: dict = Depends(form_data),
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    screen.save(request, gateway, ctx, data, record_id=appointment_id)
    return RedirectResponse(url=LIST_URL, status_code=303)


@router.delete("/{appointment_id}")
def delete_appointment(
    request: Request,
    appointment_id: str,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    screen.remove(request, gateway, ctx, appointment_id)
    return HTMLResponse(headers={"HX-Redirect": LIST_URL})
