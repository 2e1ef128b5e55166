from __future__ import annotations

import logging
import time
from pathlib import PurePosixPath
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from taxsathi.config import Settings
from taxsathi.deps import form_data, get_gateway, get_settings, require_user
from taxsathi.gateway import Gateway, GatewayError, UserContext
from taxsathi.models import Document, DocumentCreate, DocumentForm, DocumentType
from taxsathi.notifications import ERROR, notify
from taxsathi.routes.dashboard import fragment, render
from taxsathi.screens import (
    CLIENT_NAME,
    SERVICE_NAME,
    RecordScreen,
    client_options,
    service_options,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard/documents", tags=["documents"])

LIST_URL = "/dashboard/documents"

screen = RecordScreen(
    table="documents",
    label="Document",
    plural="documents",
    row_model=Document,
    order_by="uploaded_at",
    relations=(CLIENT_NAME, SERVICE_NAME),
)


def storage_path(user_id: str, filename: str, now: float | None = None) -> str:
    """``<user_id>/<epoch millis><.ext>``, keeping only the last extension."""
    millis = int((time.time() if now is None else now) * 1000)
    return f"{user_id}/{millis}{PurePosixPath(filename).suffix}"


def content_disposition(filename: str) -> str:
    quoted = quote(filename, safe="")
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


def upload_document(
    request: Request, gateway: Gateway, ctx: UserContext, settings: Settings, data: dict
) -> bool:
    upload = data.pop("file", None)
    content = upload.file.read() if isinstance(upload, UploadFile) and upload.filename else b""
    if not content:
        notify(request, ERROR, "Please select a file")
        return False

    if len(content) > settings.max_upload_bytes:
        notify(request, ERROR, f"File too large. Maximum size is {settings.max_upload_mb} MB.")
        return False

    try:
        form = DocumentForm.model_validate(data)
    except ValidationError as exc:
        screen.fail(request, "uploading", exc)
        return False

    path = storage_path(ctx.user_id, upload.filename)
    mime_type = upload.content_type or "application/octet-stream"
    try:
        gateway.upload(ctx, settings.documents_bucket, path, content, mime_type)
    except GatewayError as exc:
        screen.fail(request, "uploading", exc)
        return False

    record = DocumentCreate(
        name=form.name or upload.filename,
        file_path=path,
        file_size=len(content),
        mime_type=mime_type,
        document_type=form.document_type,
        client_id=form.client_id,
        service_id=form.service_id,
    )
    try:
        gateway.insert(ctx, "documents", record.model_dump(mode="json"))
    except GatewayError as exc:
        # Undo the upload so the blob does not outlive its failed record.
        try:
            gateway.remove(ctx, settings.documents_bucket, [path])
        except GatewayError as cleanup_exc:
            logger.warning("Orphaned blob %s left in storage: %s", path, cleanup_exc)
        screen.fail(request, "uploading", exc)
        return False

    screen.succeed(request, "uploaded")
    return True


def delete_document_and_blob(
    request: Request, gateway: Gateway, ctx: UserContext, settings: Settings, document_id: str
) -> bool:
    document = screen.load(gateway, ctx, document_id)
    if document is None:
        screen.fail(request, "deleting", GatewayError(f"No document with id {document_id}"))
        return False
    try:
        gateway.remove(ctx, settings.documents_bucket, [document.file_path])
    except GatewayError as exc:
        screen.fail(request, "deleting", exc)
        return False
    try:
        gateway.delete(ctx, "documents", document_id)
    except GatewayError as exc:
        # The blob is already gone; nothing can bring it back.
        logger.warning(
            "Blob %s removed but document %s remains: %s", document.file_path, document_id, exc
        )
        screen.fail(request, "deleting", exc)
        return False
    screen.succeed(request, "deleted")
    return True


@router.get("", response_class=HTMLResponse)
def list_documents(
    request: Request,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    documents = screen.fetch(request, gateway, ctx)
    return render(
        request, "dashboard/documents/list.html", gateway, ctx, "documents", documents=documents
    )


@router.get("/new", response_class=HTMLResponse)
def new_document(
    request: Request,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
):
    return fragment(
        request,
        "dashboard/documents/form.html",
        clients=client_options(gateway, ctx),
        services=service_options(gateway, ctx),
        document_types=list(DocumentType),
    )


@router.post("")
def create_document(
    request: Request,
    data: dict = Depends(form_data),
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
):
    upload_document(request, gateway, ctx, settings, data)
    return RedirectResponse(url=LIST_URL, status_code=303)


@router.get("/{document_id}/download")
def download_document(
    request: Request,
    document_id: str,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
):
    document = screen.load(gateway, ctx, document_id)
    if document is None:
        screen.fail(request, "downloading", GatewayError(f"No document with id {document_id}"))
        return RedirectResponse(url=LIST_URL, status_code=303)
    try:
        content = gateway.download(ctx, settings.documents_bucket, document.file_path)
    except GatewayError as exc:
        screen.fail(request, "downloading", exc)
        return RedirectResponse(url=LIST_URL, status_code=303)
    return Response(
        content=content,
        media_type=document.mime_type or "application/octet-stream",
        headers={"Content-Disposition": content_disposition(document.name)},
    )


@router.delete("/{document_id}")
def delete_document(
    request: Request,
    document_id: str,
    ctx: UserContext = Depends(require_user),
    gateway: Gateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
):
    delete_document_and_blob(request, gateway, ctx, settings, document_id)
    return HTMLResponse(headers={"HX-Redirect": LIST_URL})
