from __future__ import annotations

import logging
from unittest.mock import patch

from taxsathi.gateway import GatewayError
from taxsathi.routes.documents import content_disposition, storage_path

PDF = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\nfake tax return\n"


def _upload(client, name="FY 2080-81 return", content=PDF, filename="return.pdf", **fields):
    return client.post(
        "/dashboard/documents",
        data={"name": name, "document_type": "tax_return", **fields},
        files={"file": (filename, content, "application/pdf")},
        follow_redirects=False,
    )


def _blobs(settings):
    return [p for p in settings.storage_dir.rglob("*") if p.is_file()]


def test_storage_path_keeps_last_extension():
    assert storage_path("u1", "archive.tar.gz", now=1700000000.5) == "u1/1700000000500.gz"
    assert storage_path("u1", "README", now=1.5) == "u1/1500"


def test_content_disposition_quotes_only_when_needed():
    assert content_disposition("return.pdf") == 'attachment; filename="return.pdf"'
    assert content_disposition("2081/return.pdf") == "attachment; filename*=utf-8''2081%2Freturn.pdf"
    assert content_disposition("कर विवरण.pdf").startswith("attachment; filename*=utf-8''%E0")


def test_documents_list_empty(client):
    assert "No documents uploaded yet" in client.get("/dashboard/documents").text


def test_upload_form_lists_clients_and_services(client, gateway, ctx):
    acme = gateway.insert(ctx, "clients", {"name": "Acme Traders"})
    gateway.insert(ctx, "services", {"service_name": "Annual audit", "client_id": acme["id"]})

    resp = client.get("/dashboard/documents/new")
    assert 'enctype="multipart/form-data"' in resp.text
    assert "Acme Traders" in resp.text
    assert "Annual audit" in resp.text


def test_upload_stores_blob_and_record(client, gateway, ctx, settings):
    acme = gateway.insert(ctx, "clients", {"name": "Acme Traders"})

    resp = _upload(client, client_id=acme["id"], service_id="")
    assert resp.status_code == 303
    assert resp.headers["location"] == "/dashboard/documents"

    resp = client.get("/dashboard/documents")
    assert "Document uploaded successfully" in resp.text
    assert "FY 2080-81 return" in resp.text
    assert "Acme Traders" in resp.text

    (row,) = gateway.select(ctx, "documents")
    assert row["file_path"].startswith(f"{ctx.user_id}/")
    assert row["file_path"].endswith(".pdf")
    assert row["file_size"] == len(PDF)
    assert row["mime_type"] == "application/pdf"
    assert row["document_type"] == "tax_return"
    assert row["service_id"] is None
    assert gateway.download(ctx, settings.documents_bucket, row["file_path"]) == PDF


def test_upload_without_name_uses_filename(client, gateway, ctx):
    _upload(client, name="", filename="receipt-042.pdf")
    (row,) = gateway.select(ctx, "documents")
    assert row["name"] == "receipt-042.pdf"


def test_upload_without_file_is_rejected(client, gateway, ctx):
    client.post(
        "/dashboard/documents",
        data={"name": "Nothing", "document_type": "other"},
        follow_redirects=False,
    )
    assert "Please select a file" in client.get("/dashboard/documents").text
    assert gateway.select(ctx, "documents") == []


def test_upload_of_empty_file_is_rejected(client, gateway, ctx, settings):
    _upload(client, content=b"", filename="empty.pdf")
    assert "Please select a file" in client.get("/dashboard/documents").text
    assert gateway.select(ctx, "documents") == []
    assert _blobs(settings) == []


def test_upload_over_limit_is_rejected(client, gateway, ctx, settings):
    _upload(client, content=b"x" * (settings.max_upload_bytes + 1))
    assert "File too large. Maximum size is 1 MB." in client.get("/dashboard/documents").text
    assert gateway.select(ctx, "documents") == []
    assert _blobs(settings) == []


def test_failed_record_insert_removes_blob(client, gateway, settings):
    with patch.object(gateway, "insert", side_effect=GatewayError("insert failed")):
        _upload(client)
    assert "Error uploading document" in client.get("/dashboard/documents").text
    assert _blobs(settings) == []


def test_failed_blob_upload_creates_no_record(client, gateway, ctx):
    with patch.object(gateway, "upload", side_effect=GatewayError("bucket missing")):
        _upload(client)
    assert "Error uploading document" in client.get("/dashboard/documents").text
    assert gateway.select(ctx, "documents") == []


def test_download_returns_original_bytes(client, gateway, ctx):
    _upload(client, name="Return 2081.pdf")
    (row,) = gateway.select(ctx, "documents")

    resp = client.get(f"/dashboard/documents/{row['id']}/download")
    assert resp.status_code == 200
    assert resp.content == PDF
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.headers["content-disposition"] == "attachment; filename*=utf-8''Return%202081.pdf"


def test_download_failure_redirects_with_error(client, gateway, ctx):
    _upload(client)
    (row,) = gateway.select(ctx, "documents")

    with patch.object(gateway, "download", side_effect=GatewayError("gone")):
        resp = client.get(f"/dashboard/documents/{row['id']}/download", follow_redirects=False)
    assert resp.status_code == 303
    assert "Error downloading document" in client.get("/dashboard/documents").text


def test_delete_removes_blob_then_record(client, gateway, ctx, settings):
    _upload(client)
    (row,) = gateway.select(ctx, "documents")

    resp = client.delete(f"/dashboard/documents/{row['id']}")
    assert resp.headers["HX-Redirect"] == "/dashboard/documents"
    assert gateway.select(ctx, "documents") == []
    assert _blobs(settings) == []
    assert "Document deleted successfully" in client.get("/dashboard/documents").text


def test_delete_keeps_record_when_blob_removal_fails(client, gateway, ctx):
    _upload(client)
    (row,) = gateway.select(ctx, "documents")

    with patch.object(gateway, "remove", side_effect=GatewayError("storage down")):
        client.delete(f"/dashboard/documents/{row['id']}")
    assert len(gateway.select(ctx, "documents")) == 1
    assert "Error deleting document" in client.get("/dashboard/documents").text


def test_failed_record_delete_after_blob_removal_is_logged(client, gateway, ctx, settings, caplog):
    _upload(client)
    (row,) = gateway.select(ctx, "documents")

    caplog.set_level(logging.WARNING, logger="taxsathi.routes.documents")
    with patch.object(gateway, "delete", side_effect=GatewayError("db down")):
        client.delete(f"/dashboard/documents/{row['id']}")

    assert "Error deleting document" in client.get("/dashboard/documents").text
    assert len(gateway.select(ctx, "documents")) == 1
    assert _blobs(settings) == []
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert any(row["file_path"] in r.getMessage() and row["id"] in r.getMessage() for r in warnings)
