from __future__ import annotations

import pytest
from typer.testing import CliRunner

from taxsathi.cli import app
from taxsathi.gateway.local import LocalGateway

runner = CliRunner()


@pytest.fixture(autouse=True)
def local_env(tmp_path, monkeypatch):
    monkeypatch.setenv("TAXSATHI_BACKEND", "local")
    monkeypatch.setenv("TAXSATHI_DATA_DIR", str(tmp_path))
    return tmp_path


def test_init_db(local_env):
    result = runner.invoke(app, ["init-db"])
    assert result.exit_code == 0
    assert (local_env / "taxsathi.db").exists()


def test_create_user_then_sign_in(local_env):
    result = runner.invoke(app, ["create-user", "ca@taxsathi.test", "--password", "pw123456"])
    assert result.exit_code == 0
    assert "Created user" in result.output

    gateway = LocalGateway(local_env / "taxsathi.db", local_env / "storage")
    assert gateway.sign_in("ca@taxsathi.test", "pw123456").email == "ca@taxsathi.test"


def test_create_duplicate_user_fails(local_env):
    runner.invoke(app, ["create-user", "ca@taxsathi.test", "--password", "pw"])
    result = runner.invoke(app, ["create-user", "ca@taxsathi.test", "--password", "pw"])
    assert result.exit_code == 1
    assert "Could not create user" in result.output


def test_inquiries_empty(local_env):
    result = runner.invoke(app, ["inquiries"])
    assert result.exit_code == 0
    assert "All clear" in result.output


def test_inquiries_lists_only_new_unless_all(local_env):
    gateway = LocalGateway(local_env / "taxsathi.db", local_env / "storage")
    gateway.insert(None, "contact_inquiries", {"name": "Ram", "email": "r@x.np", "message": "Hi"})
    gateway.insert(
        None,
        "contact_inquiries",
        {"name": "Gita", "email": "g@x.np", "message": "Hi", "status": "in_progress"},
    )
    gateway.insert(
        None,
        "contact_inquiries",
        {"name": "Hari", "email": "h@x.np", "message": "Hi", "status": "responded"},
    )

    result = runner.invoke(app, ["inquiries"])
    assert "Ram" in result.output
    assert "Hari" not in result.output
    assert "Gita" not in result.output

    result = runner.invoke(app, ["inquiries", "--all"])
    assert "Hari" in result.output
    assert "Gita" in result.output


def test_local_commands_refuse_supabase_backend(monkeypatch):
    monkeypatch.setenv("TAXSATHI_BACKEND", "supabase")
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "k")
    result = runner.invoke(app, ["init-db"])
    assert result.exit_code == 1
