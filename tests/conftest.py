from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taxsathi.config import Settings
from taxsathi.gateway import UserContext
from taxsathi.gateway.local import LocalGateway


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path, secret_key="test-secret", max_upload_mb=1)


@pytest.fixture
def gateway(settings):
    return LocalGateway(settings.db_path, settings.storage_dir)


@pytest.fixture
def app(settings, gateway):
    from taxsathi.web import create_app

    return create_app(settings=settings, gateway=gateway)


@pytest.fixture
def anon(app):
    return TestClient(app)


@pytest.fixture
def client(app):
    """A browser session signed in as a fresh staff member."""
    c = TestClient(app)
    resp = c.post(
        "/auth/sign-up",
        data={"email": "staff@taxsathi.test", "password": "s3cret-pass", "full_name": "Sushil"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    return c


@pytest.fixture
def ctx(client, gateway) -> UserContext:
    """The gateway-side identity of the signed-in ``client``."""
    return gateway.sign_in("staff@taxsathi.test", "s3cret-pass")


@pytest.fixture
def owner(gateway) -> UserContext:
    return gateway.sign_up("owner@taxsathi.test", "pw-owner", "Owner")
