"""Shared fixtures: isolated settings, an app per test, and direct store access."""

import os
import tempfile
from datetime import date

# Setup environment for testing before anything reads settings
os.environ["DEVTRACK_DATA_DIR"] = tempfile.mkdtemp()
os.environ["DEVTRACK_DB_PATH"] = os.path.join(os.environ["DEVTRACK_DATA_DIR"], "test.db")
os.environ["DEVTRACK_JWT_SECRET"] = "devtrack-test-secret-0123456789abcdef"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from devtrack.config import Settings
from devtrack.database import build_engine, init_db
from devtrack.main import create_app
from devtrack.models.device import Device
from devtrack.services.device_lifecycle import DeviceLifecycle
from devtrack.services.device_store import DeviceStore


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_dir=tmp_path,
        db_path=tmp_path / "devtrack.db",
        jwt_secret="devtrack-test-secret-0123456789abcdef",
        timezone="UTC",
    )


@pytest.fixture
def engine(settings):
    engine = build_engine(settings)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def store(session):
    return DeviceStore(session)


@pytest.fixture
def lifecycle(store):
    return DeviceLifecycle(store)


@pytest.fixture
def make_device(store):
    """Insert a device directly, bypassing lifecycle rules."""

    def _make(device_id, *, is_issued=False, issued_to=None, date_issued=None, created_at=None):
        device = Device(
            device_id=device_id,
            date_added=date(2024, 1, 1),
            is_issued=is_issued,
            issued_to=issued_to,
            date_issued=date_issued,
        )
        if created_at is not None:
            device.created_at = created_at
        return store.insert(device)

    return _make


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers(client):
    r = client.post("/api/register", json={"username": "tester", "password": "test1234"})
    assert r.status_code == 201, r.text
    return {"Authorization": f"Bearer {r.json()['accessToken']}"}
