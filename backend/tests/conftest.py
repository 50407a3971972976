from __future__ import annotations

import os

# Settings are read once at import time, so these must be set before staffdesk loads.
os.environ.setdefault("STAFFDESK_DATABASE_URL", "sqlite://")
os.environ.setdefault("STAFFDESK_STORAGE_BACKEND", "sql")
os.environ.setdefault("STAFFDESK_JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from staffdesk.db.session import Base, SessionLocal, create_schema, engine
from staffdesk.main import app
from staffdesk.seed.seed_data import seed
from staffdesk.storage import JsonFileStorage, SqlStorage


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    create_schema(engine)
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def sql_storage():
    db = SessionLocal()
    try:
        yield SqlStorage(db)
    finally:
        db.close()


@pytest.fixture
def json_storage(tmp_path):
    return JsonFileStorage(tmp_path / "store.json")


@pytest.fixture(params=["sql", "json"])
def storage(request):
    """Each repository test runs once per storage adapter."""
    return request.getfixturevalue(f"{request.param}_storage")


@pytest.fixture
def seeded_storage(storage):
    seed(storage)
    return storage


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "password"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
