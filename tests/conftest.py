import os
import shutil
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from jose import jwt

SECRET_KEY = "ci-test-secret"
PROJECT_ID = "inventory-hub-test"
KEY_ID = "test-key"

DATABASE_DIR = Path(tempfile.mkdtemp(prefix="inventory-hub-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{DATABASE_DIR / 'test_inventory_hub.db'}"
os.environ["FIREBASE_PROJECT_ID"] = PROJECT_ID

from inventory_hub.auth import IdTokenVerifier, get_token_verifier  # noqa: E402
from inventory_hub.database import Base, engine  # noqa: E402
from inventory_hub.main import app  # noqa: E402


def make_token(uid: str, email: str = None, **claims) -> str:
    """Mint an ID token the way the identity provider would, signed with the test key."""
    now = datetime.now(timezone.utc)
    payload = {
        "iss": f"https://securetoken.google.com/{PROJECT_ID}",
        "aud": PROJECT_ID,
        "sub": uid,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=1)).timestamp()),
    }
    if email:
        payload["email"] = email
    payload.update(claims)
    return jwt.encode(payload, SECRET_KEY, algorithm="HS256", headers={"kid": KEY_ID})


def make_auth_headers(uid: str, email: str = None, **claims) -> dict:
    if email is None:
        email = f"{uid}@example.com"
    return {"Authorization": f"Bearer {make_token(uid, email, **claims)}"}


def build_test_verifier() -> IdTokenVerifier:
    return IdTokenVerifier(
        project_id=PROJECT_ID,
        keys={KEY_ID: SECRET_KEY},
        algorithms=["HS256"],
    )


@pytest.fixture(scope="session", autouse=True)
def database_dir():
    yield DATABASE_DIR
    engine.dispose()
    shutil.rmtree(DATABASE_DIR, ignore_errors=True)


@pytest.fixture(autouse=True)
def prepare_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    app.dependency_overrides[get_token_verifier] = build_test_verifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    """The first user to show up, and therefore the admin."""
    headers = make_auth_headers("admin-uid")
    response = client.post("/api/auth/create-user-record", headers=headers)
    assert response.json()["is_admin"] is True
    return headers


@pytest.fixture
def alice_headers(client, admin_headers):
    return make_auth_headers("alice-uid")


@pytest.fixture
def bob_headers(client, admin_headers):
    return make_auth_headers("bob-uid")


def create_inventory(client, headers, **overrides) -> dict:
    payload = {
        "name": "Workshop",
        "description": "Tools in the garage",
        "fields_schema": [
            {"type": "string", "label": "Name"},
            {"type": "number", "label": "Quantity"},
        ],
    }
    payload.update(overrides)
    response = client.post("/api/inventories", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def create_item(client, headers, inventory_id: int, data: dict, custom_id: str = None) -> dict:
    response = client.post(
        "/api/items",
        json={"inventory_id": inventory_id, "data": data, "custom_id": custom_id},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()
