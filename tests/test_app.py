import json
from pathlib import Path

from fastapi import status

from conftest import create_inventory
from inventory_hub.config import settings


def test_root_and_health(client):
    root = client.get("/")
    assert root.status_code == status.HTTP_200_OK
    assert root.json()["ok"] is True

    health = client.get("/health")
    assert health.json() == {"status": "healthy"}


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_is_generated(client):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]


def test_requests_are_logged_with_context(client, caplog):
    caplog.set_level("INFO")
    client.get("/health", headers={"X-Request-ID": "req-456"})

    entries = []
    for record in caplog.records:
        try:
            entries.append(json.loads(record.getMessage()))
        except json.JSONDecodeError:
            continue

    completed = [e for e in entries if e.get("event") == "request_completed"]
    assert completed
    assert completed[-1]["request_id"] == "req-456"
    assert completed[-1]["path"] == "/health"
    assert completed[-1]["status_code"] == 200


def test_unknown_route_uses_error_shape(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Not Found"}


def test_collection_paths_are_served_without_redirect(client, alice_headers):
    created = client.post(
        "/api/inventories", json={"name": "Attic"}, headers=alice_headers, follow_redirects=False
    )
    assert created.status_code == status.HTTP_201_CREATED
    inventory_id = created.json()["id"]

    item = client.post(
        "/api/items",
        json={"inventory_id": inventory_id, "data": {"custom_string1": "Lamp"}},
        headers=alice_headers,
        follow_redirects=False,
    )
    assert item.status_code == status.HTTP_201_CREATED

    for path, params in (
        ("/api/inventories", {}),
        ("/api/items", {"inventory_id": inventory_id}),
        ("/api/search", {"q": "lamp"}),
    ):
        for variant in (path, path + "/"):
            response = client.get(
                variant, params=params, headers=alice_headers, follow_redirects=False
            )
            assert response.status_code == status.HTTP_200_OK, variant


def test_trailing_slash_aliases_are_hidden_from_openapi(client):
    paths = client.get("/openapi.json").json()["paths"]
    assert "/api/inventories" in paths
    assert "/api/inventories/" not in paths
    assert "/api/search/" not in paths


def test_database_lives_outside_the_source_tree():
    database = Path(settings.DATABASE_URL.replace("sqlite:///", "", 1)).resolve()
    assert Path(__file__).resolve().parent not in database.parents


def test_trailing_slash_create_still_works(client, alice_headers):
    inventory = create_inventory(client, alice_headers)
    response = client.post(
        "/api/items/",
        json={"inventory_id": inventory["id"], "data": {"custom_string1": "Saw"}},
        headers=alice_headers,
        follow_redirects=False,
    )
    assert response.status_code == status.HTTP_201_CREATED
