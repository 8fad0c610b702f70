"""
HTTP surface exercised through FastAPI's TestClient against a temp data dir.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Makes the flatrest package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flatrest.app import create_app  # noqa: E402
from flatrest.core import config as core_config  # noqa: E402

USERS = [
    {"id": 1, "name": "Alice", "email": "alice@example.com", "role": "admin"},
    {"id": 2, "name": "Bob", "email": "bob@example.com", "role": "peasant"},
]


@pytest.fixture()
def data_dir(tmp_path, monkeypatch):
    """Points DATA_DIR at a temp folder and resets the settings cache."""
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.delenv("DEFAULT_ROLE", raising=False)
    core_config.get_settings.cache_clear()
    (tmp_path / "users.json").write_text(json.dumps(USERS), encoding="utf-8")
    (tmp_path / "products.json").write_text('[{"id": 1, "name": "Laptop"}]', encoding="utf-8")
    (tmp_path / "orders.json").write_text("[]", encoding="utf-8")
    yield tmp_path
    core_config.get_settings.cache_clear()


@pytest.fixture()
def client(data_dir):
    with TestClient(create_app()) as c:
        yield c


def _stored_users(data_dir: Path):
    return json.loads((data_dir / "users.json").read_text(encoding="utf-8"))


def test_list_users(client):
    resp = client.get("/users")
    assert resp.status_code == 200
    assert resp.json() == USERS
    assert resp.headers.get("x-request-id")


def test_pretty_users_is_indented(client):
    resp = client.get("/prettyusers")
    assert resp.status_code == 200
    assert resp.json() == USERS
    assert resp.text.startswith('[\n  {\n    "id": 1')


def test_list_users_unavailable_is_500(client, data_dir):
    (data_dir / "users.json").unlink()
    resp = client.get("/users")
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Error reading users data"


def test_get_user_by_id(client):
    resp = client.get("/api/users/2")
    assert resp.status_code == 200
    assert resp.json() == USERS[1]


@pytest.mark.parametrize("user_id", ["99", "abc"])
def test_get_user_not_found(client, user_id):
    resp = client.get(f"/api/users/{user_id}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "User not found"


def test_get_user_corrupt_file_is_500(client, data_dir):
    (data_dir / "users.json").write_text("{oops", encoding="utf-8")
    assert client.get("/api/users/1").status_code == 500


def test_catalog_lists(client):
    assert client.get("/api/products").json() == [{"id": 1, "name": "Laptop"}]
    assert client.get("/api/orders").json() == []


def test_catalog_missing_file_is_500(client, data_dir):
    (data_dir / "orders.json").unlink()
    resp = client.get("/api/orders")
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Error reading orders data"


def test_post_user_defaults_role_and_persists(client, data_dir):
    resp = client.post("/users", json={"name": "John Doe", "email": "john@example.com"})
    assert resp.status_code == 201
    assert resp.json() == {"id": 3, "name": "John Doe", "email": "john@example.com", "role": "peasant"}
    assert _stored_users(data_dir)[-1] == resp.json()
    assert _stored_users(data_dir)[:2] == USERS


def test_post_user_keeps_role(client):
    resp = client.post("/users", json={"name": "K", "role": "king"})
    assert resp.status_code == 201
    assert resp.json()["role"] == "king"


def test_post_user_end_to_end_from_empty(client, data_dir):
    (data_dir / "users.json").write_text("[]", encoding="utf-8")
    resp = client.post("/users", json={"name": "John Doe", "email": "john@example.com"})
    expected = {"id": 1, "name": "John Doe", "email": "john@example.com", "role": "peasant"}
    assert resp.json() == expected
    assert _stored_users(data_dir) == [expected]


@pytest.mark.parametrize("body", [b"{broken", b"[1, 2]", b'"text"'])
def test_post_user_rejects_non_object_body(client, data_dir, body):
    resp = client.post("/users", content=body, headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert _stored_users(data_dir) == USERS


def test_post_user_missing_file_is_500(client, data_dir):
    (data_dir / "users.json").unlink()
    resp = client.post("/users", json={"name": "x"})
    assert resp.status_code == 500
    assert not (data_dir / "users.json").exists()


def test_put_and_delete_user(client, data_dir):
    resp = client.put("/api/users/1", json={"name": "Alicia"})
    assert resp.status_code == 200
    assert resp.json() == {"id": 1, "name": "Alicia"}

    resp = client.delete("/api/users/2")
    assert resp.status_code == 200
    assert resp.json() == USERS[1]
    assert _stored_users(data_dir) == [{"id": 1, "name": "Alicia"}]

    assert client.delete("/api/users/2").status_code == 404
    assert client.put("/api/users/7", json={"name": "x"}).status_code == 404


def test_echo_examples(client, data_dir):
    assert client.get("/get").text == "GET request received. You can now test /users"
    assert client.post("/api/postExample", json={"a": 1}).text == 'POST request received with data: {"a": 1}'
    assert client.put("/api/putExample/5", json={"a": 1}).text == 'PUT request received for ID 5 with data: {"a": 1}'
    assert client.delete("/api/deleteExample/5").text == "DELETE request received for ID 5"
    assert client.get("/foo/bar/baz").text == "GET request, req.params are foo bar baz"
    assert _stored_users(data_dir) == USERS


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


@pytest.mark.parametrize("user_id", ["1_0", "%201", "1%20", "+10", "%D9%A1"])
def test_user_id_must_be_plain_decimal(client, data_dir, user_id):
    users = USERS + [{"id": 10, "name": "T"}]
    (data_dir / "users.json").write_text(json.dumps(users), encoding="utf-8")

    assert client.get(f"/api/users/{user_id}").status_code == 404
    assert client.delete(f"/api/users/{user_id}").status_code == 404
    assert client.put(f"/api/users/{user_id}", json={"name": "x"}).status_code == 404
    assert _stored_users(data_dir) == users


def test_post_user_persists_id_as_first_key(client, data_dir):
    resp = client.post("/users", json={"name": "John Doe", "email": "john@example.com"})
    assert list(resp.json()) == ["id", "name", "email", "role"]
    assert list(_stored_users(data_dir)[-1]) == ["id", "name", "email", "role"]


def test_corrupt_entries_are_500_not_served(client, data_dir):
    (data_dir / "products.json").write_text('[1, "x"]', encoding="utf-8")
    assert client.get("/api/products").status_code == 500


def test_default_role_comes_from_app_settings(data_dir, monkeypatch):
    monkeypatch.setenv("DEFAULT_ROLE", "serf")
    core_config.get_settings.cache_clear()
    with TestClient(create_app()) as c:
        assert c.post("/users", json={"name": "x"}).json()["role"] == "serf"


def test_docs_disabled_in_prod(data_dir, monkeypatch):
    monkeypatch.setenv("APP_ENV", "prod")
    core_config.get_settings.cache_clear()
    with TestClient(create_app()) as c:
        assert c.get("/openapi.json").status_code == 404
        assert c.get("/users").status_code == 200
    core_config.get_settings.cache_clear()
    monkeypatch.delenv("APP_ENV")
    with TestClient(create_app()) as c:
        assert c.get("/openapi.json").status_code == 200
