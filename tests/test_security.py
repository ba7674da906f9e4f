"""Tests for the TOKEN header check."""
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.main import create_app
from conftest import make_product


def test_missing_token(client):
    client.headers.pop("TOKEN")

    response = client.get("/products")

    assert response.status_code == 401
    assert response.json()["detail"] == "token not found"


def test_invalid_token(client):
    response = client.get("/products", headers={"TOKEN": "wrong"})

    assert response.status_code == 401
    assert response.json()["detail"] == "invalid token"


def test_health_needs_no_token(client):
    client.headers.pop("TOKEN")

    assert client.get("/health").status_code == 200


def test_unconfigured_token_rejects_requests(json_store):
    """Test a deployment without a TOKEN refuses every products request."""
    app = create_app(Settings(TOKEN="", _env_file=None), store=json_store)

    with TestClient(app) as client:
        missing = client.post("/products", json=make_product().model_dump())
        guessed = client.get("/products", headers={"TOKEN": "anything"})
        listed = client.get("/products")

    assert missing.status_code == 401
    assert missing.json()["detail"] == "token not found"
    assert guessed.status_code == 401
    assert guessed.json()["detail"] == "invalid token"
    assert listed.status_code == 401
    assert json_store.get_all() == []


def test_require_token_off_disables_check(json_store):
    app = create_app(Settings(TOKEN="", REQUIRE_TOKEN=False, _env_file=None), store=json_store)

    with TestClient(app) as client:
        response = client.get("/products")

    assert response.status_code == 200
    assert response.json() == []
