"""End-to-end tests for the page password flow."""

from hashlib import sha256

import pytest
from fastapi.testclient import TestClient

from margin.interface.api.app import create_app
from tests.di import build_test_container

PASSWORD = "open-sesame"


@pytest.fixture
def client(monkeypatch):
    """Create test client with one protected page provisioned at startup."""
    monkeypatch.setenv(
        "PROTECTED_PAGES",
        '[{"page_id": "dimanche", "page_name": "Dimanche", '
        f'"password": "{PASSWORD}"}}]',
    )
    with TestClient(create_app(build_test_container())) as test_client:
        yield test_client


def answer(challenge: str, salt: str, password: str = PASSWORD) -> str:
    """Compute the challenge response the way a browser client does."""
    local = sha256((salt + password).encode()).hexdigest()
    return sha256((challenge + local).encode()).hexdigest()


def unlock(client, password: str = PASSWORD):
    issued = client.get("/api/auth-challenge/dimanche").json()
    return client.post(
        "/api/verify-password",
        json={
            "pageId": "dimanche",
            "challenge": issued["challenge"],
            "hash": answer(issued["challenge"], issued["salt"], password),
        },
    )


class TestPageAuthApi:
    """End-to-end tests for challenge, verify and access check."""

    def test_challenge_for_provisioned_page(self, client):
        response = client.get("/api/auth-challenge/dimanche")

        assert response.status_code == 200
        data = response.json()
        assert len(data["challenge"]) == 64
        assert len(data["salt"]) == 32
        assert "expiresAt" in data

    def test_challenge_for_unknown_page(self, client):
        response = client.get("/api/auth-challenge/nowhere")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_correct_password_unlocks_page(self, client):
        verified = unlock(client)

        assert verified.status_code == 200
        token = verified.json()["accessToken"]
        assert verified.json()["message"] == "Authentication successful"

        access = client.get(
            "/api/pages/dimanche/access",
            headers={"Authorization": f"Bearer {token}"},
        )
        assert access.status_code == 200
        assert access.json()["authorized"] is True

    def test_wrong_password_is_unauthorized(self, client):
        response = unlock(client, password="guess")

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "message": "Invalid authentication",
        }

    def test_challenge_cannot_be_replayed(self, client):
        issued = client.get("/api/auth-challenge/dimanche").json()
        body = {
            "pageId": "dimanche",
            "challenge": issued["challenge"],
            "hash": answer(issued["challenge"], issued["salt"]),
        }

        first = client.post("/api/verify-password", json=body)
        second = client.post("/api/verify-password", json=body)

        assert first.status_code == 200
        assert second.status_code == 401

    def test_missing_fields_are_bad_request(self, client):
        response = client.post("/api/verify-password", json={"pageId": "dimanche"})

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required fields"

    def test_access_without_token_is_unauthorized(self, client):
        response = client.get("/api/pages/dimanche/access")

        assert response.status_code == 401

    def test_token_for_another_page_is_unauthorized(self, client):
        token = unlock(client).json()["accessToken"]

        response = client.get(
            "/api/pages/elsewhere/access",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401
