"""
Tests for authentication API endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.unit
class TestAuthEndpoints:
    """Test authentication endpoints."""

    async def test_register_validation(self, client: AsyncClient) -> None:
        """Test that registration validates input."""
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "email": "not-an-email",
                "password": "short",
                "username": "ab",  # Too short
            },
        )
        assert response.status_code == 422

    async def test_register_returns_token(self, client: AsyncClient, register_user) -> None:
        body = await register_user(client, "alice")

        assert body["token_type"] == "bearer"
        assert body["access_token"]
        assert body["user"]["username"] == "alice"
        assert "password_hash" not in body["user"]

    async def test_register_duplicate_username(self, client: AsyncClient, register_user) -> None:
        await register_user(client, "alice")

        response = await client.post(
            "/api/v1/auth/register",
            json={"username": "Alice", "email": "second@example.com", "password": "secret123"},
        )
        assert response.status_code == 422
        assert response.json()["detail"] == "Username already exists"

    async def test_login(self, client: AsyncClient, register_user) -> None:
        await register_user(client, "alice", password="secret123")

        response = await client.post("/api/v1/auth/login", json={"username": "alice", "password": "secret123"})
        assert response.status_code == 200
        assert response.json()["user"]["username"] == "alice"

    async def test_login_wrong_password(self, client: AsyncClient, register_user) -> None:
        await register_user(client, "alice", password="secret123")

        response = await client.post("/api/v1/auth/login", json={"username": "alice", "password": "wrong"})
        assert response.status_code == 401

    async def test_me(self, client: AsyncClient, register_user, auth_header) -> None:
        body = await register_user(client, "alice")

        response = await client.get("/api/v1/auth/me", headers=auth_header(body))
        assert response.status_code == 200
        assert response.json()["id"] == body["user"]["id"]

    async def test_me_requires_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/auth/me")
        assert response.status_code == 401

    async def test_me_rejects_bad_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401
