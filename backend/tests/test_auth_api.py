"""
AP Exam Sync: Demo Auth Endpoint Tests
=======================================

What we test:
    ✅ Signup returns the public record and rejects duplicate emails
    ✅ Login matches email and password exactly
    ✅ Passwords never appear in responses
"""

import pytest


class TestSignup:

    @pytest.mark.asyncio
    async def test_signup_then_duplicate(self, test_client):
        body = {"email": "a@b.com", "password": "x", "name": "A"}

        first = await test_client.post("/api/auth/signup", json=body)
        second = await test_client.post("/api/auth/signup", json=body)

        assert first.status_code == 200
        user = first.json()
        assert set(user) == {"id", "email", "name"}
        assert user["email"] == "a@b.com"
        assert user["name"] == "A"

        assert second.status_code == 400
        assert second.json() == {"error": "Email exists"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"email": "a@b.com", "password": "x"},
            {"email": "a@b.com", "name": "A"},
            {"email": "", "password": "x", "name": "A"},
        ],
    )
    async def test_missing_fields(self, test_client, body):
        response = await test_client.post("/api/auth/signup", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing fields"}

    @pytest.mark.asyncio
    async def test_no_body_is_missing_fields(self, test_client):
        response = await test_client.post("/api/auth/signup")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing fields"}


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success(self, test_client, registered_user):
        response = await test_client.post(
            "/api/auth/login", json={"email": "author@example.com", "password": "secret"}
        )

        assert response.status_code == 200
        assert response.json() == registered_user

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"email": "author@example.com", "password": "wrong"},
            {"email": "AUTHOR@example.com", "password": "secret"},
            {"email": "nobody@example.com", "password": "secret"},
            {},
        ],
    )
    async def test_invalid_credentials(self, test_client, registered_user, body):
        response = await test_client.post("/api/auth/login", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid credentials"}
