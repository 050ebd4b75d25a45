"""
Tests for authentication endpoints.
"""
from datetime import timedelta

from tripplanner.core.security import create_access_token, get_password_hash, verify_password


def test_register(client):
    """Test user registration."""
    response = client.post(
        "/api/auth/register",
        json={
            "email": "Test@Example.com",
            "password": "testpassword123",
            "name": "Test User"
        }
    )
    assert response.status_code == 201
    data = response.json()
    assert data["token"]
    assert data["user"]["email"] == "test@example.com"
    assert data["user"]["name"] == "Test User"


def test_register_duplicate_email(client, register):
    register(email="dup@example.com")
    response = client.post(
        "/api/auth/register",
        json={"email": "dup@example.com", "password": "other"}
    )
    assert response.status_code == 400


def test_login(client, register):
    """Test user login."""
    _, user = register(email="test2@example.com", password="testpassword123")

    response = client.post(
        "/api/auth/login",
        json={
            "email": "test2@example.com",
            "password": "testpassword123"
        }
    )
    assert response.status_code == 200
    assert response.json()["user"]["id"] == user["id"]
    assert "token" in response.json()


def test_login_invalid_credentials(client, register):
    """Test login with invalid credentials."""
    register(email="test3@example.com", password="right")

    response = client.post(
        "/api/auth/login",
        json={"email": "test3@example.com", "password": "wrongpassword"}
    )
    assert response.status_code == 401

    response = client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": "wrongpassword"}
    )
    assert response.status_code == 401


def test_me_requires_token(client):
    assert client.get("/api/users/me").status_code == 401
    response = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_update_profile(client, auth_headers):
    response = client.patch("/api/users/me", json={"name": "Alice"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Alice"
    assert client.get("/api/users/me", headers=auth_headers).json()["name"] == "Alice"


def test_expired_token_is_rejected(client, register):
    _, user = register()
    token = create_access_token(user["id"], expires_delta=timedelta(minutes=-1))
    response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_long_passwords_are_not_truncated():
    password = "x" * 100
    hashed = get_password_hash(password)
    assert verify_password(password, hashed)
    assert not verify_password("x" * 99, hashed)
    assert not verify_password(password, "")
