from datetime import timedelta
from fastapi import status

from usage_tracker.core.security import create_access_token


def test_register_returns_user_and_tokens(registered_user):
    assert registered_user["user"]["username"] == "mindful_user"
    assert registered_user["user"]["email"] == "mindful@example.com"
    assert "password" not in registered_user["user"]
    assert registered_user["tokens"]["accessToken"]
    assert registered_user["tokens"]["refreshToken"]


def test_register_duplicate_email_conflicts(test_client, registered_user):
    response = test_client.post("/api/auth/register", json={
        "username": "another_user",
        "email": "mindful@example.com",
        "password": "secret123"
    })

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {"success": False, "message": "User with this email already exists"}


def test_register_rejects_invalid_username(test_client):
    response = test_client.post("/api/auth/register", json={
        "username": "bad name!",
        "email": "someone@example.com",
        "password": "secret123"
    })

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["success"] is False
    assert "letters, numbers, and underscores" in response.json()["message"]


def test_register_missing_field_is_400(test_client):
    response = test_client.post("/api/auth/register", json={"username": "someone"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["success"] is False
    assert body["errors"]


def test_login_and_me(test_client, registered_user):
    response = test_client.post("/api/auth/login", json={
        "email": "MINDFUL@example.com",
        "password": "secret123"
    })
    assert response.status_code == status.HTTP_200_OK
    token = response.json()["data"]["tokens"]["accessToken"]

    me = test_client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert me.status_code == status.HTTP_200_OK
    assert me.json()["data"]["user"]["username"] == "mindful_user"


def test_login_wrong_password(test_client, registered_user):
    response = test_client.post("/api/auth/login", json={
        "email": "mindful@example.com",
        "password": "wrong-password"
    })

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "Invalid email or password"


def test_me_requires_token(test_client):
    response = test_client.get("/api/auth/me")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["success"] is False


def test_expired_token_has_code(test_client, registered_user):
    token = create_access_token(registered_user["user"]["id"], expires_delta=timedelta(seconds=-10))

    response = test_client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "TOKEN_EXPIRED"


def test_refresh_rotates_tokens(test_client, registered_user):
    old_refresh = registered_user["tokens"]["refreshToken"]

    response = test_client.post("/api/auth/refresh", json={"refreshToken": old_refresh})
    assert response.status_code == status.HTTP_200_OK
    new_refresh = response.json()["data"]["tokens"]["refreshToken"]
    assert new_refresh != old_refresh

    # The rotated-out token can no longer be used
    reused = test_client.post("/api/auth/refresh", json={"refreshToken": old_refresh})
    assert reused.status_code == status.HTTP_401_UNAUTHORIZED


def test_access_token_is_not_a_refresh_token(test_client, registered_user):
    response = test_client.post(
        "/api/auth/refresh",
        json={"refreshToken": registered_user["tokens"]["accessToken"]}
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_logout_invalidates_refresh_token(test_client, registered_user, auth_headers):
    response = test_client.post("/api/auth/logout", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK

    refresh = test_client.post(
        "/api/auth/refresh",
        json={"refreshToken": registered_user["tokens"]["refreshToken"]}
    )
    assert refresh.status_code == status.HTTP_401_UNAUTHORIZED
