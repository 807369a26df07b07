"""Tests for the password login route."""

from fleetops.application.use_cases.users import create_user


def test_login_returns_a_usable_token(client, app_session) -> None:
    create_user(
        app_session,
        name="Fleet Admin",
        email="admin@example.com",
        password="s3cure-pass",
        role="admin",
    )

    response = client.post(
        "/auth/token", data={"username": "admin@example.com", "password": "s3cure-pass"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["role"] == "admin"
    listing = client.get(
        "/notifications/", headers={"Authorization": f"Bearer {body['access_token']}"}
    )
    assert listing.status_code == 200


def test_login_rejects_wrong_password(client, app_session) -> None:
    create_user(
        app_session,
        name="Fleet Admin",
        email="admin@example.com",
        password="s3cure-pass",
        role="admin",
    )

    response = client.post(
        "/auth/token", data={"username": "admin@example.com", "password": "wrong-pass"}
    )

    assert response.status_code == 401
