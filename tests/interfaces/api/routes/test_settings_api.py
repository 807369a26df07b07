"""Tests for the notification settings routes."""

from conftest import auth_headers, make_user


def test_defaults_are_returned_when_nothing_is_stored(client, app_session, settings) -> None:
    user = make_user(app_session, email="manager@example.com")

    response = client.get("/settings/notifications", headers=auth_headers(user, settings))

    assert response.status_code == 200
    assert response.json() == {
        "email": True,
        "sms": False,
        "push": True,
        "compliance": True,
        "maintenance": True,
        "fuel": False,
        "system": True,
    }


def test_preferences_round_trip(client, app_session, settings) -> None:
    user = make_user(app_session, email="manager@example.com")
    headers = auth_headers(user, settings)

    saved = client.put(
        "/settings/notifications", json={"sms": True, "fuel": True, "email": False}, headers=headers
    )
    loaded = client.get("/settings/notifications", headers=headers)

    assert saved.status_code == 200
    assert loaded.json() == saved.json()
    assert loaded.json()["sms"] is True
    assert loaded.json()["email"] is False
    assert loaded.json()["push"] is True


def test_unknown_flags_are_rejected(client, app_session, settings) -> None:
    user = make_user(app_session, email="manager@example.com")

    response = client.put(
        "/settings/notifications", json={"whatsapp": True}, headers=auth_headers(user, settings)
    )

    assert response.status_code == 422


def test_settings_require_authentication(client) -> None:
    assert client.get("/settings/notifications").status_code == 401
