"""Tests for session tokens and the login endpoints."""

import pytest

from api.session import Role, create_token, decode_role


@pytest.fixture(autouse=True)
def accounts(monkeypatch):
    monkeypatch.setattr("api.session.ADMIN_USERNAME", "admin")
    monkeypatch.setattr("api.session.ADMIN_PASSWORD", "admin-pass")
    monkeypatch.setattr("api.session.EDITOR_USERNAME", "editor")
    monkeypatch.setattr("api.session.EDITOR_PASSWORD", "editor-pass")


def test_token_round_trip():
    assert decode_role(create_token(Role.EDITOR)) == Role.EDITOR


def test_expired_token_is_default():
    assert decode_role(create_token(Role.ADMIN, ttl_seconds=-10)) == Role.DEFAULT


def test_garbage_token_is_default():
    assert decode_role("not-a-token") == Role.DEFAULT


def test_token_signed_with_other_secret(monkeypatch):
    token = create_token(Role.ADMIN)
    monkeypatch.setattr("api.session.JWT_SECRET", "another-secret")
    assert decode_role(token) == Role.DEFAULT


def test_missing_secret_refuses_to_sign(monkeypatch):
    monkeypatch.setattr("api.session.JWT_SECRET", "")
    with pytest.raises(RuntimeError):
        create_token(Role.ADMIN)


def test_login_admin_sets_cookie(client):
    resp = client.post("/api/login", json={"username": "admin", "password": "admin-pass"})
    assert resp.status_code == 200
    assert resp.json() == "Admin"
    cookie = resp.headers["set-cookie"]
    assert "session_token=" in cookie
    assert "HttpOnly" in cookie
    assert "samesite=strict" in cookie.lower()


def test_login_editor(client):
    resp = client.post("/api/login", json={"username": "editor", "password": "editor-pass"})
    assert resp.json() == "Editor"


def test_login_wrong_password(client):
    resp = client.post("/api/login", json={"username": "admin", "password": "nope"})
    assert resp.status_code == 401
    body = resp.json()
    assert body["code"] == 401
    assert body["message"] == "Invalid username or password."


def test_login_missing_fields(client):
    resp = client.post("/api/login", json={"username": "admin"})
    assert resp.status_code == 400


def test_current_role(client, admin_headers, editor_headers):
    assert client.get("/api/current").json() == "Default"
    assert client.get("/api/current", headers=admin_headers).json() == "Admin"
    assert client.get("/api/current", headers=editor_headers).json() == "Editor"


def test_current_role_from_cookie(client):
    client.cookies.set("session_token", create_token(Role.EDITOR))
    assert client.get("/api/current").json() == "Editor"


def test_logout_clears_cookie(client):
    resp = client.post("/api/logout")
    assert resp.status_code == 200
    assert "session_token=" in resp.headers["set-cookie"]
