# tests/test_auth_api.py

from __future__ import annotations

import os

import pytest

from app.core.config import settings
from app.utils.auth_utils import decode_token

AUTH = "/api/v1/auth"
ADMIN_SECRET = os.environ["ADMIN_SECRET"]
USER = {"name": "Alice", "email": "alice@example.com", "password": "secret1"}


def test_health(client):
    res = client.get("/api/v1/health")
    assert res.status_code == 200
    assert res.json() == {"message": "Server is running!"}


def test_register_then_login_issues_user_token(client, fake_db):
    res = client.post(f"{AUTH}/register", json=USER)
    assert res.status_code == 201
    assert res.json() == {"message": "User registered successfully"}

    stored = fake_db.users.docs[0]
    assert stored["role"] == "user"
    assert stored["password"] != USER["password"]

    res = client.post(f"{AUTH}/login", json={"email": USER["email"], "password": USER["password"]})
    assert res.status_code == 200
    body = res.json()
    assert body["role"] == "user"
    claims = decode_token(body["token"])
    assert claims["userId"] == str(stored["_id"])
    assert claims["role"] == "user"
    assert "exp" in claims


def test_register_normalizes_email_and_rejects_duplicates(client):
    assert client.post(f"{AUTH}/register", json=USER).status_code == 201

    res = client.post(f"{AUTH}/register", json={**USER, "email": "ALICE@example.com"})

    assert res.status_code == 400
    assert res.json() == {"message": "User already exists"}


@pytest.mark.parametrize("body", [
    {"email": "a@example.com", "password": "secret1"},
    {"name": "A", "email": "not-an-email", "password": "secret1"},
    {"name": "A", "email": "a@example.com", "password": "123"},
    {"name": "   ", "email": "a@example.com", "password": "secret1"},
])
def test_register_rejects_bad_input_with_400(client, fake_db, body):
    res = client.post(f"{AUTH}/register", json=body)

    assert res.status_code == 400
    assert "message" in res.json()
    assert fake_db.users.docs == []


@pytest.mark.parametrize("email,password", [
    ("alice@example.com", "wrong-password"),
    ("nobody@example.com", "secret1"),
])
def test_login_failures_share_one_message(client, email, password):
    client.post(f"{AUTH}/register", json=USER)

    res = client.post(f"{AUTH}/login", json={"email": email, "password": password})

    assert res.status_code == 401
    assert res.json() == {"message": "Invalid credentials"}


def test_create_admin_with_secret(client, fake_db):
    res = client.post(f"{AUTH}/create-admin", json={**USER, "adminSecret": ADMIN_SECRET})

    assert res.status_code == 201
    assert res.json() == {"message": "Admin user created successfully"}
    assert fake_db.users.docs[0]["role"] == "admin"

    login = client.post(f"{AUTH}/login", json={"email": USER["email"], "password": USER["password"]})
    assert login.json()["role"] == "admin"


def test_create_admin_with_wrong_secret_is_403(client, fake_db):
    res = client.post(f"{AUTH}/create-admin", json={**USER, "adminSecret": "guess"})

    assert res.status_code == 403
    assert res.json() == {"message": "Invalid admin secret"}
    assert fake_db.users.docs == []


def test_create_admin_is_disabled_without_configured_secret(client, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_SECRET", None)

    res = client.post(f"{AUTH}/create-admin", json={**USER, "adminSecret": ADMIN_SECRET})

    assert res.status_code == 403
