"""Tests for bearer-token authentication on protected routes."""

from datetime import timedelta

import pytest

from app.core.security import Role
from app.features.auth.dependencies import parse_bearer
from app.shared.exceptions import CredentialsException
from tests.conftest import PASSWORD, auth_header


@pytest.mark.parametrize("header", [None, "", "Bearer", "token-only"])
def test_parse_bearer_rejects_malformed(header):
    with pytest.raises(CredentialsException) as exc_info:
        parse_bearer(header)
    assert exc_info.value.status_code == 401


def test_parse_bearer_rejects_other_scheme():
    with pytest.raises(CredentialsException) as exc_info:
        parse_bearer("Basic dXNlcjpwYXNz")
    assert "basic" in exc_info.value.detail


@pytest.mark.parametrize("scheme", ["Bearer", "bearer", "BEARER"])
def test_parse_bearer_scheme_is_case_insensitive(scheme):
    assert parse_bearer(f"{scheme} abc.def") == "abc.def"


async def test_missing_header_is_unauthenticated(client):
    response = await client.get("/patients/profile")

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "unauthenticated"
    assert body["message"]


async def test_wrong_scheme_is_unauthenticated(client):
    response = await client.get("/patients/profile", headers={"Authorization": "Basic abc"})

    assert response.status_code == 401
    assert response.json()["error"] == "unauthenticated"


async def test_garbage_token_is_invalid(client):
    response = await client.get("/patients/profile", headers=auth_header("garbage"))

    assert response.status_code == 401
    assert response.json()["error"] == "invalid_token"


async def test_expired_token(client, app):
    token, _ = app.state.token_maker.issue_token("alice", Role.PATIENT, timedelta(0))

    response = await client.get("/patients/profile", headers=auth_header(token))

    assert response.status_code == 401
    assert response.json()["error"] == "expired_token"


async def test_valid_token_lowercase_scheme(client):
    await client.post(
        "/patients",
        json={
            "username": "alice",
            "name": "Alice",
            "email": "alice@example.com",
            "phone": "9876543210",
            "age": 30,
            "gender": "female",
            "password": PASSWORD,
        },
    )
    login = await client.post("/patients/login", json={"username": "alice", "password": PASSWORD})
    token = login.json()["access_token"]

    response = await client.get("/patients/profile", headers={"Authorization": f"bearer {token}"})

    assert response.status_code == 200
    assert response.json()["username"] == "alice"


async def test_role_mismatch_is_forbidden(client, app):
    token, _ = app.state.token_maker.issue_token("bob", Role.DOCTOR, timedelta(minutes=5))

    response = await client.get("/patients/profile", headers=auth_header(token))

    assert response.status_code == 403
    assert response.json()["error"] == "unauthorized"
