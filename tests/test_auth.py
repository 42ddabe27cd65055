"""Login, bearer tokens and role gating."""

from datetime import timedelta

import pytest

from backoffice.core.jwt import create_access_token, decode_access_token
from backoffice.core.permissions import Roles
from backoffice.core.security import hash_password, verify_password


@pytest.mark.unit
def test_token_round_trip():
    token = create_access_token({"id": 4, "name": "Ana", "email": "ana@acme.com", "role": Roles.RECRUITER})

    verification = decode_access_token(token)

    assert verification.valid
    assert verification.role == Roles.RECRUITER
    assert verification.claims["id"] == 4


@pytest.mark.unit
def test_expired_token():
    token = create_access_token({"id": 4, "role": Roles.ADMIN}, expires_delta=timedelta(seconds=-5))

    verification = decode_access_token(token)

    assert not verification.valid
    assert verification.error == "Token expired"


@pytest.mark.unit
def test_token_without_role_is_invalid():
    assert not decode_access_token(create_access_token({"id": 4})).valid
    assert not decode_access_token("not-a-token").valid


@pytest.mark.unit
def test_password_hashing():
    hashed = hash_password("s3cret")

    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)


async def create_user(client, admin_headers, email, password, is_active=True):
    roles = {role["name"]: role["id"] for role in (await client.get("/roles", headers=admin_headers)).json()}
    response = await client.post(
        "/users",
        json={
            "name": "Rita Recruiter",
            "email": email,
            "password": password,
            "role_id": roles[Roles.RECRUITER],
            "is_active": is_active,
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    assert "hashed_password" not in response.json()
    return response.json()


async def test_login_and_me(client, admin_headers):
    user = await create_user(client, admin_headers, "rita@acme.com", "s3cret")

    login = await client.post("/auth/login", json={"email": "Rita@acme.com", "password": "s3cret"})

    assert login.status_code == 200, login.text
    body = login.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["role"]["name"] == Roles.RECRUITER

    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == user["id"]
    assert me.json()["role"] == Roles.RECRUITER


async def test_wrong_password(client, admin_headers):
    await create_user(client, admin_headers, "rita@acme.com", "s3cret")

    response = await client.post("/auth/login", json={"email": "rita@acme.com", "password": "nope"})

    assert response.status_code == 403
    assert response.json() == {"error": "Invalid email or password"}


async def test_inactive_user_cannot_login(client, admin_headers):
    await create_user(client, admin_headers, "old@acme.com", "s3cret", is_active=False)

    response = await client.post("/auth/login", json={"email": "old@acme.com", "password": "s3cret"})

    assert response.status_code == 403


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer garbage"},
        {"Authorization": "Bearer " + create_access_token({"id": 1, "role": "admin"}, timedelta(seconds=-5))},
    ],
)
async def test_protected_routes_need_a_valid_token(client, headers):
    response = await client.get("/company", headers=headers)

    assert response.status_code == 403
    assert "error" in response.json()


async def test_admin_only_routes(client, recruiter_headers):
    response = await client.post("/company", json={"name": "Initech"}, headers=recruiter_headers)

    assert response.status_code == 403


async def test_duplicate_user_email(client, admin_headers):
    await create_user(client, admin_headers, "rita@acme.com", "s3cret")
    roles = {role["name"]: role["id"] for role in (await client.get("/roles", headers=admin_headers)).json()}

    response = await client.post(
        "/users",
        json={"name": "Other", "email": "RITA@acme.com", "role_id": roles[Roles.CLIENT]},
        headers=admin_headers,
    )

    assert response.status_code == 409
