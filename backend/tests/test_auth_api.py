"""Registration and login."""

from __future__ import annotations

import pytest

REGISTER = {
    "username": "newbie",
    "email": "Newbie@Example.com",
    "password": "hunter22",
    "confirmPassword": "hunter22",
    "country": "IN",
}


@pytest.mark.asyncio
async def test_register_then_login(api):
    async with api() as client:
        r = await client.post("/api/auth/register", json=REGISTER)
        login = await client.post(
            "/api/auth/login", json={"email": "newbie@example.com", "password": "hunter22"}
        )
        uid = r.json()["user"]["id"]
        notes = (await client.get(f"/api/users/{uid}/notifications")).json()

    assert r.status_code == 200
    body = r.json()
    assert body["token"] == f"fake-jwt-token-{uid}"
    assert body["user"]["email"] == "newbie@example.com"
    assert body["user"]["walletBalance"] == "0.00"
    assert body["user"]["bonusCoins"] == 100
    assert body["user"]["referralCode"] == f"USER{uid:03d}"
    assert "password" not in body["user"] and "passwordHash" not in body["user"]
    assert login.status_code == 200
    assert login.json()["user"]["id"] == uid
    assert [n["type"] for n in notes] == ["system"]


@pytest.mark.asyncio
async def test_login_wrong_password(api):
    async with api() as client:
        await client.post("/api/auth/register", json=REGISTER)
        r = await client.post("/api/auth/login", json={"email": "newbie@example.com", "password": "nope"})
        unknown = await client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "x"})
    assert r.status_code == 401
    assert r.json() == {"message": "Invalid credentials"}
    assert unknown.status_code == 401


@pytest.mark.asyncio
async def test_register_duplicate_email_or_username(api):
    async with api() as client:
        await client.post("/api/auth/register", json=REGISTER)
        same_email = await client.post("/api/auth/register", json={**REGISTER, "username": "other"})
        same_name = await client.post(
            "/api/auth/register", json={**REGISTER, "email": "other@example.com"}
        )
    assert same_email.status_code == 400
    assert same_email.json()["message"] == "User already exists"
    assert same_name.status_code == 400
    assert same_name.json()["message"] == "Username already taken"


@pytest.mark.asyncio
async def test_register_password_mismatch(api):
    async with api() as client:
        r = await client.post("/api/auth/register", json={**REGISTER, "confirmPassword": "different"})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request data"


@pytest.mark.asyncio
async def test_register_unknown_referral_code(api):
    async with api() as client:
        r = await client.post("/api/auth/register", json={**REGISTER, "referredBy": "NOPE999"})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid referral code"
