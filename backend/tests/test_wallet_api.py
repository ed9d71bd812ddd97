"""Wallet deposits, withdrawals, settlement and the ledger endpoints."""

from __future__ import annotations

from decimal import Decimal

import pytest

from core.database import get_database_manager
from core.errors import InsufficientBalanceError, NotFoundError
from services.wallet_service import update_user_wallet


@pytest.mark.asyncio
async def test_add_money_credits_and_logs_deposit(api, make_user):
    uid = await make_user(balance="10.00")
    async with api() as client:
        r = await client.post("/api/wallet/add-money", json={"userId": uid, "amount": "25.50"})
        txs = (await client.get(f"/api/users/{uid}/transactions")).json()
        notes = (await client.get(f"/api/users/{uid}/notifications")).json()

    assert r.status_code == 200
    assert r.json() == {"message": "Money added successfully", "balance": "35.50"}
    assert txs[0]["type"] == "deposit"
    assert txs[0]["amount"] == "25.50"
    assert txs[0]["description"] == "Wallet deposit"
    assert notes[0]["type"] == "wallet"


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", ["0", "-5.00"])
async def test_add_money_rejects_non_positive_amount(api, make_user, amount):
    uid = await make_user()
    async with api() as client:
        r = await client.post("/api/wallet/add-money", json={"userId": uid, "amount": amount})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_withdraw_is_pending_and_debits(api, make_user):
    uid = await make_user(balance="80.00")
    async with api() as client:
        r = await client.post("/api/wallet/withdraw", json={"userId": uid, "amount": "30.00"})
        txs = (await client.get(f"/api/users/{uid}/transactions")).json()

    assert r.status_code == 200
    assert r.json() == {"message": "Withdrawal request submitted", "balance": "50.00"}
    assert txs[0]["type"] == "withdrawal"
    assert txs[0]["amount"] == "-30.00"
    assert txs[0]["status"] == "pending"


@pytest.mark.asyncio
async def test_withdraw_more_than_balance(api, make_user):
    uid = await make_user(balance="20.00")
    async with api() as client:
        r = await client.post("/api/wallet/withdraw", json={"userId": uid, "amount": "20.01"})
        user = (await client.get(f"/api/users/{uid}")).json()
        txs = (await client.get(f"/api/users/{uid}/transactions")).json()

    assert r.status_code == 400
    assert r.json()["message"] == "Insufficient balance"
    assert user["walletBalance"] == "20.00"
    assert txs == []


@pytest.mark.asyncio
async def test_withdraw_unknown_user(api):
    async with api() as client:
        r = await client.post("/api/wallet/withdraw", json={"userId": 404, "amount": "1.00"})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_rejected_withdrawal_is_refunded(api, make_user):
    uid = await make_user(balance="80.00")
    async with api() as client:
        await client.post("/api/wallet/withdraw", json={"userId": uid, "amount": "30.00"})
        tx_id = (await client.get(f"/api/users/{uid}/transactions")).json()[0]["id"]

        r = await client.put(f"/api/wallet/transactions/{tx_id}", json={"status": "failed"})
        again = await client.put(f"/api/wallet/transactions/{tx_id}", json={"status": "completed"})
        user = (await client.get(f"/api/users/{uid}")).json()

    assert r.status_code == 200
    assert r.json()["status"] == "failed"
    assert again.status_code == 400
    assert user["walletBalance"] == "80.00"


@pytest.mark.asyncio
async def test_approved_withdrawal_keeps_debit(api, make_user):
    uid = await make_user(balance="80.00")
    async with api() as client:
        await client.post("/api/wallet/withdraw", json={"userId": uid, "amount": "30.00"})
        tx_id = (await client.get(f"/api/users/{uid}/transactions")).json()[0]["id"]
        r = await client.put(f"/api/wallet/transactions/{tx_id}", json={"status": "completed"})
        user = (await client.get(f"/api/users/{uid}")).json()

    assert r.json()["status"] == "completed"
    assert user["walletBalance"] == "50.00"


@pytest.mark.asyncio
async def test_settle_rejects_non_withdrawal(api, make_user):
    uid = await make_user(balance="0.00")
    async with api() as client:
        await client.post("/api/wallet/add-money", json={"userId": uid, "amount": "5.00"})
        tx_id = (await client.get(f"/api/users/{uid}/transactions")).json()[0]["id"]
        r = await client.put(f"/api/wallet/transactions/{tx_id}", json={"status": "failed"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_post_transaction_applies_completed_amount(api, make_user):
    uid = await make_user(balance="10.00")
    async with api() as client:
        r = await client.post(
            "/api/transactions",
            json={"userId": uid, "type": "deposit", "amount": "15.00", "description": "Manual top-up"},
        )
        pending = await client.post(
            "/api/transactions",
            json={"userId": uid, "type": "deposit", "amount": "99.00", "status": "pending"},
        )
        overdraw = await client.post(
            "/api/transactions",
            json={"userId": uid, "type": "withdrawal", "amount": "-100.00"},
        )
        user = (await client.get(f"/api/users/{uid}")).json()
        all_txs = (await client.get("/api/transactions")).json()
        admin_txs = (await client.get("/api/admin/transactions")).json()

    assert r.status_code == 200
    assert pending.status_code == 200
    assert overdraw.status_code == 400
    assert user["walletBalance"] == "25.00"
    assert len(all_txs) == 2
    assert [t["id"] for t in all_txs] == [t["id"] for t in admin_txs]
    assert all_txs[0]["id"] > all_txs[1]["id"]


@pytest.mark.asyncio
async def test_post_transaction_rejects_unknown_type(api, make_user):
    uid = await make_user()
    async with api() as client:
        r = await client.post("/api/transactions", json={"userId": uid, "type": "gift", "amount": "1.00"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_update_user_wallet_round_trip(make_user):
    uid = await make_user(balance="12.34")
    async with get_database_manager().session() as session:
        await update_user_wallet(session, uid, Decimal("7.66"))
        user = await update_user_wallet(session, uid, Decimal("-7.66"))
        assert user.wallet_balance == Decimal("12.34")


@pytest.mark.asyncio
async def test_update_user_wallet_errors(make_user):
    uid = await make_user(balance="1.00")
    async with get_database_manager().session() as session:
        with pytest.raises(NotFoundError):
            await update_user_wallet(session, 999, Decimal("1.00"))
        with pytest.raises(InsufficientBalanceError):
            await update_user_wallet(session, uid, Decimal("-1.01"))
        user = await update_user_wallet(session, uid, Decimal("-1.00"))
        assert user.wallet_balance == Decimal("0.00")


@pytest.mark.asyncio
async def test_pending_withdrawal_entry_is_debited_and_refund_restores(api, make_user):
    uid = await make_user(balance="0.00")
    async with api() as client:
        uncovered = await client.post(
            "/api/transactions",
            json={"userId": uid, "type": "withdrawal", "amount": "-500.00", "status": "pending"},
        )
        await client.post("/api/wallet/add-money", json={"userId": uid, "amount": "100.00"})
        pending = await client.post(
            "/api/transactions",
            json={"userId": uid, "type": "withdrawal", "amount": "-40.00", "status": "pending"},
        )
        after_pending = (await client.get(f"/api/users/{uid}")).json()
        settled = await client.put(
            f"/api/wallet/transactions/{pending.json()['id']}", json={"status": "failed"}
        )
        after_refund = (await client.get(f"/api/users/{uid}")).json()

    assert uncovered.status_code == 400
    assert uncovered.json()["message"] == "Insufficient balance"
    assert pending.status_code == 200
    assert after_pending["walletBalance"] == "60.00"
    assert settled.status_code == 200
    assert after_refund["walletBalance"] == "100.00"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "type_, amount",
    [
        ("deposit", "-5.00"),
        ("deposit", "0.00"),
        ("tournament_win", "-1.00"),
        ("referral_bonus", "-50.00"),
        ("withdrawal", "25.00"),
    ],
)
async def test_post_transaction_rejects_wrong_sign(api, make_user, type_, amount):
    uid = await make_user(balance="100.00")
    async with api() as client:
        r = await client.post(
            "/api/transactions",
            json={"userId": uid, "type": type_, "amount": amount, "status": "pending"},
        )
        user = (await client.get(f"/api/users/{uid}")).json()
        txs = (await client.get(f"/api/users/{uid}/transactions")).json()
    assert r.status_code == 400
    assert user["walletBalance"] == "100.00"
    assert txs == []
