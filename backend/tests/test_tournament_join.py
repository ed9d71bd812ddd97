"""POST /api/tournaments/{id}/join: slot, entry fee, ledger and notification in one transaction."""

from __future__ import annotations

import pytest


@pytest.mark.asyncio
async def test_join_debits_fee_and_records_entry(api, make_user, make_tournament):
    uid = await make_user(balance="100.00")
    tid = await make_tournament(entry_fee="100.00")

    async with api() as client:
        r = await client.post(f"/api/tournaments/{tid}/join", json={"userId": uid})
        assert r.status_code == 200
        data = r.json()
        assert data["message"] == "Successfully joined tournament"
        assert data["balance"] == "0.00"
        assert data["participant"]["userId"] == uid
        assert data["participant"]["tournamentId"] == tid

        t = (await client.get(f"/api/tournaments/{tid}")).json()
        txs = (await client.get(f"/api/users/{uid}/transactions")).json()
        notes = (await client.get(f"/api/users/{uid}/notifications")).json()

    assert t["currentParticipants"] == 1
    assert len(txs) == 1
    assert txs[0]["type"] == "tournament_entry"
    assert txs[0]["amount"] == "-100.00"
    assert txs[0]["status"] == "completed"
    assert txs[0]["description"] == "Tournament Entry - Weekend Cup"
    assert any(n["type"] == "tournament" for n in notes)


@pytest.mark.asyncio
async def test_join_full_tournament_rejected_without_side_effects(api, make_user, make_tournament):
    uid = await make_user(balance="500.00")
    tid = await make_tournament(max_participants=2, current_participants=2)

    async with api() as client:
        r = await client.post(f"/api/tournaments/{tid}/join", json={"userId": uid})
        assert r.status_code == 400
        assert r.json() == {"message": "Tournament is full"}

        user = (await client.get(f"/api/users/{uid}")).json()
        t = (await client.get(f"/api/tournaments/{tid}")).json()
        txs = (await client.get(f"/api/users/{uid}/transactions")).json()

    assert user["walletBalance"] == "500.00"
    assert t["currentParticipants"] == 2
    assert txs == []


@pytest.mark.asyncio
async def test_join_insufficient_balance_rolls_back_slot(api, make_user, make_tournament):
    uid = await make_user(balance="99.99")
    tid = await make_tournament(entry_fee="100.00")

    async with api() as client:
        r = await client.post(f"/api/tournaments/{tid}/join", json={"userId": uid})
        assert r.status_code == 400
        assert r.json()["message"] == "Insufficient balance"

        user = (await client.get(f"/api/users/{uid}")).json()
        t = (await client.get(f"/api/tournaments/{tid}")).json()
        participants = (await client.get(f"/api/tournaments/{tid}/participants")).json()

    assert user["walletBalance"] == "99.99"
    assert t["currentParticipants"] == 0
    assert participants == []


@pytest.mark.asyncio
async def test_join_twice_rejected(api, make_user, make_tournament):
    uid = await make_user(balance="300.00")
    tid = await make_tournament(entry_fee="100.00")

    async with api() as client:
        first = await client.post(f"/api/tournaments/{tid}/join", json={"userId": uid})
        second = await client.post(f"/api/tournaments/{tid}/join", json={"userId": uid})
        user = (await client.get(f"/api/users/{uid}")).json()
        t = (await client.get(f"/api/tournaments/{tid}")).json()

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["message"] == "Already joined this tournament"
    assert user["walletBalance"] == "200.00"
    assert t["currentParticipants"] == 1


@pytest.mark.asyncio
async def test_join_free_tournament_logs_zero_entry(api, make_user, make_tournament):
    uid = await make_user(balance="0.00")
    tid = await make_tournament(entry_fee="0.00")

    async with api() as client:
        r = await client.post(f"/api/tournaments/{tid}/join", json={"userId": uid})
        txs = (await client.get(f"/api/users/{uid}/transactions")).json()

    assert r.status_code == 200
    assert r.json()["balance"] == "0.00"
    assert txs[0]["amount"] == "0.00"


@pytest.mark.asyncio
async def test_join_unknown_tournament_or_user(api, make_user, make_tournament):
    uid = await make_user(balance="100.00")
    tid = await make_tournament()

    async with api() as client:
        r1 = await client.post("/api/tournaments/999/join", json={"userId": uid})
        r2 = await client.post(f"/api/tournaments/{tid}/join", json={"userId": 999})
        r3 = await client.post(f"/api/tournaments/{tid}/join", json={"userId": uid, "teamId": 999})

    assert r1.status_code == 404
    assert r1.json()["message"] == "Tournament not found"
    assert r2.status_code == 404
    assert r2.json()["message"] == "User not found"
    assert r3.status_code == 404


@pytest.mark.asyncio
async def test_join_missing_user_id_is_invalid_request(api, make_tournament):
    tid = await make_tournament()
    async with api() as client:
        r = await client.post(f"/api/tournaments/{tid}/join", json={})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request data"


@pytest.mark.asyncio
async def test_last_slot_goes_to_one_user_only(api, make_user, make_tournament):
    a = await make_user(balance="100.00")
    b = await make_user(balance="100.00")
    tid = await make_tournament(max_participants=1)

    async with api() as client:
        ra = await client.post(f"/api/tournaments/{tid}/join", json={"userId": a})
        rb = await client.post(f"/api/tournaments/{tid}/join", json={"userId": b})
        user_b = (await client.get(f"/api/users/{b}")).json()

    assert ra.status_code == 200
    assert rb.status_code == 400
    assert user_b["walletBalance"] == "100.00"


@pytest.mark.asyncio
async def test_remove_participant_refunds_while_upcoming(api, make_user, make_tournament):
    uid = await make_user(balance="100.00")
    tid = await make_tournament(entry_fee="40.00")

    async with api() as client:
        await client.post(f"/api/tournaments/{tid}/join", json={"userId": uid})
        r = await client.delete(f"/api/tournaments/{tid}/participants/{uid}")
        user = (await client.get(f"/api/users/{uid}")).json()
        t = (await client.get(f"/api/tournaments/{tid}")).json()

    assert r.status_code == 200
    assert r.json()["message"] == "Participant removed and refunded"
    assert user["walletBalance"] == "100.00"
    assert t["currentParticipants"] == 0


@pytest.mark.asyncio
async def test_remove_participant_from_live_tournament_keeps_fee(api, make_user, make_tournament):
    uid = await make_user(balance="100.00")
    tid = await make_tournament(entry_fee="40.00")

    async with api() as client:
        await client.post(f"/api/tournaments/{tid}/join", json={"userId": uid})
        await client.put(f"/api/tournaments/{tid}", json={"status": "live"})
        r = await client.delete(f"/api/tournaments/{tid}/participants/{uid}")
        user = (await client.get(f"/api/users/{uid}")).json()

    assert r.json()["message"] == "Participant removed"
    assert user["walletBalance"] == "60.00"


@pytest.mark.asyncio
async def test_full_tournament_reported_before_unknown_user(api, make_tournament):
    tid = await make_tournament(max_participants=1, current_participants=1)
    async with api() as client:
        r = await client.post(f"/api/tournaments/{tid}/join", json={"userId": 999})
    assert r.status_code == 400
    assert r.json()["message"] == "Tournament is full"
