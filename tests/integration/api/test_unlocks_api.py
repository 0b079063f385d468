import pytest


@pytest.mark.asyncio
async def test_unlock_lets_goal_item_through(client, clock, payloads):
    await client.post("/api/goals", json=payloads.goal("social"))

    granted = await client.post("/api/unlocks", json={"identifier": "reddit.com", "minutes": 10})
    assert granted.status_code == 201

    blocked = await client.get("/api/enforcement/blocked", params={"identifier": "reddit.com"})
    assert blocked.json()["blocked"] is False

    clock.advance(minutes=6)
    status = await client.get("/api/unlocks/reddit.com")
    assert status.json() == {"identifier": "reddit.com", "active": True, "remaining_minutes": 4}

    extended = await client.post("/api/unlocks/reddit.com/extend", json={"extra_minutes": 5})
    assert extended.json()["duration_minutes"] == 15

    clock.advance(minutes=9)
    expired = await client.get("/api/unlocks/reddit.com")
    assert expired.json()["active"] is False

    blocked = await client.get("/api/enforcement/blocked", params={"identifier": "reddit.com"})
    assert blocked.json()["blocked"] is True
    assert (await client.get("/api/unlocks")).json() == []


@pytest.mark.asyncio
async def test_unlock_validation_and_missing_grant(client):
    zero = await client.post("/api/unlocks", json={"identifier": "x.com", "minutes": 0})
    assert zero.status_code == 422
    assert zero.json()["error"]["code"] == "INVALID_UNLOCK_DURATION"

    missing = await client.post("/api/unlocks/x.com/extend", json={"extra_minutes": 5})
    assert missing.status_code == 409
    assert missing.json()["error"]["code"] == "NO_GRANT"


@pytest.mark.asyncio
async def test_revoke_and_purge(client, clock):
    await client.post("/api/unlocks", json={"identifier": "a.com", "minutes": 1})
    await client.post("/api/unlocks", json={"identifier": "b.com", "minutes": 30})

    revoked = await client.delete("/api/unlocks/b.com")
    assert revoked.status_code == 204

    clock.advance(minutes=2)
    purged = await client.post("/api/unlocks/purge")
    assert purged.json() == {"purged": 1}


@pytest.mark.asyncio
async def test_whole_device_cannot_be_unlocked(client, payloads):
    created = await client.post("/api/sessions", json=payloads.session("focus_duration"))
    await client.post(f"/api/sessions/{created.json()['id']}/start")

    response = await client.post("/api/unlocks", json={"identifier": "*", "minutes": 600})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_TARGET"
    assert (await client.get("/api/unlocks")).json() == []
    blocked = await client.get(
        "/api/enforcement/blocked", params={"identifier": "com.instagram.android"}
    )
    assert blocked.json()["blocked"] is True
