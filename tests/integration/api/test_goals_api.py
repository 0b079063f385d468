import pytest


@pytest.mark.asyncio
async def test_goal_lifecycle(client, clock, payloads):
    created = await client.post("/api/goals", json=payloads.goal("social"))
    assert created.status_code == 201
    goal = created.json()
    assert goal["remaining_days"] == 7
    assert [i["identifier"] for i in goal["items"]] == ["com.instagram.android", "reddit.com"]

    blocked = await client.get("/api/enforcement/blocked", params={"identifier": "reddit.com"})
    assert blocked.json()["blocked"] is True

    added = await client.post(
        f"/api/goals/{goal['id']}/items",
        json={"name": "TikTok", "identifier": "com.zhiliaoapp.musically"},
    )
    assert added.status_code == 201

    item_id = goal["items"][0]["id"]
    removal = await client.delete(f"/api/goals/{goal['id']}/items/{item_id}")
    assert removal.status_code == 403
    assert removal.json()["error"]["code"] == "COMMITMENT_VIOLATION"

    premature = await client.delete(f"/api/goals/{goal['id']}")
    assert premature.status_code == 409
    assert premature.json()["error"]["code"] == "GOAL_ACTIVE"

    clock.advance(days=8)
    late = await client.post(
        f"/api/goals/{goal['id']}/items", json={"name": "X", "identifier": "x.com"}
    )
    assert late.status_code == 409
    assert late.json()["error"]["code"] == "GOAL_EXPIRED"

    # Expired but not yet swept
    still_active = await client.delete(f"/api/goals/{goal['id']}")
    assert still_active.status_code == 409

    completed = await client.post("/api/goals/check-expiry")
    assert [g["id"] for g in completed.json()] == [goal["id"]]

    unblocked = await client.get("/api/enforcement/blocked", params={"identifier": "reddit.com"})
    assert unblocked.json()["blocked"] is False

    deleted = await client.delete(f"/api/goals/{goal['id']}")
    assert deleted.status_code == 204
    assert (await client.get(f"/api/goals/{goal['id']}")).status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("days", [0, 91])
async def test_goal_duration_bounds(client, payloads, days):
    payload = payloads.goal("social")
    payload["duration_days"] = days

    response = await client.post("/api/goals", json=payload)

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_DURATION"


@pytest.mark.asyncio
async def test_goal_duplicate_item(client, payloads):
    created = await client.post("/api/goals", json=payloads.goal("social"))

    response = await client.post(
        f"/api/goals/{created.json()['id']}/items",
        json={"name": "Reddit again", "identifier": "reddit.com", "kind": "website"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_GOAL_ITEM"


@pytest.mark.asyncio
async def test_goal_expires_on_tick(client, clock, payloads):
    created = await client.post("/api/goals", json=payloads.goal("social"))
    clock.advance(days=7)

    await client.post("/api/enforcement/tick")

    goal = (await client.get(f"/api/goals/{created.json()['id']}")).json()
    assert goal["is_active"] is False
    assert goal["remaining_days"] == 0
    active = (await client.get("/api/goals", params={"active_only": True})).json()
    assert active == []
