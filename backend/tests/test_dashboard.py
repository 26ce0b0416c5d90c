"""
Kacchi Likhavat Backend — Dashboard Endpoint Tests
===================================================

What we test:
    - an empty account gets empty lists and zero stats
    - the activity feed merges all four content types, newest first, max 10
    - memory titles are cut to 50 characters plus "..."
    - stats are exact counts of the caller's records only
"""

import pytest


class TestDashboard:

    @pytest.mark.asyncio
    async def test_empty_account(self, test_client, alice):
        response = await test_client.get("/api/dashboard", headers=alice.headers)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["rooms"] == []
        assert body["data"]["recentActivity"] == []
        assert set(body["data"]["stats"].values()) == {0}

    @pytest.mark.asyncio
    async def test_requires_token(self, test_client):
        response = await test_client.get("/api/dashboard")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_activity_merges_types(self, test_client, alice, room_id):
        await test_client.post("/api/notes", json={"roomId": room_id, "title": "A note"}, headers=alice.headers)
        await test_client.post("/api/stories", json={"roomId": room_id, "title": "A story"}, headers=alice.headers)
        await test_client.post(
            "/api/expenses", json={"roomId": room_id, "title": "Tea", "amount": 20}, headers=alice.headers
        )
        await test_client.post("/api/memories", json={"roomId": room_id, "text": "Rainy"}, headers=alice.headers)

        response = await test_client.get("/api/dashboard", headers=alice.headers)
        data = response.json()["data"]
        activity = data["recentActivity"]

        assert {item["type"] for item in activity} == {"note", "story", "expense", "memory"}
        assert [item["title"] for item in activity] == ["Rainy", "Tea", "A story", "A note"]
        dates = [item["date"] for item in activity]
        assert dates == sorted(dates, reverse=True)
        assert [room["title"] for room in data["rooms"]] == ["Workspace"]

    @pytest.mark.asyncio
    async def test_activity_is_capped(self, test_client, alice, room_id):
        for i in range(6):
            await test_client.post(
                "/api/notes", json={"roomId": room_id, "title": f"note {i}"}, headers=alice.headers
            )
            await test_client.post(
                "/api/memories", json={"roomId": room_id, "text": f"memory {i}"}, headers=alice.headers
            )

        response = await test_client.get("/api/dashboard", headers=alice.headers)
        data = response.json()["data"]
        assert len(data["recentActivity"]) == 10
        # at most five of each type are considered
        types = [item["type"] for item in data["recentActivity"]]
        assert types.count("note") == 5
        assert types.count("memory") == 5
        assert data["stats"]["notesCount"] == 6
        assert data["stats"]["memoriesCount"] == 6

    @pytest.mark.asyncio
    async def test_long_memory_title_is_truncated(self, test_client, alice, room_id):
        text = "x" * 80
        await test_client.post("/api/memories", json={"roomId": room_id, "text": text}, headers=alice.headers)

        response = await test_client.get("/api/dashboard", headers=alice.headers)
        title = response.json()["data"]["recentActivity"][0]["title"]
        assert title == "x" * 50 + "..."

    @pytest.mark.asyncio
    async def test_stats_are_per_user(self, test_client, alice, bob, room_id):
        await test_client.post("/api/notes", json={"roomId": room_id, "title": "mine"}, headers=alice.headers)

        response = await test_client.get("/api/dashboard", headers=bob.headers)
        data = response.json()["data"]
        assert data["stats"]["notesCount"] == 0
        assert data["recentActivity"] == []

        response = await test_client.get("/api/dashboard", headers=alice.headers)
        stats = response.json()["data"]["stats"]
        assert stats["createdRooms"] == 1
        assert stats["notesCount"] == 1
