"""
Kacchi Likhavat Backend — Memory Endpoint Tests
================================================

What we test:
    - text resolution (`text`, or `title` + `content` joined by a blank line)
    - mood validation and the mood / date filters
    - update keeps the existing text unless new text is sent
"""

import pytest


async def _memory(client, user, room_id, **fields):
    body = {"roomId": room_id, **fields}
    response = await client.post("/api/memories", json=body, headers=user.headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateMemory:

    @pytest.mark.asyncio
    async def test_plain_text(self, test_client, alice, room_id):
        memory = await _memory(test_client, alice, room_id, text="Monsoon evening", mood="calm")
        assert memory["text"] == "Monsoon evening"
        assert memory["mood"] == "calm"
        assert memory["mediaUrls"] == []

    @pytest.mark.asyncio
    async def test_title_and_content_are_joined(self, test_client, alice, room_id):
        memory = await _memory(test_client, alice, room_id, title="Trip", content="Went to the hills")
        assert memory["text"] == "Trip\n\nWent to the hills"

    @pytest.mark.asyncio
    async def test_defaults(self, test_client, alice, room_id):
        memory = await _memory(test_client, alice, room_id, text="x")
        assert memory["mood"] == "neutral"
        assert memory["date"]

    @pytest.mark.asyncio
    async def test_invalid_mood(self, test_client, alice, room_id):
        response = await test_client.post(
            "/api/memories",
            json={"roomId": room_id, "text": "x", "mood": "ecstatic"},
            headers=alice.headers,
        )
        assert response.status_code == 400
        assert "Invalid mood" in response.json()["message"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [True, 20240310])
    async def test_non_string_date_is_400(self, test_client, alice, room_id, value):
        response = await test_client.post(
            "/api/memories",
            json={"roomId": room_id, "text": "x", "date": value},
            headers=alice.headers,
        )
        assert response.status_code == 400
        assert response.json()["message"].startswith("date:")

    @pytest.mark.asyncio
    async def test_media_urls_round_trip(self, test_client, alice, room_id):
        urls = ["https://cdn.example.com/a.jpg", "https://cdn.example.com/b.jpg"]
        memory = await _memory(test_client, alice, room_id, text="photos", mediaUrls=urls)
        fetched = await test_client.get(f"/api/memories/{memory['id']}", headers=alice.headers)
        assert fetched.json()["data"]["mediaUrls"] == urls


class TestListMemories:

    @pytest.mark.asyncio
    async def test_mood_filter(self, test_client, alice, room_id):
        await _memory(test_client, alice, room_id, text="good day", mood="happy")
        await _memory(test_client, alice, room_id, text="rough day", mood="sad")

        response = await test_client.get("/api/memories", params={"mood": "happy"}, headers=alice.headers)
        assert [m["text"] for m in response.json()["data"]] == ["good day"]
        assert response.json()["message"] == "Found 1 memory"

    @pytest.mark.asyncio
    async def test_date_range_and_order(self, test_client, alice, room_id):
        await _memory(test_client, alice, room_id, text="jan", date="2024-01-10T08:00:00Z")
        await _memory(test_client, alice, room_id, text="feb", date="2024-02-10T08:00:00Z")
        await _memory(test_client, alice, room_id, text="mar", date="2024-03-10T08:00:00Z")

        response = await test_client.get(
            "/api/memories", params={"from": "2024-02-01", "to": "2024-03-10"}, headers=alice.headers
        )
        assert [m["text"] for m in response.json()["data"]] == ["mar", "feb"]
        assert response.json()["count"] == 2

    @pytest.mark.asyncio
    async def test_only_own_memories(self, test_client, alice, bob, room_id):
        await _memory(test_client, alice, room_id, text="private")
        response = await test_client.get("/api/memories", headers=bob.headers)
        assert response.json()["data"] == []
        assert response.json()["message"] == "Found 0 memories"


class TestUpdateMemory:

    @pytest.mark.asyncio
    async def test_mood_only_keeps_text(self, test_client, alice, room_id):
        memory = await _memory(test_client, alice, room_id, text="original")
        response = await test_client.put(
            f"/api/memories/{memory['id']}", json={"mood": "excited"}, headers=alice.headers
        )
        data = response.json()["data"]
        assert data["text"] == "original"
        assert data["mood"] == "excited"

    @pytest.mark.asyncio
    async def test_title_content_replaces_text(self, test_client, alice, room_id):
        memory = await _memory(test_client, alice, room_id, text="original")
        response = await test_client.put(
            f"/api/memories/{memory['id']}",
            json={"title": "New", "content": "body"},
            headers=alice.headers,
        )
        assert response.json()["data"]["text"] == "New\n\nbody"

    @pytest.mark.asyncio
    async def test_delete_then_missing(self, test_client, alice, room_id):
        memory = await _memory(test_client, alice, room_id, text="gone soon")
        deleted = await test_client.delete(f"/api/memories/{memory['id']}", headers=alice.headers)
        assert deleted.json()["data"] == {"id": memory["id"]}
        again = await test_client.delete(f"/api/memories/{memory['id']}", headers=alice.headers)
        assert again.status_code == 404
        assert again.json()["message"] == "Memory not found"
