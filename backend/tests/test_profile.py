"""
Kacchi Likhavat Backend — User Profile Endpoint Tests
======================================================

What we test:
    - 403 when the path id is not the caller
    - default preferences and display name from registration
    - stats are exact on read
    - partial updates and the preferences merge
"""

import uuid

import pytest


class TestProfileAccess:

    @pytest.mark.asyncio
    async def test_other_users_profile_is_forbidden(self, test_client, alice, bob):
        response = await test_client.get(f"/api/users/{bob.id}", headers=alice.headers)
        assert response.status_code == 403
        body = response.json()
        assert body["error"] == "permission_denied"
        assert body["message"] == "You can only view your own profile"

    @pytest.mark.asyncio
    async def test_update_other_profile_is_forbidden(self, test_client, alice, bob):
        response = await test_client.put(
            f"/api/users/{bob.id}", json={"bio": "hijacked"}, headers=alice.headers
        )
        assert response.status_code == 403
        assert response.json()["message"] == "You can only update your own profile"

    @pytest.mark.asyncio
    async def test_unknown_id_is_forbidden_not_missing(self, test_client, alice):
        response = await test_client.get(f"/api/users/{uuid.uuid4()}", headers=alice.headers)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_requires_token(self, test_client, alice):
        response = await test_client.get(f"/api/users/{alice.id}")
        assert response.status_code == 401


class TestGetProfile:

    @pytest.mark.asyncio
    async def test_defaults(self, test_client, alice):
        response = await test_client.get(f"/api/users/{alice.id}", headers=alice.headers)
        assert response.status_code == 200
        profile = response.json()["data"]
        assert profile["userId"] == alice.id
        assert profile["displayName"] == "Alice"
        assert profile["bio"] == ""
        assert profile["preferences"] == {
            "theme": "auto",
            "defaultTemplate": "blank",
            "editorSettings": {"fontSize": 16, "fontFamily": "Inter", "lineHeight": 1.6},
        }
        assert profile["stats"] == {
            "createdRooms": 0,
            "notesCount": 0,
            "storiesCount": 0,
            "expensesCount": 0,
            "memoriesCount": 0,
        }

    @pytest.mark.asyncio
    async def test_stats_reflect_content(self, test_client, alice, bob, room_id):
        await test_client.post("/api/notes", json={"roomId": room_id, "title": "n"}, headers=alice.headers)
        await test_client.post("/api/stories", json={"roomId": room_id, "title": "s"}, headers=alice.headers)
        await test_client.post(
            "/api/expenses", json={"roomId": room_id, "title": "e", "amount": 1}, headers=alice.headers
        )
        await test_client.post("/api/memories", json={"roomId": room_id, "text": "m"}, headers=alice.headers)
        await test_client.post("/api/rooms", json={"type": "free", "title": "Bob's"}, headers=bob.headers)

        response = await test_client.get(f"/api/users/{alice.id}", headers=alice.headers)
        assert response.json()["data"]["stats"] == {
            "createdRooms": 1,
            "notesCount": 1,
            "storiesCount": 1,
            "expensesCount": 1,
            "memoriesCount": 1,
        }


class TestUpdateProfile:

    @pytest.mark.asyncio
    async def test_partial_update(self, test_client, alice):
        response = await test_client.put(
            f"/api/users/{alice.id}",
            json={"bio": "Writes at night", "avatarUrl": "https://img.example.com/a.png"},
            headers=alice.headers,
        )
        assert response.status_code == 200
        profile = response.json()["data"]
        assert profile["bio"] == "Writes at night"
        assert profile["avatarUrl"] == "https://img.example.com/a.png"
        assert profile["displayName"] == "Alice"

    @pytest.mark.asyncio
    async def test_preferences_merge(self, test_client, alice):
        await test_client.put(
            f"/api/users/{alice.id}",
            json={"preferences": {"theme": "dark"}},
            headers=alice.headers,
        )
        response = await test_client.put(
            f"/api/users/{alice.id}",
            json={"preferences": {"editorSettings": {"fontSize": 20}}},
            headers=alice.headers,
        )
        preferences = response.json()["data"]["preferences"]
        assert preferences["theme"] == "dark"
        assert preferences["defaultTemplate"] == "blank"
        assert preferences["editorSettings"] == {"fontSize": 20, "fontFamily": "Inter", "lineHeight": 1.6}

        fetched = await test_client.get(f"/api/users/{alice.id}", headers=alice.headers)
        assert fetched.json()["data"]["preferences"] == preferences

    @pytest.mark.asyncio
    async def test_invalid_theme(self, test_client, alice):
        response = await test_client.put(
            f"/api/users/{alice.id}",
            json={"preferences": {"theme": "neon"}},
            headers=alice.headers,
        )
        assert response.status_code == 400
        assert response.json()["message"].startswith("preferences.theme")
