"""
DayNotes Backend: Notes API Endpoint Tests
============================================

What:  The /api/notes endpoints end to end: routing, session gating,
       ownership and wire format, over a real SQLite database.
"""

import uuid

import pytest


async def create(client, content="Stand-up", time="09:00", date="2024-01-15T00:00:00.000Z", **extra):
    response = await client.post(
        "/api/notes",
        json={"content": content, "time": time, "status": "pending", "date": date, **extra},
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestSessionRequired:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, path, body",
        [
            ("GET", "/api/notes?date=2024-01-15", None),
            ("GET", "/api/notes/summary?from=2024-01-01&to=2024-01-31", None),
            ("POST", "/api/notes", {"content": "x", "time": "00:00", "status": "pending", "date": "2024-01-15"}),
            ("PUT", f"/api/notes/{uuid.uuid4()}", {"status": "completed"}),
            ("DELETE", f"/api/notes/{uuid.uuid4()}", None),
        ],
    )
    async def test_notes_endpoints_return_401_without_session(self, test_client, method, path, body):
        response = await test_client.request(method, path, json=body)

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"


class TestCreateAndList:

    @pytest.mark.asyncio
    async def test_create_returns_note_with_generated_id(self, auth_client):
        note = await create(auth_client)

        uuid.UUID(note["id"])
        assert note["content"] == "Stand-up"
        assert note["time"] == "09:00"
        assert note["status"] == "pending"
        assert note["date"] == "2024-01-15"
        assert "userId" in note

    @pytest.mark.asyncio
    async def test_list_only_returns_notes_for_requested_day(self, auth_client):
        await create(auth_client, content="Monday", date="2024-01-15T00:00:00.000Z")
        await create(auth_client, content="Tuesday", date="2024-01-16T00:00:00.000Z")
        await create(auth_client, content="Also Monday", date="2024-01-15")

        response = await auth_client.get("/api/notes", params={"date": "2024-01-15T00:00:00.000Z"})

        assert response.status_code == 200
        notes = response.json()
        assert sorted(n["content"] for n in notes) == ["Also Monday", "Monday"]
        assert {n["date"] for n in notes} == {"2024-01-15"}

    @pytest.mark.asyncio
    async def test_list_is_ordered_by_time_label(self, auth_client):
        await create(auth_client, content="A", time="09:00")
        await create(auth_client, content="B", time="02:00")

        response = await auth_client.get("/api/notes", params={"date": "2024-01-15"})

        assert [n["time"] for n in response.json()] == ["02:00", "09:00"]

    @pytest.mark.asyncio
    async def test_users_only_see_their_own_notes(self, auth_client, second_client):
        await create(auth_client, content="Mine")

        response = await second_client.get("/api/notes", params={"date": "2024-01-15"})

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_blank_content_is_rejected(self, auth_client):
        response = await auth_client.post(
            "/api/notes",
            json={"content": "  ", "time": "00:00", "status": "pending", "date": "2024-01-15"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_unknown_status_is_rejected(self, auth_client):
        response = await auth_client.post(
            "/api/notes",
            json={"content": "x", "time": "00:00", "status": "archived", "date": "2024-01-15"},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_invalid_date_query_is_rejected(self, auth_client):
        response = await auth_client.get("/api/notes", params={"date": "yesterday"})

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "date"


class TestUpdate:

    @pytest.mark.asyncio
    async def test_put_full_note_updates_fields(self, auth_client):
        note = await create(auth_client)
        edited = {**note, "content": "Retro", "time": "16:00"}

        response = await auth_client.put(f"/api/notes/{note['id']}", json=edited)

        assert response.status_code == 200
        body = response.json()
        assert body["content"] == "Retro"
        assert body["time"] == "16:00"
        assert body["status"] == "pending"

    @pytest.mark.asyncio
    async def test_put_ignores_user_id_in_body(self, auth_client):
        note = await create(auth_client)
        hijack = {**note, "userId": str(uuid.uuid4()), "status": "completed"}

        response = await auth_client.put(f"/api/notes/{note['id']}", json=hijack)

        assert response.status_code == 200
        assert response.json()["userId"] == note["userId"]
        assert response.json()["status"] == "completed"

    @pytest.mark.asyncio
    async def test_put_on_another_users_note_is_not_found(self, auth_client, second_client):
        note = await create(auth_client)

        response = await second_client.put(
            f"/api/notes/{note['id']}", json={**note, "content": "Hijacked"}
        )

        assert response.status_code == 404
        listed = await auth_client.get("/api/notes", params={"date": "2024-01-15"})
        assert listed.json()[0]["content"] == "Stand-up"


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_removes_exactly_one_note(self, auth_client):
        keep = await create(auth_client, content="Keep")
        drop = await create(auth_client, content="Drop")

        response = await auth_client.delete(f"/api/notes/{drop['id']}")

        assert response.status_code == 204
        listed = await auth_client.get("/api/notes", params={"date": "2024-01-15"})
        assert [n["id"] for n in listed.json()] == [keep["id"]]

    @pytest.mark.asyncio
    async def test_delete_twice_is_not_found(self, auth_client):
        note = await create(auth_client)
        await auth_client.delete(f"/api/notes/{note['id']}")

        response = await auth_client.delete(f"/api/notes/{note['id']}")

        assert response.status_code == 404


class TestSummary:

    @pytest.mark.asyncio
    async def test_summary_counts_per_day(self, auth_client):
        first = await create(auth_client, date="2024-01-03")
        await create(auth_client, date="2024-01-03")
        await create(auth_client, date="2024-01-20")
        await create(auth_client, date="2024-02-01")
        await auth_client.put(f"/api/notes/{first['id']}", json={**first, "status": "completed"})

        response = await auth_client.get(
            "/api/notes/summary", params={"from": "2024-01-01", "to": "2024-01-31"}
        )

        assert response.status_code == 200
        assert response.json() == [
            {"date": "2024-01-03", "total": 2, "completed": 1},
            {"date": "2024-01-20", "total": 1, "completed": 0},
        ]

    @pytest.mark.asyncio
    async def test_summary_reversed_range_is_rejected(self, auth_client):
        response = await auth_client.get(
            "/api/notes/summary", params={"from": "2024-02-01", "to": "2024-01-01"}
        )

        assert response.status_code == 400
