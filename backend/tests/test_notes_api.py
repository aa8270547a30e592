"""
AP Exam Sync: Community Note Endpoint Tests
============================================

What we test:
    ✅ Create requires all fields and an existing author
    ✅ Edit/delete are restricted to the author unless forceDev is set
    ✅ Forbidden requests leave the stored note unchanged
    ✅ Ratings upsert per user and keep averageRating equal to the mean
    ✅ A rating of 0 is rejected
    ✅ Requests without a body get the presence-check error
"""

import pytest


async def _create_note(client, author_id, **overrides):
    body = {"courseId": "c1", "title": "Limits", "content": "ε-δ", "authorId": author_id}
    body.update(overrides)
    response = await client.post("/api/notes", json=body)
    assert response.status_code == 200, response.text
    return response.json()


async def _stored_note(client, note_id):
    data = (await client.get("/api/data")).json()
    return next((n for n in data["communityNotes"] if n["id"] == note_id), None)


class TestCreateNote:

    @pytest.mark.asyncio
    async def test_create(self, test_client, registered_user):
        note = await _create_note(test_client, registered_user["id"])

        assert note["author"] == "Author"
        assert note["authorId"] == registered_user["id"]
        assert note["courseId"] == "c1"
        assert note["downloads"] == 0
        assert note["ratings"] == []
        assert note["averageRating"] == 0
        assert note["createdAt"].endswith("Z")

    @pytest.mark.asyncio
    async def test_missing_fields(self, test_client, registered_user):
        response = await test_client.post(
            "/api/notes",
            json={"courseId": "c1", "title": "", "content": "x", "authorId": registered_user["id"]},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Missing fields"}

    @pytest.mark.asyncio
    async def test_no_body_is_missing_fields(self, test_client):
        response = await test_client.post("/api/notes")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing fields"}

    @pytest.mark.asyncio
    async def test_unknown_author_appends_nothing(self, test_client):
        response = await test_client.post(
            "/api/notes",
            json={"courseId": "c1", "title": "T", "content": "C", "authorId": "ghost"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid author"}
        assert (await test_client.get("/api/data")).json()["communityNotes"] == []


class TestEditNote:

    @pytest.mark.asyncio
    async def test_author_can_edit(self, test_client, registered_user):
        note = await _create_note(test_client, registered_user["id"])

        response = await test_client.put(
            f"/api/notes/{note['id']}",
            json={"content": "updated", "authorId": registered_user["id"]},
        )

        assert response.status_code == 200
        assert response.json()["content"] == "updated"
        assert response.json()["title"] == "Limits"

    @pytest.mark.asyncio
    async def test_empty_title_is_ignored(self, test_client, registered_user):
        note = await _create_note(test_client, registered_user["id"])

        response = await test_client.put(
            f"/api/notes/{note['id']}",
            json={"title": "", "authorId": registered_user["id"]},
        )

        assert response.json()["title"] == "Limits"

    @pytest.mark.asyncio
    async def test_non_author_forbidden_and_unchanged(self, test_client, registered_user):
        note = await _create_note(test_client, registered_user["id"])

        response = await test_client.put(
            f"/api/notes/{note['id']}", json={"content": "hijacked", "authorId": "someone-else"}
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Not allowed"}
        assert (await _stored_note(test_client, note["id"]))["content"] == "ε-δ"

    @pytest.mark.asyncio
    async def test_force_dev_bypasses_author_check(self, test_client, registered_user):
        note = await _create_note(test_client, registered_user["id"])

        response = await test_client.put(
            f"/api/notes/{note['id']}", json={"content": "dev edit", "forceDev": True}
        )

        assert response.status_code == 200
        assert response.json()["content"] == "dev edit"

    @pytest.mark.asyncio
    async def test_unknown_note(self, test_client):
        response = await test_client.put("/api/notes/nope", json={"content": "x"})

        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}


class TestDeleteNote:

    @pytest.mark.asyncio
    async def test_author_can_delete(self, test_client, registered_user):
        note = await _create_note(test_client, registered_user["id"])

        response = await test_client.request(
            "DELETE", f"/api/notes/{note['id']}", json={"authorId": registered_user["id"]}
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert await _stored_note(test_client, note["id"]) is None

    @pytest.mark.asyncio
    async def test_delete_without_body_is_forbidden(self, test_client, registered_user):
        note = await _create_note(test_client, registered_user["id"])

        response = await test_client.delete(f"/api/notes/{note['id']}")

        assert response.status_code == 403
        assert await _stored_note(test_client, note["id"]) is not None

    @pytest.mark.asyncio
    async def test_force_dev_delete(self, test_client, registered_user):
        note = await _create_note(test_client, registered_user["id"])

        response = await test_client.request(
            "DELETE", f"/api/notes/{note['id']}", json={"forceDev": True}
        )

        assert response.status_code == 200
        assert await _stored_note(test_client, note["id"]) is None

    @pytest.mark.asyncio
    async def test_unknown_note(self, test_client):
        response = await test_client.request("DELETE", "/api/notes/nope", json={"forceDev": True})

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}


class TestRateNote:

    @pytest.mark.asyncio
    async def test_rerating_replaces_in_place(self, test_client, registered_user):
        note = await _create_note(test_client, registered_user["id"])
        url = f"/api/notes/{note['id']}/rate"

        first = await test_client.post(url, json={"userId": "u1", "rating": 5})
        second = await test_client.post(url, json={"userId": "u1", "rating": 3})

        assert first.json() == {"averageRating": 5, "ratingsCount": 1}
        assert second.status_code == 200
        assert second.json() == {"averageRating": 3, "ratingsCount": 1}

        stored = await _stored_note(test_client, note["id"])
        assert stored["ratings"] == [{"userId": "u1", "rating": 3}]
        assert stored["averageRating"] == 3

    @pytest.mark.asyncio
    async def test_average_is_mean_of_ratings(self, test_client, registered_user):
        note = await _create_note(test_client, registered_user["id"])
        url = f"/api/notes/{note['id']}/rate"

        await test_client.post(url, json={"userId": "u1", "rating": 5})
        await test_client.post(url, json={"userId": "u2", "rating": 2})
        response = await test_client.post(url, json={"userId": "u3", "rating": 4.5})

        assert response.json()["ratingsCount"] == 3
        assert response.json()["averageRating"] == pytest.approx((5 + 2 + 4.5) / 3)

    @pytest.mark.asyncio
    async def test_zero_rating_rejected(self, test_client, registered_user):
        note = await _create_note(test_client, registered_user["id"])

        response = await test_client.post(
            f"/api/notes/{note['id']}/rate", json={"userId": "u1", "rating": 0}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Missing userId or rating"}

    @pytest.mark.asyncio
    async def test_string_rating_rejected(self, test_client, registered_user):
        note = await _create_note(test_client, registered_user["id"])

        response = await test_client.post(
            f"/api/notes/{note['id']}/rate", json={"userId": "u1", "rating": "5"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    @pytest.mark.asyncio
    async def test_no_body_is_missing_rating(self, test_client, registered_user):
        note = await _create_note(test_client, registered_user["id"])

        response = await test_client.post(f"/api/notes/{note['id']}/rate")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing userId or rating"}

    @pytest.mark.asyncio
    async def test_missing_fields_checked_before_lookup(self, test_client):
        response = await test_client.post("/api/notes/nope/rate", json={"rating": 4})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_note(self, test_client):
        response = await test_client.post("/api/notes/nope/rate", json={"userId": "u1", "rating": 4})

        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}
