"""
Fritter Backend: Like and Report Endpoint Tests
================================================

What we test:
    ✅ Likes on freets and replies: add (201), duplicate (409), remove, missing (404)
    ✅ Legacy /api/likes routes addressed by freetId
    ✅ Reports: duplicate (409), listing, removal at the configured threshold
"""

import uuid

import pytest

from fritter.config import settings


async def _freet(client, content="likeable"):
    response = await client.post("/api/freets", json={"content": content})
    assert response.status_code == 201
    return response.json()["freet"]


async def _reply(client, freet_id, content="reply"):
    response = await client.post(f"/api/freets/{freet_id}/replies", json={"content": content})
    assert response.status_code == 201
    return response.json()["reply"]


class TestFreetLikes:

    @pytest.mark.asyncio
    async def test_like_list_unlike(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        freet = await _freet(alice)
        url = f"/api/freets/{freet['id']}/likes"

        response = await bob.post(url)
        assert response.status_code == 201
        assert response.json()["like"]["liker"] == "bob"
        assert response.json()["like"]["freet_id"] == freet["id"]

        likes = (await alice.get(url)).json()["likes"]
        assert [like["liker"] for like in likes] == ["bob"]

        assert (await bob.delete(url)).status_code == 200
        assert (await alice.get(url)).json()["likes"] == []

    @pytest.mark.asyncio
    async def test_duplicate_like_conflicts(self, signed_in):
        alice = await signed_in("alice")
        freet = await _freet(alice)
        url = f"/api/freets/{freet['id']}/likes"
        await alice.post(url)

        response = await alice.post(url)

        assert response.status_code == 409
        assert response.json()["message"] == "You have already liked this freet."

    @pytest.mark.asyncio
    async def test_unlike_without_like_is_not_found(self, signed_in):
        alice = await signed_in("alice")
        freet = await _freet(alice)

        response = await alice.delete(f"/api/freets/{freet['id']}/likes")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_like_unknown_freet(self, signed_in):
        alice = await signed_in("alice")

        response = await alice.post(f"/api/freets/{uuid.uuid4()}/likes")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_like_requires_session(self, signed_in, test_client):
        alice = await signed_in("alice")
        freet = await _freet(alice)

        response = await test_client.post(f"/api/freets/{freet['id']}/likes")

        assert response.status_code == 403


class TestReplyLikes:

    @pytest.mark.asyncio
    async def test_like_reply(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        freet = await _freet(alice)
        reply = await _reply(alice, freet["id"])
        url = f"/api/replies/{reply['id']}/likes"

        response = await bob.post(url)

        assert response.status_code == 201
        assert response.json()["like"]["reply_id"] == reply["id"]
        assert (await bob.post(url)).status_code == 409
        assert len((await alice.get(url)).json()["likes"]) == 1
        assert (await bob.delete(url)).status_code == 200
        assert (await bob.delete(url)).status_code == 404


class TestLegacyLikes:

    @pytest.mark.asyncio
    async def test_like_count_by_freet_id(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        freet = await _freet(alice)

        response = await bob.post("/api/likes", json={"freetId": freet["id"]})
        assert response.status_code == 201
        await alice.post("/api/likes", json={"freetId": freet["id"]})

        response = await alice.get("/api/likes", params={"freetId": freet["id"]})
        assert response.status_code == 200
        assert response.json()["like_count"] == 2

        response = await bob.request("DELETE", "/api/likes", json={"freetId": freet["id"]})
        assert response.status_code == 200
        count = (await alice.get("/api/likes", params={"freetId": freet["id"]})).json()
        assert count["like_count"] == 1

    @pytest.mark.asyncio
    async def test_missing_freet_id_is_bad_request(self, signed_in):
        alice = await signed_in("alice")

        assert (await alice.get("/api/likes")).status_code == 400
        assert (await alice.post("/api/likes", json={})).status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_freet_id_is_not_found(self, signed_in):
        alice = await signed_in("alice")

        response = await alice.get("/api/likes", params={"freetId": str(uuid.uuid4())})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_remove_missing_like_is_not_found(self, signed_in):
        alice = await signed_in("alice")
        freet = await _freet(alice)

        response = await alice.request("DELETE", "/api/likes", json={"freetId": freet["id"]})

        assert response.status_code == 404


class TestReports:

    @pytest.mark.asyncio
    async def test_report_and_list(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        freet = await _freet(alice)
        url = f"/api/freets/{freet['id']}/reports"

        response = await bob.post(url)

        assert response.status_code == 201
        assert response.json()["report"]["reporter"] == "bob"
        assert response.json()["removed"] is False
        reports = (await alice.get(url)).json()["reports"]
        assert [r["reporter"] for r in reports] == ["bob"]

    @pytest.mark.asyncio
    async def test_duplicate_report_conflicts(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        freet = await _freet(alice)
        url = f"/api/freets/{freet['id']}/reports"
        await bob.post(url)

        response = await bob.post(url)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_freet_removed_at_threshold(self, signed_in, test_client, monkeypatch):
        monkeypatch.setattr(settings, "freet_report_threshold", 2)
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        carol = await signed_in("carol")
        freet = await _freet(alice)
        url = f"/api/freets/{freet['id']}/reports"

        first = await bob.post(url)
        assert first.json()["removed"] is False
        assert (await test_client.get(f"/api/freets/{freet['id']}")).status_code == 200

        second = await carol.post(url)
        assert second.status_code == 201
        assert second.json()["removed"] is True
        assert (await test_client.get(f"/api/freets/{freet['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_reply_removed_at_threshold(self, signed_in, monkeypatch):
        monkeypatch.setattr(settings, "reply_report_threshold", 2)
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        carol = await signed_in("carol")
        freet = await _freet(alice)
        reply = await _reply(alice, freet["id"])
        url = f"/api/replies/{reply['id']}/reports"

        assert (await bob.post(url)).json()["removed"] is False
        assert (await carol.post(url)).json()["removed"] is True

        assert (await alice.get(f"/api/replies/{reply['id']}")).status_code == 404
        listing = (await alice.get(f"/api/freets/{freet['id']}/replies")).json()["replies"]
        assert listing[0]["deleted"] is True

    @pytest.mark.asyncio
    async def test_report_unknown_reply(self, signed_in):
        alice = await signed_in("alice")

        response = await alice.post(f"/api/replies/{uuid.uuid4()}/reports")

        assert response.status_code == 404
