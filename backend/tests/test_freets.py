"""
Fritter Backend: Freet Endpoint Tests
======================================

What we test:
    ✅ Create / read / edit / delete with the documented check order
    ✅ Content rules: blank (400) and too long (413)
    ✅ Listing by author, anonymous masking, private and circle visibility
    ✅ Following feed
    ✅ Malformed and unknown ids (404)
"""

import uuid

import pytest


async def _post_freet(client, content="hello world", **extra):
    response = await client.post("/api/freets", json={"content": content, **extra})
    assert response.status_code == 201, response.text
    return response.json()["freet"]


class TestCreateFreet:

    @pytest.mark.asyncio
    async def test_create_and_fetch(self, signed_in, test_client):
        alice = await signed_in("alice")

        freet = await _post_freet(alice, "first freet")

        assert freet["author"] == "alice"
        assert freet["content"] == "first freet"
        assert freet["anonymous"] is False

        response = await test_client.get(f"/api/freets/{freet['id']}")
        assert response.status_code == 200
        assert response.json()["content"] == "first freet"

    @pytest.mark.asyncio
    async def test_requires_session(self, test_client):
        response = await test_client.post("/api/freets", json={"content": "hi"})

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    @pytest.mark.asyncio
    async def test_blank_content_is_bad_request(self, signed_in):
        alice = await signed_in("alice")

        response = await alice.post("/api/freets", json={"content": "   "})

        assert response.status_code == 400
        assert response.json()["message"] == "Freet content must be at least one character long."

    @pytest.mark.asyncio
    async def test_long_content_is_too_large(self, signed_in):
        alice = await signed_in("alice")

        response = await alice.post("/api/freets", json={"content": "x" * 141})

        assert response.status_code == 413
        assert response.json()["error"] == "payload_too_large"

    @pytest.mark.asyncio
    async def test_exactly_max_length_is_accepted(self, signed_in):
        alice = await signed_in("alice")

        freet = await _post_freet(alice, "x" * 140)

        assert len(freet["content"]) == 140


class TestModifyFreet:

    @pytest.mark.asyncio
    async def test_edit_updates_content_and_date(self, signed_in):
        alice = await signed_in("alice")
        freet = await _post_freet(alice, "draft")

        response = await alice.patch(f"/api/freets/{freet['id']}", json={"content": "final"})

        assert response.status_code == 200
        edited = response.json()["freet"]
        assert edited["content"] == "final"
        assert edited["date_modified"] >= freet["date_modified"]

    @pytest.mark.asyncio
    async def test_edit_by_other_user_is_forbidden(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        freet = await _post_freet(alice)

        response = await bob.patch(f"/api/freets/{freet['id']}", json={"content": "mine now"})

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_author_check_runs_before_content_check(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        freet = await _post_freet(alice)

        response = await bob.patch(f"/api/freets/{freet['id']}", json={"content": "x" * 200})

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_edit_with_long_content(self, signed_in):
        alice = await signed_in("alice")
        freet = await _post_freet(alice)

        response = await alice.patch(f"/api/freets/{freet['id']}", json={"content": "x" * 141})

        assert response.status_code == 413

    @pytest.mark.asyncio
    async def test_patch_without_content_deletes(self, signed_in, test_client):
        alice = await signed_in("alice")
        freet = await _post_freet(alice)

        response = await alice.patch(f"/api/freets/{freet['id']}", json={})

        assert response.status_code == 200
        assert (await test_client.get(f"/api/freets/{freet['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete(self, signed_in, test_client):
        alice = await signed_in("alice")
        freet = await _post_freet(alice)

        response = await alice.delete(f"/api/freets/{freet['id']}")

        assert response.status_code == 200
        assert (await test_client.get(f"/api/freets/{freet['id']}")).status_code == 404
        assert (await alice.delete(f"/api/freets/{freet['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_by_other_user_is_forbidden(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        freet = await _post_freet(alice)

        response = await bob.delete(f"/api/freets/{freet['id']}")

        assert response.status_code == 403


class TestFreetLookup:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("freet_id", ["not-a-uuid", str(uuid.uuid4())])
    async def test_unknown_freet_is_not_found(self, test_client, freet_id):
        response = await test_client.get(f"/api/freets/{freet_id}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"
        assert response.headers["X-Request-ID"]


class TestListFreets:

    @pytest.mark.asyncio
    async def test_newest_first(self, signed_in, test_client):
        alice = await signed_in("alice")
        first = await _post_freet(alice, "one")
        second = await _post_freet(alice, "two")

        freets = (await test_client.get("/api/freets")).json()["freets"]

        assert [f["id"] for f in freets] == [second["id"], first["id"]]

    @pytest.mark.asyncio
    async def test_filter_by_author(self, signed_in, test_client):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        await _post_freet(alice, "from alice")
        await _post_freet(bob, "from bob")

        response = await test_client.get("/api/freets", params={"author": "bob"})

        assert response.status_code == 200
        assert [f["content"] for f in response.json()["freets"]] == ["from bob"]

    @pytest.mark.asyncio
    async def test_unknown_author_is_not_found(self, test_client, database):
        response = await test_client.get("/api/freets", params={"author": "ghost"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_empty_author_is_bad_request(self, test_client, database):
        response = await test_client.get("/api/freets", params={"author": ""})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_anonymous_author_is_hidden_from_others(self, signed_in, test_client):
        alice = await signed_in("alice")
        freet = await _post_freet(alice, "secret admirer", anonymous=True)

        assert freet["author"] == "alice"
        listed = (await test_client.get("/api/freets")).json()["freets"]
        assert listed[0]["author"] is None
        single = (await test_client.get(f"/api/freets/{freet['id']}")).json()
        assert single["author"] is None

    @pytest.mark.asyncio
    async def test_anonymous_freets_left_out_of_author_listing(self, signed_in, test_client):
        alice = await signed_in("alice")
        await _post_freet(alice, "signed")
        await _post_freet(alice, "unsigned", anonymous=True)

        others = (await test_client.get("/api/freets", params={"author": "alice"})).json()
        own = (await alice.get("/api/freets", params={"author": "alice"})).json()

        assert [f["content"] for f in others["freets"]] == ["signed"]
        assert sorted(f["content"] for f in own["freets"]) == ["signed", "unsigned"]

    @pytest.mark.asyncio
    async def test_private_freet_visible_to_author_only(self, signed_in, test_client):
        alice = await signed_in("alice")
        freet = await _post_freet(alice, "diary", private=True)

        assert (await test_client.get(f"/api/freets/{freet['id']}")).status_code == 403
        assert (await alice.get(f"/api/freets/{freet['id']}")).status_code == 200
        assert (await test_client.get("/api/freets")).json()["freets"] == []


class TestCircleVisibility:

    @pytest.mark.asyncio
    async def test_circle_freet_visible_to_members_only(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        carol = await signed_in("carol")
        circle = (
            await alice.post("/api/circles", json={"name": "besties", "members": ["bob"]})
        ).json()["circle"]

        freet = await _post_freet(alice, "members only", circle_id=circle["id"])

        assert freet["circle_id"] == circle["id"]
        assert (await bob.get(f"/api/freets/{freet['id']}")).status_code == 200
        assert (await carol.get(f"/api/freets/{freet['id']}")).status_code == 403
        assert (await carol.get("/api/freets")).json()["freets"] == []

    @pytest.mark.asyncio
    async def test_cannot_post_to_unknown_circle(self, signed_in):
        alice = await signed_in("alice")

        response = await alice.post(
            "/api/freets", json={"content": "hi", "circle_id": str(uuid.uuid4())}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_cannot_post_to_someone_elses_circle(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        circle = (await alice.get("/api/circles")).json()["circles"][0]

        response = await bob.post(
            "/api/freets", json={"content": "hi", "circleId": circle["id"]}
        )

        assert response.status_code == 403


class TestFollowingFeed:

    @pytest.mark.asyncio
    async def test_feed_contains_followed_users_only(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        carol = await signed_in("carol")
        await _post_freet(bob, "from bob")
        await _post_freet(carol, "from carol")
        await alice.post("/api/users/bob/followers")

        response = await alice.get("/api/freets/followingFeed")

        assert response.status_code == 200
        assert [f["content"] for f in response.json()["freets"]] == ["from bob"]

    @pytest.mark.asyncio
    async def test_feed_requires_session(self, test_client):
        response = await test_client.get("/api/freets/followingFeed")

        assert response.status_code == 403
