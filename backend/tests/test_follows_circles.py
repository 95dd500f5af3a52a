"""
Fritter Backend: Follow and Circle Endpoint Tests
==================================================

What we test:
    ✅ Follow / unfollow with 404, 403 (self) and 409 (duplicate)
    ✅ Follower and following listings
    ✅ Circle create / modify / delete with name and member rules
    ✅ Default circle cannot be deleted; freets of a deleted circle turn private
    ✅ Circle feed visible to creator and members only
"""

import uuid

import pytest


class TestFollows:

    @pytest.mark.asyncio
    async def test_follow_and_list(self, signed_in):
        alice = await signed_in("alice")
        await signed_in("bob")

        response = await alice.post("/api/users/bob/followers")

        assert response.status_code == 201
        follow = response.json()["follow"]
        assert follow["follower"] == "alice"
        assert follow["followee"] == "bob"

        followers = (await alice.get("/api/users/bob/followers")).json()["followers"]
        assert [f["follower"] for f in followers] == ["alice"]
        following = (await alice.get("/api/users/alice/following")).json()["following"]
        assert [f["followee"] for f in following] == ["bob"]

    @pytest.mark.asyncio
    async def test_follow_unknown_user(self, signed_in):
        alice = await signed_in("alice")

        response = await alice.post("/api/users/ghost/followers")

        assert response.status_code == 404
        assert response.json()["message"] == "A user with username ghost does not exist."

    @pytest.mark.asyncio
    async def test_cannot_follow_yourself(self, signed_in):
        alice = await signed_in("alice")

        response = await alice.post("/api/users/alice/followers")

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_duplicate_follow_conflicts(self, signed_in):
        alice = await signed_in("alice")
        await signed_in("bob")
        await alice.post("/api/users/bob/followers")

        response = await alice.post("/api/users/bob/followers")

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_unfollow(self, signed_in):
        alice = await signed_in("alice")
        await signed_in("bob")
        await alice.post("/api/users/bob/followers")

        response = await alice.delete("/api/users/bob/followers")

        assert response.status_code == 200
        assert (await alice.get("/api/users/bob/followers")).json()["followers"] == []
        assert (await alice.delete("/api/users/bob/followers")).status_code == 404

    @pytest.mark.asyncio
    async def test_listings_require_session(self, signed_in, test_client):
        await signed_in("bob")

        response = await test_client.get("/api/users/bob/followers")

        assert response.status_code == 403


class TestCircles:

    @pytest.mark.asyncio
    async def test_create_with_members(self, signed_in):
        alice = await signed_in("alice")
        await signed_in("bob")
        await signed_in("carol")

        response = await alice.post(
            "/api/circles", json={"name": "crew", "members": ["carol", "bob", "alice", "bob"]}
        )

        assert response.status_code == 201
        circle = response.json()["circle"]
        assert circle["creator"] == "alice"
        assert circle["members"] == ["bob", "carol"]
        assert circle["deletable"] is True

    @pytest.mark.asyncio
    async def test_members_as_comma_separated_string(self, signed_in):
        alice = await signed_in("alice")
        await signed_in("bob")
        await signed_in("carol")

        response = await alice.post("/api/circles", json={"name": "crew", "members": "bob, carol"})

        assert response.status_code == 201
        assert response.json()["circle"]["members"] == ["bob", "carol"]

    @pytest.mark.asyncio
    async def test_empty_name_is_bad_request(self, signed_in):
        alice = await signed_in("alice")

        response = await alice.post("/api/circles", json={"name": "  ", "members": []})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_duplicate_name_conflicts(self, signed_in):
        alice = await signed_in("alice")

        response = await alice.post("/api/circles", json={"name": "Close Friends"})

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_same_name_allowed_for_different_creators(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")

        assert (await alice.post("/api/circles", json={"name": "team"})).status_code == 201
        assert (await bob.post("/api/circles", json={"name": "team"})).status_code == 201

    @pytest.mark.asyncio
    async def test_unknown_member_is_not_found(self, signed_in):
        alice = await signed_in("alice")

        response = await alice.post("/api/circles", json={"name": "crew", "members": ["ghost"]})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_rename_and_replace_members(self, signed_in):
        alice = await signed_in("alice")
        await signed_in("bob")
        await signed_in("carol")
        circle = (
            await alice.post("/api/circles", json={"name": "crew", "members": ["bob"]})
        ).json()["circle"]

        response = await alice.patch(
            f"/api/circles/{circle['id']}", json={"name": "squad", "members": ["carol"]}
        )

        assert response.status_code == 200
        updated = response.json()["circle"]
        assert updated["name"] == "squad"
        assert updated["members"] == ["carol"]

    @pytest.mark.asyncio
    async def test_modify_by_other_user_is_forbidden(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        circle = (await alice.post("/api/circles", json={"name": "crew"})).json()["circle"]

        response = await bob.patch(f"/api/circles/{circle['id']}", json={"name": "mine"})

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_modify_unknown_circle(self, signed_in):
        alice = await signed_in("alice")

        response = await alice.patch(f"/api/circles/{uuid.uuid4()}", json={"name": "x"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_default_circle_cannot_be_deleted(self, signed_in):
        alice = await signed_in("alice")
        default = (await alice.get("/api/circles")).json()["circles"][0]

        response = await alice.delete(f"/api/circles/{default['id']}")

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_delete_makes_circle_freets_private(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        circle = (
            await alice.post("/api/circles", json={"name": "crew", "members": ["bob"]})
        ).json()["circle"]
        freet = (
            await alice.post("/api/freets", json={"content": "crew only", "circle_id": circle["id"]})
        ).json()["freet"]

        response = await alice.delete(f"/api/circles/{circle['id']}")

        assert response.status_code == 200
        assert (await bob.get(f"/api/freets/{freet['id']}")).status_code == 403
        own = (await alice.get(f"/api/freets/{freet['id']}")).json()
        assert own["private"] is True
        assert own["circle_id"] is None
        assert len((await alice.get("/api/circles")).json()["circles"]) == 1

    @pytest.mark.asyncio
    async def test_circle_freets_for_members_only(self, signed_in):
        alice = await signed_in("alice")
        bob = await signed_in("bob")
        carol = await signed_in("carol")
        circle = (
            await alice.post("/api/circles", json={"name": "crew", "members": ["bob"]})
        ).json()["circle"]
        await alice.post("/api/freets", json={"content": "crew only", "circle_id": circle["id"]})
        await alice.post("/api/freets", json={"content": "public"})
        url = f"/api/circles/{circle['id']}/freets"

        member_view = await bob.get(url)
        outsider_view = await carol.get(url)

        assert member_view.status_code == 200
        assert [f["content"] for f in member_view.json()["freets"]] == ["crew only"]
        assert outsider_view.status_code == 403
