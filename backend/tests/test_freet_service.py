"""
Fritter Backend: Freet Service and Model Unit Tests
====================================================

What we test:
    ✅ Freet.is_visible_to for public, private and circle freets
    ✅ to_response hides the author of anonymous freets from everyone else
    ✅ get_freet maps malformed ids and missing rows to NotFoundError
    ✅ update/delete reject users other than the author
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from fritter.exceptions import ForbiddenError, NotFoundError
from fritter.models.circle import Circle
from fritter.models.freet import Freet
from fritter.services.freet_service import FreetService


def _freet(author, **overrides):
    now = datetime.now(timezone.utc)
    fields = dict(
        id=uuid.uuid4(),
        author=author,
        author_id=author.id,
        content="hello",
        date_created=now,
        date_modified=now,
        anonymous=False,
        private=False,
        deleted=False,
        circle=None,
        circle_id=None,
    )
    fields.update(overrides)
    return Freet(**fields)


def _result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestVisibility:

    def test_public_freet_visible_to_everyone(self, make_user):
        alice = make_user("alice")
        freet = _freet(alice)

        assert freet.is_visible_to(None)
        assert freet.is_visible_to(uuid.uuid4())

    def test_private_freet_visible_to_author_only(self, make_user):
        alice = make_user("alice")
        freet = _freet(alice, private=True)

        assert freet.is_visible_to(alice.id)
        assert not freet.is_visible_to(uuid.uuid4())
        assert not freet.is_visible_to(None)

    def test_circle_freet_visible_to_creator_and_members(self, make_user):
        alice, bob, carol = make_user("alice"), make_user("bob"), make_user("carol")
        circle = Circle(id=uuid.uuid4(), creator_id=alice.id, name="crew", members=[bob])
        freet = _freet(alice, circle=circle, circle_id=circle.id)

        assert freet.is_visible_to(alice.id)
        assert freet.is_visible_to(bob.id)
        assert not freet.is_visible_to(carol.id)
        assert not freet.is_visible_to(None)


class TestToResponse:

    def test_anonymous_author_hidden(self, make_user):
        alice = make_user("alice")
        freet = _freet(alice, anonymous=True)

        assert FreetService.to_response(freet, None).author is None
        assert FreetService.to_response(freet, uuid.uuid4()).author is None
        assert FreetService.to_response(freet, alice.id).author == "alice"

    def test_named_author_shown(self, make_user):
        freet = _freet(make_user("alice"))

        response = FreetService.to_response(freet)

        assert response.author == "alice"
        assert response.content == "hello"


class TestGetFreet:

    def setup_method(self):
        self.service = FreetService()

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_freet(mock_db_session, "12345")

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_row_is_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)
        freet_id = str(uuid.uuid4())

        with pytest.raises(NotFoundError, match=freet_id):
            await self.service.get_freet(mock_db_session, freet_id)

    @pytest.mark.asyncio
    async def test_update_by_non_author_is_forbidden(self, mock_db_session, make_user):
        freet = _freet(make_user("alice"))
        mock_db_session.execute.return_value = _result(freet)

        with pytest.raises(ForbiddenError):
            await self.service.update_freet(mock_db_session, str(freet.id), make_user("bob"), "edit")

        assert freet.content == "hello"

    @pytest.mark.asyncio
    async def test_delete_marks_freet_deleted(self, mock_db_session, make_user):
        alice = make_user("alice")
        freet = _freet(alice)
        mock_db_session.execute.return_value = _result(freet)

        await self.service.delete_freet(mock_db_session, str(freet.id), alice)

        assert freet.deleted is True
        mock_db_session.flush.assert_awaited_once()
