"""
Kacchi Likhavat Backend — Service Unit Tests
=============================================

What:  Tests for service-layer helpers and error paths.
How:   Uses mock DB sessions (no real database) and plain function calls.

What we test:
    ✅ DB error translation (unexpected → DatabaseError, constraint errors untouched)
    ✅ Ownership lookups raise NotFoundError
    ✅ Stats bumps create the profile row on first increment only
    ✅ Room creates and deletes leave the counters to the recount
    ✅ Chapter order claim against a missing story
    ✅ Profile access check
    ✅ Pure helpers: search categories, LIKE escaping, month window,
       memory titles, preference merge, date parsing, tag cleanup
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from likhavat.exceptions import DatabaseError, NotFoundError, PermissionDeniedError, ValidationError
from likhavat.models.room import Room
from likhavat.models.user_profile import UserProfile, default_preferences
from likhavat.schemas.common import parse_datetime
from likhavat.schemas.memory import MemoryCreate
from likhavat.schemas.room import RoomCreate
from likhavat.schemas.story import ChapterCreate
from likhavat.services.base import date_bounds, translate_db_errors
from likhavat.services.dashboard_service import memory_title
from likhavat.services.expense_service import month_window
from likhavat.services.note_service import clean_tags, note_service
from likhavat.services.profile_service import merge_preferences, profile_service
from likhavat.services.room_service import room_service
from likhavat.services.search_service import SEARCH_CATEGORIES, like_pattern, parse_categories
from likhavat.services.stats import stats_service
from likhavat.services.story_service import chapter_service


def _result(scalar=None, rowcount=1):
    result = MagicMock()
    result.scalar_one_or_none.return_value = scalar
    result.rowcount = rowcount
    return result


class TestTranslateDbErrors:

    def test_unexpected_error_becomes_database_error(self):
        with pytest.raises(DatabaseError) as exc_info:
            with translate_db_errors("load things"):
                raise OperationalError("SELECT 1", {}, Exception("connection lost"))
        assert exc_info.value.message == "Could not load things. Please try again."
        assert exc_info.value.context == {"error_type": "OperationalError"}

    def test_integrity_error_passes_through(self):
        with pytest.raises(IntegrityError):
            with translate_db_errors("insert"):
                raise IntegrityError("INSERT", {}, Exception("duplicate key"))

    def test_application_errors_pass_through(self):
        with pytest.raises(NotFoundError):
            with translate_db_errors("read"):
                raise NotFoundError(resource="note")


class TestOwnershipLookups:

    @pytest.mark.asyncio
    async def test_missing_note(self, mock_db_session):
        mock_db_session.execute.return_value = _result(scalar=None)
        with pytest.raises(NotFoundError) as exc_info:
            await note_service.get(mock_db_session, uuid4(), uuid4())
        assert exc_info.value.message == "Note not found"

    @pytest.mark.asyncio
    async def test_chapter_for_missing_story(self, mock_db_session):
        mock_db_session.execute.return_value = _result(scalar=None)
        payload = ChapterCreate(story_id=uuid4(), title="One")
        with pytest.raises(NotFoundError) as exc_info:
            await chapter_service.create(mock_db_session, uuid4(), payload)
        assert exc_info.value.message == "Story not found"
        mock_db_session.add.assert_not_called()


class TestStatsBump:

    @pytest.mark.asyncio
    async def test_existing_profile_is_updated_in_place(self, mock_db_session):
        mock_db_session.execute.return_value = _result(rowcount=1)
        await stats_service.bump(mock_db_session, uuid4(), "notes_count", 1)
        mock_db_session.execute.assert_awaited_once()
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_first_increment_creates_profile(self, mock_db_session):
        user_id = uuid4()
        mock_db_session.execute.return_value = _result(rowcount=0)
        await stats_service.bump(mock_db_session, user_id, "memories_count", 1)

        added = mock_db_session.add.call_args[0][0]
        assert isinstance(added, UserProfile)
        assert added.user_id == user_id
        assert added.memories_count == 1
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_decrement_without_profile_is_noop(self, mock_db_session):
        mock_db_session.execute.return_value = _result(rowcount=0)
        await stats_service.bump(mock_db_session, uuid4(), "notes_count", -1)
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_field(self, mock_db_session):
        with pytest.raises(ValueError):
            await stats_service.bump(mock_db_session, uuid4(), "likes_count", 1)


class TestRoomCounters:

    @pytest.mark.asyncio
    async def test_create_does_not_bump_stats(self, mock_db_session):
        room = await room_service.create(mock_db_session, uuid4(), RoomCreate(type="note", title="Desk"))
        mock_db_session.add.assert_called_once_with(room)
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_does_not_bump_stats(self, mock_db_session):
        user_id = uuid4()
        room = Room(id=uuid4(), user_id=user_id, type="free", title="Desk", content="")
        mock_db_session.execute.return_value = _result(scalar=room)

        await room_service.delete(mock_db_session, user_id, room.id)

        # only the ownership lookup, no counter UPDATE
        mock_db_session.execute.assert_awaited_once()
        mock_db_session.delete.assert_awaited_once_with(room)


class TestProfileAccessCheck:

    def test_same_user_passes(self):
        user_id = uuid4()
        profile_service._check_self(user_id, user_id, "view")

    def test_other_user_is_denied(self):
        with pytest.raises(PermissionDeniedError) as exc_info:
            profile_service._check_self(uuid4(), uuid4(), "update")
        assert exc_info.value.message == "You can only update your own profile"


class TestSearchHelpers:

    @pytest.mark.parametrize("value", [None, "", "all", " ALL "])
    def test_all_categories(self, value):
        assert parse_categories(value) == SEARCH_CATEGORIES

    def test_subset_keeps_canonical_order(self):
        assert parse_categories("memories, notes") == ("notes", "memories")

    @pytest.mark.parametrize("value", ["photos", "notes,photos", ",,"])
    def test_invalid_categories(self, value):
        with pytest.raises(ValidationError):
            parse_categories(value)

    def test_like_pattern_escapes_wildcards(self):
        assert like_pattern("apple") == "%apple%"
        assert like_pattern("50%") == "%50\\%%"
        assert like_pattern("a_b") == "%a\\_b%"
        assert like_pattern("c:\\tmp") == "%c:\\\\tmp%"


class TestMonthWindow:

    def test_leap_february(self):
        start, end = month_window(2, 2024)
        assert start == datetime(2024, 2, 1, tzinfo=timezone.utc)
        assert end == datetime(2024, 2, 29, 23, 59, 59, 999999, tzinfo=timezone.utc)

    def test_december(self):
        _, end = month_window(12, 2023)
        assert end.day == 31

    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month(self, month):
        with pytest.raises(ValidationError):
            month_window(month, 2024)


class TestSmallHelpers:

    def test_memory_title(self):
        assert memory_title("short") == "short"
        assert memory_title("y" * 50) == "y" * 50
        assert memory_title("y" * 51) == "y" * 50 + "..."

    def test_merge_preferences_is_nested_one_level(self):
        current = default_preferences()
        merged = merge_preferences(current, {"theme": "dark", "editor_settings": {"font_size": 18}})
        assert merged["theme"] == "dark"
        assert merged["editor_settings"] == {"font_size": 18, "font_family": "Inter", "line_height": 1.6}
        # input untouched
        assert current["theme"] == "auto"

    def test_merge_preferences_from_empty(self):
        merged = merge_preferences({}, {"default_template": "letter"})
        assert merged["default_template"] == "letter"
        assert merged["theme"] == "auto"

    def test_clean_tags(self):
        assert clean_tags([" ideas", "work", "", "ideas", "  "]) == ["ideas", "work"]

    def test_parse_datetime(self):
        assert parse_datetime("2024-01-15") == datetime(2024, 1, 15, tzinfo=timezone.utc)
        assert parse_datetime("2024-01-15", end_of_day=True).hour == 23
        assert parse_datetime("2024-01-15T10:30:00Z") == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        assert parse_datetime("2024-01-15T12:00:00+05:30").hour == 6
        with pytest.raises(ValueError):
            parse_datetime("yesterday")

    @pytest.mark.parametrize("value", [12345, 1.5, True, None, ["2024-01-15"], {"date": "2024-01-15"}])
    def test_parse_datetime_rejects_non_strings(self, value):
        with pytest.raises(ValueError):
            parse_datetime(value)

    def test_date_bounds(self):
        start, end = date_bounds("2024-01-01", "2024-01-31")
        assert start == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert end.date().day == 31 and end.hour == 23
        assert date_bounds(None, "") == (None, None)

    def test_date_bounds_rejects_garbage(self):
        with pytest.raises(ValidationError) as exc_info:
            date_bounds(None, "soon")
        assert exc_info.value.field == "to"

    def test_memory_text_resolution(self):
        room = uuid4()
        assert MemoryCreate(room_id=room, text="t", title="ignored").resolved_text() == "t"
        assert MemoryCreate(room_id=room, title="A", content="B").resolved_text() == "A\n\nB"
        assert MemoryCreate(room_id=room, content="only").resolved_text() == "only"
        assert MemoryCreate(room_id=room).resolved_text() is None
