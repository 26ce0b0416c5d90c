"""
ORM models.

Importing this package registers every table on `Base.metadata`, which
Alembic and the test suite rely on.
"""

from likhavat.models.expense import EXPENSE_CATEGORIES, Expense
from likhavat.models.memory import MOODS, Memory
from likhavat.models.note import Note, NoteTag
from likhavat.models.room import ROOM_TYPES, Room
from likhavat.models.story import Chapter, Story
from likhavat.models.user import User
from likhavat.models.user_profile import STAT_FIELDS, UserProfile

__all__ = [
    "Chapter",
    "EXPENSE_CATEGORIES",
    "Expense",
    "MOODS",
    "Memory",
    "Note",
    "NoteTag",
    "ROOM_TYPES",
    "Room",
    "STAT_FIELDS",
    "Story",
    "User",
    "UserProfile",
]
