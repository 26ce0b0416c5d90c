"""Create initial schema

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates every table of the workspace: users, user_profiles, rooms,
       notes, note_tags, stories, chapters, expenses and memories.
How:   Portable column types (sa.Uuid, sa.JSON) so the same migration runs
       on PostgreSQL and on SQLite for local experiments.

Rollback: downgrade() drops all tables (destructive, all data lost).
"""

from typing import List, Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> List[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this record was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this record was last modified (UTC)",
        ),
    ]


def _owned() -> List[sa.Column]:
    """id + owner columns shared by every content table."""
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            comment="Owner of this record",
        ),
    ]


def upgrade() -> None:
    # ── Accounts ──────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False, server_default=sa.text("''")),
        sa.Column("password_hash", sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "user_profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("display_name", sa.String(255), nullable=False, server_default=sa.text("''")),
        sa.Column("bio", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("avatar_url", sa.String(1024), nullable=False, server_default=sa.text("''")),
        sa.Column("preferences", sa.JSON(), nullable=False),
        sa.Column("created_rooms", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("notes_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("stories_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("expenses_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("memories_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )

    # ── Rooms ─────────────────────────────────────────────────────────────
    op.create_table(
        "rooms",
        *_owned(),
        sa.Column("type", sa.String(20), nullable=False, server_default=sa.text("'free'")),
        sa.Column("title", sa.String(255), nullable=False, server_default=sa.text("''")),
        sa.Column("content", sa.Text(), nullable=False, server_default=sa.text("''")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_rooms_user_id", "rooms", ["user_id"])
    op.create_index("idx_rooms_user_updated", "rooms", ["user_id", "updated_at"])

    # ── Notes ─────────────────────────────────────────────────────────────
    # room_id carries no foreign key: deleting a room leaves its notes
    op.create_table(
        "notes",
        *_owned(),
        sa.Column("room_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False, server_default=sa.text("'Untitled Note'")),
        sa.Column("content", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("is_pinned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notes_user_id", "notes", ["user_id"])
    op.create_index("ix_notes_room_id", "notes", ["room_id"])
    op.create_index("idx_notes_user_updated", "notes", ["user_id", "updated_at"])

    op.create_table(
        "note_tags",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "note_id",
            sa.Uuid(),
            sa.ForeignKey("notes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("tag", sa.String(100), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_note_tags_note_id", "note_tags", ["note_id"])
    op.create_index("ix_note_tags_tag", "note_tags", ["tag"])

    # ── Stories and chapters ──────────────────────────────────────────────
    op.create_table(
        "stories",
        *_owned(),
        sa.Column("room_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False, server_default=sa.text("'Untitled Story'")),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("cover_image", sa.String(1024), nullable=False, server_default=sa.text("''")),
        sa.Column(
            "chapter_seq",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
            comment="Highest chapter order handed out so far",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_stories_user_id", "stories", ["user_id"])
    op.create_index("ix_stories_room_id", "stories", ["room_id"])
    op.create_index("idx_stories_user_updated", "stories", ["user_id", "updated_at"])

    op.create_table(
        "chapters",
        *_owned(),
        sa.Column(
            "story_id",
            sa.Uuid(),
            sa.ForeignKey("stories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False, server_default=sa.text("'Untitled Chapter'")),
        sa.Column("content", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("order", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_chapters_user_id", "chapters", ["user_id"])
    op.create_index("idx_chapters_story_order", "chapters", ["story_id", "order"])

    # ── Expenses ──────────────────────────────────────────────────────────
    op.create_table(
        "expenses",
        *_owned(),
        sa.Column("room_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("category", sa.String(32), nullable=False, server_default=sa.text("'Other'")),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_expenses_user_id", "expenses", ["user_id"])
    op.create_index("ix_expenses_room_id", "expenses", ["room_id"])
    op.create_index("ix_expenses_category", "expenses", ["category"])
    op.create_index("idx_expenses_user_date", "expenses", ["user_id", "date"])

    # ── Memories ──────────────────────────────────────────────────────────
    op.create_table(
        "memories",
        *_owned(),
        sa.Column("room_id", sa.Uuid(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("mood", sa.String(16), nullable=False, server_default=sa.text("'neutral'")),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("media_urls", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_memories_user_id", "memories", ["user_id"])
    op.create_index("ix_memories_room_id", "memories", ["room_id"])
    op.create_index("ix_memories_mood", "memories", ["mood"])
    op.create_index("idx_memories_user_date", "memories", ["user_id", "date"])


def downgrade() -> None:
    """
    Drop every table, children before parents.

    WARNING: destructive. All user data is permanently lost.
    """
    for table in (
        "memories",
        "expenses",
        "chapters",
        "stories",
        "note_tags",
        "notes",
        "rooms",
        "user_profiles",
        "users",
    ):
        op.drop_table(table)
