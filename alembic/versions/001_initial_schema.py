"""Initial schema — users, dating profiles, swipes, matches and side-effect tables.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at(name: str = "created_at") -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def upgrade() -> None:
    # ── 1. users ────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("full_name", sa.String, nullable=False),
        sa.Column("avatar", sa.String, nullable=True),
        sa.Column("date_of_birth", sa.Date, nullable=True),
        sa.Column("gender", sa.String(16), nullable=True, comment="MALE / FEMALE / OTHER"),
        _created_at(),
    )

    # ── 2. dating_profiles ──────────────────────────────────────────
    op.create_table(
        "dating_profiles",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            unique=True,
            nullable=False,
        ),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, server_default=sa.true(), nullable=False),
        _created_at(),
    )

    # ── 3. dating_photos ────────────────────────────────────────────
    op.create_table(
        "dating_photos",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column(
            "profile_id",
            sa.Uuid,
            sa.ForeignKey("dating_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("url", sa.String, nullable=False),
        sa.Column("order", sa.Integer, nullable=False, comment="0-5"),
    )
    op.create_index("ix_dating_photos_profile_id", "dating_photos", ["profile_id"])

    # ── 4. dating_preferences ───────────────────────────────────────
    op.create_table(
        "dating_preferences",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column(
            "profile_id",
            sa.Uuid,
            sa.ForeignKey("dating_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("gender", sa.String(16), nullable=True, comment="Preferred gender; NULL means any"),
        sa.Column("age_min", sa.Integer, nullable=False),
        sa.Column("age_max", sa.Integer, nullable=False),
        sa.Column("max_distance", sa.Integer, nullable=True, comment="km"),
        sa.UniqueConstraint("profile_id", name="uq_dating_preference_profile"),
    )

    # ── 5. dating_swipes ────────────────────────────────────────────
    op.create_table(
        "dating_swipes",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column(
            "from_user_id",
            sa.Uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "to_user_id",
            sa.Uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("action", sa.String(8), nullable=False, comment="LIKE / PASS"),
        _created_at(),
        sa.UniqueConstraint("from_user_id", "to_user_id", name="uq_swipe_pair"),
    )
    op.create_index("ix_dating_swipes_from_user_id", "dating_swipes", ["from_user_id"])
    op.create_index("ix_dating_swipes_to_user_id", "dating_swipes", ["to_user_id"])

    # ── 6. dating_matches ───────────────────────────────────────────
    # user_a_id < user_b_id is enforced by the application (canonical pair);
    # the schema only guarantees uniqueness and distinct users.
    op.create_table(
        "dating_matches",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column(
            "user_a_id",
            sa.Uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_b_id",
            sa.Uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at(),
        sa.UniqueConstraint("user_a_id", "user_b_id", name="uq_match_pair"),
        sa.CheckConstraint("user_a_id <> user_b_id", name="ck_match_distinct_users"),
    )
    op.create_index("ix_dating_matches_user_a_id", "dating_matches", ["user_a_id"])
    op.create_index("ix_dating_matches_user_b_id", "dating_matches", ["user_b_id"])

    # ── 7. conversations ────────────────────────────────────────────
    op.create_table(
        "conversations",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("type", sa.String(16), nullable=False, comment="PRIVATE / GROUP"),
        _created_at(),
    )

    # ── 8. conversation_participants ────────────────────────────────
    op.create_table(
        "conversation_participants",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column(
            "conversation_id",
            sa.Uuid,
            sa.ForeignKey("conversations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at("joined_at"),
        sa.UniqueConstraint("conversation_id", "user_id", name="uq_conversation_participant"),
    )
    op.create_index(
        "ix_conversation_participants_user_id", "conversation_participants", ["user_id"]
    )

    # ── 9. notifications ────────────────────────────────────────────
    op.create_table(
        "notifications",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column(
            "sender_id",
            sa.Uuid,
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "receiver_id",
            sa.Uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("reference_id", sa.Uuid, nullable=True, comment="Match id for MATCH_CREATED"),
        sa.Column("content", sa.Text, nullable=True),
        sa.Column("is_read", sa.Boolean, server_default=sa.false(), nullable=False),
        _created_at(),
    )
    op.create_index("ix_notifications_receiver_id", "notifications", ["receiver_id"])
    op.create_index("ix_notifications_reference_id", "notifications", ["reference_id"])

    # ── 10. user_blocks ─────────────────────────────────────────────
    op.create_table(
        "user_blocks",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column(
            "blocker_id",
            sa.Uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "blocked_user_id",
            sa.Uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at(),
        sa.UniqueConstraint("blocker_id", "blocked_user_id", name="uq_user_block_pair"),
    )
    op.create_index("ix_user_blocks_blocker_id", "user_blocks", ["blocker_id"])
    op.create_index("ix_user_blocks_blocked_user_id", "user_blocks", ["blocked_user_id"])


def downgrade() -> None:
    # Drop in reverse order (children / dependents first).
    op.drop_index("ix_user_blocks_blocked_user_id", table_name="user_blocks")
    op.drop_index("ix_user_blocks_blocker_id", table_name="user_blocks")
    op.drop_table("user_blocks")

    op.drop_index("ix_notifications_reference_id", table_name="notifications")
    op.drop_index("ix_notifications_receiver_id", table_name="notifications")
    op.drop_table("notifications")

    op.drop_index(
        "ix_conversation_participants_user_id", table_name="conversation_participants"
    )
    op.drop_table("conversation_participants")
    op.drop_table("conversations")

    op.drop_index("ix_dating_matches_user_b_id", table_name="dating_matches")
    op.drop_index("ix_dating_matches_user_a_id", table_name="dating_matches")
    op.drop_table("dating_matches")

    op.drop_index("ix_dating_swipes_to_user_id", table_name="dating_swipes")
    op.drop_index("ix_dating_swipes_from_user_id", table_name="dating_swipes")
    op.drop_table("dating_swipes")

    op.drop_table("dating_preferences")
    op.drop_index("ix_dating_photos_profile_id", table_name="dating_photos")
    op.drop_table("dating_photos")
    op.drop_table("dating_profiles")
    op.drop_table("users")
