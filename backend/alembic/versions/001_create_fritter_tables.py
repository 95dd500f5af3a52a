"""Create users, circles, freets, replies, likes, reports and follows

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

Foreign keys to users.id cascade on delete, except freets.author_id and
replies.author_id: those are SET NULL, and the user service soft-deletes an
account's freets and replies first so other users' replies keep their
parents. freets.circle_id is SET NULL; the circle service marks such freets
private before deleting the circle.

Rollback: downgrade() drops every table (all data lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _user_fk(column: str, ondelete: str = "CASCADE") -> sa.Column:
    return sa.Column(
        column,
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete=ondelete),
        nullable=ondelete == "SET NULL",
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "username",
            sa.String(64),
            nullable=False,
            comment="Public handle, unique across accounts",
        ),
        sa.Column(
            "password_hash",
            sa.String(128),
            nullable=False,
            comment="bcrypt hash of the account password",
        ),
        sa.Column("date_joined", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "circles",
        sa.Column("id", sa.Uuid(), nullable=False),
        _user_fk("creator_id"),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("deletable", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("date_created", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("creator_id", "name", name="uq_circles_creator_name"),
    )
    op.create_index("idx_circles_creator", "circles", ["creator_id"])

    op.create_table(
        "circle_members",
        sa.Column(
            "circle_id",
            sa.Uuid(),
            sa.ForeignKey("circles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("circle_id", "user_id"),
    )

    op.create_table(
        "freets",
        sa.Column("id", sa.Uuid(), nullable=False),
        _user_fk("author_id", ondelete="SET NULL"),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("date_created", sa.DateTime(timezone=True), nullable=False),
        sa.Column("date_modified", sa.DateTime(timezone=True), nullable=False),
        sa.Column("anonymous", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("private", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "circle_id",
            sa.Uuid(),
            sa.ForeignKey("circles.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id"),
    )
    # Feed queries order by most recent modification
    op.create_index("idx_freets_date_modified", "freets", [sa.text("date_modified DESC")])
    op.create_index("idx_freets_author", "freets", ["author_id"])
    op.create_index("idx_freets_circle", "freets", ["circle_id"])

    op.create_table(
        "replies",
        sa.Column("id", sa.Uuid(), nullable=False),
        _user_fk("author_id", ondelete="SET NULL"),
        sa.Column(
            "parent_freet_id",
            sa.Uuid(),
            sa.ForeignKey("freets.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "parent_reply_id",
            sa.Uuid(),
            sa.ForeignKey("replies.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("date_created", sa.DateTime(timezone=True), nullable=False),
        sa.Column("date_modified", sa.DateTime(timezone=True), nullable=False),
        sa.Column("anonymous", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "(parent_freet_id IS NULL) <> (parent_reply_id IS NULL)",
            name="ck_replies_one_parent",
        ),
    )
    op.create_index("idx_replies_parent_freet", "replies", ["parent_freet_id"])
    op.create_index("idx_replies_parent_reply", "replies", ["parent_reply_id"])

    op.create_table(
        "likes",
        sa.Column("id", sa.Uuid(), nullable=False),
        _user_fk("liker_id"),
        sa.Column(
            "freet_id",
            sa.Uuid(),
            sa.ForeignKey("freets.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "reply_id",
            sa.Uuid(),
            sa.ForeignKey("replies.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("liker_id", "freet_id", name="uq_likes_liker_freet"),
        sa.UniqueConstraint("liker_id", "reply_id", name="uq_likes_liker_reply"),
        sa.CheckConstraint(
            "(freet_id IS NULL) <> (reply_id IS NULL)",
            name="ck_likes_one_target",
        ),
    )
    op.create_index("ix_likes_freet_id", "likes", ["freet_id"])
    op.create_index("ix_likes_reply_id", "likes", ["reply_id"])

    op.create_table(
        "reports",
        sa.Column("id", sa.Uuid(), nullable=False),
        _user_fk("reporter_id"),
        sa.Column(
            "freet_id",
            sa.Uuid(),
            sa.ForeignKey("freets.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "reply_id",
            sa.Uuid(),
            sa.ForeignKey("replies.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("date_created", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("reporter_id", "freet_id", name="uq_reports_reporter_freet"),
        sa.UniqueConstraint("reporter_id", "reply_id", name="uq_reports_reporter_reply"),
        sa.CheckConstraint(
            "(freet_id IS NULL) <> (reply_id IS NULL)",
            name="ck_reports_one_target",
        ),
    )
    op.create_index("ix_reports_freet_id", "reports", ["freet_id"])
    op.create_index("ix_reports_reply_id", "reports", ["reply_id"])

    op.create_table(
        "follows",
        sa.Column("id", sa.Uuid(), nullable=False),
        _user_fk("follower_id"),
        _user_fk("followee_id"),
        sa.Column("date_created", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("follower_id", "followee_id", name="uq_follows_pair"),
        sa.CheckConstraint("follower_id <> followee_id", name="ck_follows_not_self"),
    )
    op.create_index("ix_follows_follower_id", "follows", ["follower_id"])
    op.create_index("ix_follows_followee_id", "follows", ["followee_id"])


def downgrade() -> None:
    op.drop_table("follows")
    op.drop_table("reports")
    op.drop_table("likes")
    op.drop_table("replies")
    op.drop_table("freets")
    op.drop_table("circle_members")
    op.drop_table("circles")
    op.drop_table("users")
