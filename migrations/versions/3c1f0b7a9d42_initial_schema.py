"""initial_schema

Create the schema for Margin:
- Comments (threaded, with denormalized reply counters and activity)
- Protected pages (salted password hashes)
- Data migrations (ledger of one-time data migrations)
- Messages (pre-threading chat; only created when missing)

Revision ID: 3c1f0b7a9d42
Revises:
Create Date: 2026-10-19 09:12:44.512301

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0b7a9d42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("page_id", sa.String(255), nullable=False),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("edited_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("votes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("parent_comment_id", sa.UUID(), nullable=True),
        sa.Column("top_level_comment_id", sa.UUID(), nullable=True),
        sa.Column("descendant_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "direct_children_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column(
            "last_subthread_activity", sa.TIMESTAMP(timezone=True), nullable=False
        ),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "descendant_count >= 0", name="descendant_count_non_negative"
        ),
        sa.CheckConstraint(
            "direct_children_count >= 0", name="direct_children_count_non_negative"
        ),
        sa.CheckConstraint(
            "(parent_comment_id IS NULL) = (top_level_comment_id IS NULL)",
            name="thread_root_iff_parent",
        ),
    )
    op.create_index("idx_comments_page_timestamp", "comments", ["page_id", "timestamp"])
    op.create_index(
        "idx_comments_page_parent", "comments", ["page_id", "parent_comment_id"]
    )
    op.create_index(
        "idx_comments_page_top_level", "comments", ["page_id", "top_level_comment_id"]
    )
    op.create_index(
        "idx_comments_page_activity",
        "comments",
        ["page_id", sa.text("last_subthread_activity DESC")],
    )
    op.create_index("idx_comments_legacy_match", "comments", ["username", "timestamp"])

    # ========================================================================
    # PROTECTED_PAGES table
    # ========================================================================
    op.create_table(
        "protected_pages",
        sa.Column("page_id", sa.String(255), nullable=False),
        sa.Column("page_name", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(128), nullable=False),
        sa.Column("salt", sa.String(64), nullable=True),
        sa.PrimaryKeyConstraint("page_id"),
    )

    # ========================================================================
    # DATA_MIGRATIONS table
    # ========================================================================
    op.create_table(
        "data_migrations",
        sa.Column("id", sa.String(255), nullable=False),
        sa.Column("applied_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "details",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # ========================================================================
    # MESSAGES table (legacy flat chat, kept as migration source)
    # ========================================================================
    if not sa.inspect(op.get_bind()).has_table("messages"):
        op.create_table(
            "messages",
            sa.Column("id", sa.UUID(), nullable=False),
            sa.Column("username", sa.String(255), nullable=True),
            sa.Column("content", sa.Text(), nullable=True),
            sa.Column("page_id", sa.String(255), nullable=True),
            sa.Column("timestamp", sa.TIMESTAMP(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("idx_messages_page_id", "messages", ["page_id"])


def downgrade() -> None:
    """Downgrade schema.

    The legacy messages table is left in place.
    """
    op.drop_table("data_migrations")
    op.drop_table("protected_pages")
    op.drop_index("idx_comments_legacy_match", table_name="comments")
    op.drop_index("idx_comments_page_activity", table_name="comments")
    op.drop_index("idx_comments_page_top_level", table_name="comments")
    op.drop_index("idx_comments_page_parent", table_name="comments")
    op.drop_index("idx_comments_page_timestamp", table_name="comments")
    op.drop_table("comments")
