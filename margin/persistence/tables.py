"""SQLAlchemy table definitions for margin.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("page_id", String(255), nullable=False),
    Column("username", String(255), nullable=False),
    Column("content", Text, nullable=False),
    Column("timestamp", TIMESTAMP(timezone=True), nullable=False),
    Column("edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("votes", Integer, nullable=False, server_default="0"),
    # No FK on the thread columns: a removed leaf must not cascade, and the
    # service guarantees parents exist at creation time
    Column("parent_comment_id", UUID(as_uuid=True), nullable=True),
    Column("top_level_comment_id", UUID(as_uuid=True), nullable=True),
    Column("descendant_count", Integer, nullable=False, server_default="0"),
    Column("direct_children_count", Integer, nullable=False, server_default="0"),
    Column("last_subthread_activity", TIMESTAMP(timezone=True), nullable=False),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("descendant_count >= 0", name="descendant_count_non_negative"),
    CheckConstraint(
        "direct_children_count >= 0", name="direct_children_count_non_negative"
    ),
    CheckConstraint(
        "(parent_comment_id IS NULL) = (top_level_comment_id IS NULL)",
        name="thread_root_iff_parent",
    ),
)

Index("idx_comments_page_timestamp", comments_table.c.page_id, comments_table.c.timestamp)
Index(
    "idx_comments_page_parent",
    comments_table.c.page_id,
    comments_table.c.parent_comment_id,
)
Index(
    "idx_comments_page_top_level",
    comments_table.c.page_id,
    comments_table.c.top_level_comment_id,
)
Index(
    "idx_comments_page_activity",
    comments_table.c.page_id,
    comments_table.c.last_subthread_activity.desc(),
)
Index(
    "idx_comments_legacy_match",
    comments_table.c.username,
    comments_table.c.timestamp,
)

# ============================================================================
# PROTECTED PAGES TABLE
# ============================================================================
protected_pages_table = Table(
    "protected_pages",
    metadata,
    Column("page_id", String(255), primary_key=True),
    Column("page_name", String(255), nullable=False),
    Column("password_hash", String(128), nullable=False),
    Column("salt", String(64), nullable=True),  # NULL for pages predating salts
)

# ============================================================================
# LEGACY MESSAGES TABLE (read-only, pre-threading chat)
# ============================================================================
legacy_messages_table = Table(
    "messages",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("username", String(255), nullable=True),
    Column("content", Text, nullable=True),
    Column("page_id", String(255), nullable=True),
    Column("timestamp", TIMESTAMP(timezone=True), nullable=False),
)

Index("idx_messages_page_id", legacy_messages_table.c.page_id)

# ============================================================================
# DATA MIGRATIONS TABLE (ledger of one-time data migrations)
# ============================================================================
data_migrations_table = Table(
    "data_migrations",
    metadata,
    Column("id", String(255), primary_key=True),
    Column("applied_at", TIMESTAMP(timezone=True), nullable=False),
    Column("details", JSONB, nullable=False, server_default="{}"),
)
