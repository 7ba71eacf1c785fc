"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from margin.domain.model import Comment, DataMigration, LegacyMessage, ProtectedPage
from margin.domain.value import CommentId, LegacyMessageId, PageId


def _uuid(value: Any) -> Optional[UUID]:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_comment_id = _uuid(row.get("parent_comment_id"))
    top_level_comment_id = _uuid(row.get("top_level_comment_id"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        page_id=PageId(row["page_id"]),
        username=row["username"],
        content=row["content"],
        timestamp=row["timestamp"],
        edited_at=row.get("edited_at"),
        votes=row["votes"],
        parent_comment_id=CommentId(parent_comment_id) if parent_comment_id else None,
        top_level_comment_id=(
            CommentId(top_level_comment_id) if top_level_comment_id else None
        ),
        descendant_count=row["descendant_count"],
        direct_children_count=row["direct_children_count"],
        last_subthread_activity=row["last_subthread_activity"],
        deleted_at=row.get("deleted_at"),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return comment.model_dump()


def row_to_protected_page(row: Dict[str, Any]) -> ProtectedPage:
    """Convert database row to ProtectedPage domain model."""
    return ProtectedPage(
        page_id=PageId(row["page_id"]),
        page_name=row["page_name"],
        password_hash=row["password_hash"],
        salt=row.get("salt"),
    )


def protected_page_to_dict(page: ProtectedPage) -> Dict[str, Any]:
    """Convert ProtectedPage domain model to database dict."""
    return page.model_dump()


def row_to_legacy_message(row: Dict[str, Any]) -> LegacyMessage:
    """Convert database row to LegacyMessage domain model.

    Legacy rows were written without validation, so missing text columns
    become empty strings and are filtered by the migration.
    """
    return LegacyMessage(
        id=LegacyMessageId(_uuid(row["id"])),
        username=row.get("username") or "",
        content=row.get("content") or "",
        page_id=PageId(row.get("page_id") or ""),
        timestamp=row["timestamp"],
    )


def row_to_data_migration(row: Dict[str, Any]) -> DataMigration:
    """Convert database row to DataMigration domain model."""
    return DataMigration(
        id=row["id"],
        applied_at=row["applied_at"],
        details=row.get("details") or {},
    )


def data_migration_to_dict(migration: DataMigration) -> Dict[str, Any]:
    """Convert DataMigration domain model to database dict."""
    return migration.model_dump()
