"""Domain services."""

from .base import Service
from .comment_service import CommentService, DeleteOutcome
from .migration_service import LEGACY_MESSAGES_MIGRATION_ID, MigrationService
from .notifier import CommentNotifier, PageEvent, PageNotification
from .page_auth_service import PageAuthService
from .token_service import PageTokenService

__all__ = [
    "CommentNotifier",
    "CommentService",
    "DeleteOutcome",
    "LEGACY_MESSAGES_MIGRATION_ID",
    "MigrationService",
    "PageAuthService",
    "PageEvent",
    "PageNotification",
    "PageTokenService",
    "Service",
]
