"""Data migration use cases."""

from .migrate_legacy_messages import (
    MigrateLegacyMessagesRequest,
    MigrateLegacyMessagesResponse,
    MigrateLegacyMessagesUseCase,
)

__all__ = [
    "MigrateLegacyMessagesRequest",
    "MigrateLegacyMessagesResponse",
    "MigrateLegacyMessagesUseCase",
]
