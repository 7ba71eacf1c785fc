"""Domain layer DI providers."""

from dishka import Scope, provide

from margin.config import AuthSettings, CommentSettings
from margin.domain.repository import (
    ChallengeStore,
    CommentRepository,
    DataMigrationRepository,
    LegacyMessageRepository,
    ProtectedPageRepository,
)
from margin.domain.service import (
    CommentNotifier,
    CommentService,
    MigrationService,
    PageAuthService,
    PageTokenService,
)
from margin.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_token_service(self, auth_settings: AuthSettings) -> PageTokenService:
        """Provide access token domain service."""
        return PageTokenService(auth_settings=auth_settings)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        notifier: CommentNotifier,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            notifier=notifier,
            settings=comment_settings,
        )

    @provide
    def get_page_auth_service(
        self,
        page_repository: ProtectedPageRepository,
        challenge_store: ChallengeStore,
        token_service: PageTokenService,
        auth_settings: AuthSettings,
    ) -> PageAuthService:
        """Provide page password domain service."""
        return PageAuthService(
            page_repository=page_repository,
            challenge_store=challenge_store,
            token_service=token_service,
            auth_settings=auth_settings,
        )

    @provide
    def get_migration_service(
        self,
        legacy_message_repository: LegacyMessageRepository,
        comment_repository: CommentRepository,
        data_migration_repository: DataMigrationRepository,
    ) -> MigrationService:
        """Provide legacy migration domain service."""
        return MigrationService(
            legacy_message_repository=legacy_message_repository,
            comment_repository=comment_repository,
            data_migration_repository=data_migration_repository,
        )
