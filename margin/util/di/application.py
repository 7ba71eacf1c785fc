"""Application layer DI providers."""

from dishka import Scope, provide

from margin.application.usecase.auth import (
    CheckPageAccessUseCase,
    IssueChallengeUseCase,
    VerifyPasswordUseCase,
)
from margin.application.usecase.comment import (
    DeleteCommentUseCase,
    EditCommentUseCase,
    GetActiveThreadsUseCase,
    GetCommentsUseCase,
    GetThreadUseCase,
    PostCommentUseCase,
    VoteCommentUseCase,
)
from margin.application.usecase.migration import MigrateLegacyMessagesUseCase
from margin.application.usecase.page import ProvisionPagesUseCase
from margin.domain.service import CommentService, MigrationService, PageAuthService
from margin.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_comments_use_case(
        self, comment_service: CommentService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_post_comment_use_case(
        self, comment_service: CommentService
    ) -> PostCommentUseCase:
        """Provide post comment use case."""
        return PostCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_vote_comment_use_case(
        self, comment_service: CommentService
    ) -> VoteCommentUseCase:
        """Provide vote use case."""
        return VoteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_edit_comment_use_case(
        self, comment_service: CommentService
    ) -> EditCommentUseCase:
        """Provide edit comment use case."""
        return EditCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_thread_use_case(self, comment_service: CommentService) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_active_threads_use_case(
        self, comment_service: CommentService
    ) -> GetActiveThreadsUseCase:
        """Provide active threads use case."""
        return GetActiveThreadsUseCase(comment_service=comment_service)

    # Page password use cases
    @provide(scope=Scope.REQUEST)
    def get_issue_challenge_use_case(
        self, page_auth_service: PageAuthService
    ) -> IssueChallengeUseCase:
        """Provide issue challenge use case."""
        return IssueChallengeUseCase(page_auth_service=page_auth_service)

    @provide(scope=Scope.REQUEST)
    def get_verify_password_use_case(
        self, page_auth_service: PageAuthService
    ) -> VerifyPasswordUseCase:
        """Provide verify password use case."""
        return VerifyPasswordUseCase(page_auth_service=page_auth_service)

    @provide(scope=Scope.REQUEST)
    def get_check_page_access_use_case(
        self, page_auth_service: PageAuthService
    ) -> CheckPageAccessUseCase:
        """Provide check page access use case."""
        return CheckPageAccessUseCase(page_auth_service=page_auth_service)

    @provide(scope=Scope.REQUEST)
    def get_provision_pages_use_case(
        self, page_auth_service: PageAuthService
    ) -> ProvisionPagesUseCase:
        """Provide page provisioning use case."""
        return ProvisionPagesUseCase(page_auth_service=page_auth_service)

    # Data migration use cases
    @provide(scope=Scope.REQUEST)
    def get_migrate_legacy_messages_use_case(
        self, migration_service: MigrationService
    ) -> MigrateLegacyMessagesUseCase:
        """Provide legacy message migration use case."""
        return MigrateLegacyMessagesUseCase(migration_service=migration_service)
