"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from margin.config import Settings
from margin.domain.repository import (
    CommentRepository,
    DataMigrationRepository,
    LegacyMessageRepository,
    ProtectedPageRepository,
)
from margin.persistence.database import create_engine, create_session_factory
from margin.persistence.repository import (
    PostgresCommentRepository,
    PostgresDataMigrationRepository,
    PostgresLegacyMessageRepository,
    PostgresProtectedPageRepository,
)
from margin.util.di.base import ProviderBase
from margin.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Repositories commit after each write. Anything left uncommitted when
        the request fails is rolled back.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_protected_page_repository(
        self, session: AsyncSession
    ) -> ProtectedPageRepository:
        """Provide ProtectedPage repository."""
        return PostgresProtectedPageRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_legacy_message_repository(
        self, session: AsyncSession
    ) -> LegacyMessageRepository:
        """Provide LegacyMessage repository."""
        return PostgresLegacyMessageRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_data_migration_repository(
        self, session: AsyncSession
    ) -> DataMigrationRepository:
        """Provide DataMigration repository."""
        return PostgresDataMigrationRepository(session)
