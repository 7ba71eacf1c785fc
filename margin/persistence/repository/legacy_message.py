"""PostgreSQL implementation of LegacyMessage repository."""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from margin.domain.model import LegacyMessage
from margin.domain.repository import LegacyMessageRepository
from margin.persistence.error import storage_operation
from margin.persistence.mappers import row_to_legacy_message
from margin.persistence.tables import legacy_messages_table


class PostgresLegacyMessageRepository(LegacyMessageRepository):
    """Reads the pre-threading ``messages`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @storage_operation("messages.find_all")
    async def find_all(self) -> List[LegacyMessage]:
        """Return every legacy message, oldest first."""
        stmt = select(legacy_messages_table).order_by(legacy_messages_table.c.timestamp)
        result = await self.session.execute(stmt)
        return [row_to_legacy_message(row._asdict()) for row in result.fetchall()]
