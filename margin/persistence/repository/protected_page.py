"""PostgreSQL implementation of ProtectedPage repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from margin.domain.model import ProtectedPage
from margin.domain.repository import ProtectedPageRepository
from margin.domain.value import PageId
from margin.persistence.error import storage_operation
from margin.persistence.mappers import protected_page_to_dict, row_to_protected_page
from margin.persistence.tables import protected_pages_table


class PostgresProtectedPageRepository(ProtectedPageRepository):
    """PostgreSQL implementation of ProtectedPageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @storage_operation("protected_pages.find_by_page_id")
    async def find_by_page_id(self, page_id: PageId) -> Optional[ProtectedPage]:
        """Find a protected page by its page ID."""
        stmt = select(protected_pages_table).where(
            protected_pages_table.c.page_id == page_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_protected_page(row._asdict()) if row else None

    @storage_operation("protected_pages.save")
    async def save(self, page: ProtectedPage) -> ProtectedPage:
        """Create or replace a protected page."""
        values = protected_page_to_dict(page)
        stmt = insert(protected_pages_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[protected_pages_table.c.page_id],
            set_={
                "page_name": stmt.excluded.page_name,
                "password_hash": stmt.excluded.password_hash,
                "salt": stmt.excluded.salt,
            },
        )
        await self.session.execute(stmt)
        await self.session.commit()
        return page
