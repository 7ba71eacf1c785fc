"""PostgreSQL implementation of the data migration ledger."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from margin.domain.model import DataMigration
from margin.domain.repository import DataMigrationRepository
from margin.persistence.error import storage_operation
from margin.persistence.mappers import data_migration_to_dict, row_to_data_migration
from margin.persistence.tables import data_migrations_table


class PostgresDataMigrationRepository(DataMigrationRepository):
    """PostgreSQL implementation of DataMigrationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @storage_operation("data_migrations.find")
    async def find(self, migration_id: str) -> Optional[DataMigration]:
        """Return the ledger entry for a migration, if applied."""
        stmt = select(data_migrations_table).where(
            data_migrations_table.c.id == migration_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_data_migration(row._asdict()) if row else None

    @storage_operation("data_migrations.record")
    async def record(self, migration: DataMigration) -> DataMigration:
        """Record (or overwrite) a ledger entry."""
        stmt = insert(data_migrations_table).values(**data_migration_to_dict(migration))
        stmt = stmt.on_conflict_do_update(
            index_elements=[data_migrations_table.c.id],
            set_={
                "applied_at": stmt.excluded.applied_at,
                "details": stmt.excluded.details,
            },
        )
        await self.session.execute(stmt)
        await self.session.commit()
        return migration
