"""In-memory data migration ledger for testing."""

from typing import Optional

from margin.domain.model.data_migration import DataMigration
from margin.domain.repository.data_migration import DataMigrationRepository


class InMemoryDataMigrationRepository(DataMigrationRepository):
    """In-memory implementation of DataMigrationRepository for testing."""

    def __init__(self) -> None:
        self._migrations: dict[str, DataMigration] = {}

    async def find(self, migration_id: str) -> Optional[DataMigration]:
        """Return the ledger entry for a migration, if applied."""
        return self._migrations.get(migration_id)

    async def record(self, migration: DataMigration) -> DataMigration:
        """Record (or overwrite) a ledger entry."""
        self._migrations[migration.id] = migration
        return migration
