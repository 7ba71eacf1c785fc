"""Data migration ledger interface."""

from abc import ABC, abstractmethod
from typing import Optional

from margin.domain.model.data_migration import DataMigration


class DataMigrationRepository(ABC):
    """Ledger of applied one-time data migrations."""

    @abstractmethod
    async def find(self, migration_id: str) -> Optional[DataMigration]:
        """Return the ledger entry for a migration, if applied."""
        pass

    @abstractmethod
    async def record(self, migration: DataMigration) -> DataMigration:
        """Record (or overwrite) a ledger entry."""
        pass
