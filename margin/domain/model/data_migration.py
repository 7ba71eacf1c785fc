"""Ledger entry for a one-time data migration."""

from datetime import datetime
from typing import Any

from pydantic import Field

from margin.domain.model.common import DomainModel


class DataMigration(DomainModel):
    """Records that a versioned data migration has been applied."""

    id: str
    applied_at: datetime
    details: dict[str, Any] = Field(default_factory=dict)
