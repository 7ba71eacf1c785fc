"""Password challenge entity (ephemeral, never persisted)."""

from datetime import datetime

from margin.domain.model.common import DomainModel
from margin.domain.value import PageId


class Challenge(DomainModel):
    """One-time challenge issued for a protected page.

    Keyed by ``(page_id, value)``. Consumed on the first successful
    verification or unusable once ``expires_at`` has passed.
    """

    page_id: PageId
    value: str
    salt: str
    expires_at: datetime

    @property
    def key(self) -> tuple[str, str]:
        return (self.page_id, self.value)

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
