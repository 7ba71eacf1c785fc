"""Challenge store interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from margin.domain.model.challenge import Challenge
from margin.domain.value import PageId


class ChallengeStore(ABC):
    """Keyed store for ephemeral password challenges.

    Entries are keyed by ``(page_id, value)``. ``take`` must be atomic: when
    several callers race for the same key, exactly one receives the entry.
    """

    @abstractmethod
    async def put(self, challenge: Challenge) -> None:
        """Store a challenge."""
        pass

    @abstractmethod
    async def get(self, page_id: PageId, value: str) -> Optional[Challenge]:
        """Look up a challenge without consuming it."""
        pass

    @abstractmethod
    async def take(self, page_id: PageId, value: str) -> Optional[Challenge]:
        """Remove and return a challenge, None if another caller got it first."""
        pass

    @abstractmethod
    async def discard(self, page_id: PageId, value: str) -> None:
        """Remove a challenge if present."""
        pass

    @abstractmethod
    async def sweep(self, now: datetime) -> int:
        """Remove every challenge expired at ``now``.

        Returns:
            Number of entries removed
        """
        pass
