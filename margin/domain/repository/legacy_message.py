"""Legacy message repository interface."""

from abc import ABC, abstractmethod
from typing import List

from margin.domain.model.legacy_message import LegacyMessage


class LegacyMessageRepository(ABC):
    """Read access to the pre-threading flat message store."""

    @abstractmethod
    async def find_all(self) -> List[LegacyMessage]:
        """Return every legacy message, oldest first."""
        pass
