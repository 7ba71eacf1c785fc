"""In-memory legacy message repository for testing."""

from margin.domain.model.legacy_message import LegacyMessage
from margin.domain.repository.legacy_message import LegacyMessageRepository


class InMemoryLegacyMessageRepository(LegacyMessageRepository):
    """In-memory implementation of LegacyMessageRepository for testing."""

    def __init__(self, messages: list[LegacyMessage] | None = None) -> None:
        self._messages: list[LegacyMessage] = list(messages or [])

    def add(self, message: LegacyMessage) -> None:
        """Seed a legacy message."""
        self._messages.append(message)

    async def find_all(self) -> list[LegacyMessage]:
        """Return every legacy message, oldest first."""
        return sorted(self._messages, key=lambda m: m.timestamp)
