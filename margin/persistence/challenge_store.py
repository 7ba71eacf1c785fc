"""Process-wide store for password challenges."""

import asyncio
from datetime import datetime
from typing import Optional

from margin.domain.model.challenge import Challenge
from margin.domain.repository.challenge import ChallengeStore
from margin.domain.value import PageId


class InMemoryChallengeStore(ChallengeStore):
    """Challenge store held in process memory.

    Challenges are short-lived and never persisted. A single instance is
    shared by every request, and all access goes through one lock so that
    ``take`` hands a challenge to exactly one caller.
    """

    def __init__(self) -> None:
        self._challenges: dict[tuple[str, str], Challenge] = {}
        self._lock = asyncio.Lock()

    async def put(self, challenge: Challenge) -> None:
        async with self._lock:
            self._challenges[challenge.key] = challenge

    async def get(self, page_id: PageId, value: str) -> Optional[Challenge]:
        async with self._lock:
            return self._challenges.get((page_id, value))

    async def take(self, page_id: PageId, value: str) -> Optional[Challenge]:
        async with self._lock:
            return self._challenges.pop((page_id, value), None)

    async def discard(self, page_id: PageId, value: str) -> None:
        async with self._lock:
            self._challenges.pop((page_id, value), None)

    async def sweep(self, now: datetime) -> int:
        async with self._lock:
            expired = [
                key
                for key, challenge in self._challenges.items()
                if challenge.is_expired(now)
            ]
            for key in expired:
                del self._challenges[key]
            return len(expired)

    def __len__(self) -> int:
        return len(self._challenges)
