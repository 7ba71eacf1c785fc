"""Unit tests for InMemoryChallengeStore."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from margin.domain.model import Challenge
from margin.domain.value import PageId
from margin.persistence.challenge_store import InMemoryChallengeStore

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


def challenge(value: str, page_id: str = "dimanche", ttl: int = 300) -> Challenge:
    return Challenge(
        page_id=PageId(page_id),
        value=value,
        salt="salt",
        expires_at=NOW + timedelta(seconds=ttl),
    )


class TestInMemoryChallengeStore:
    """Tests for the process-wide challenge store."""

    @pytest.mark.asyncio
    async def test_take_removes_entry(self):
        store = InMemoryChallengeStore()
        await store.put(challenge("abc"))

        taken = await store.take(PageId("dimanche"), "abc")

        assert taken.value == "abc"
        assert await store.get(PageId("dimanche"), "abc") is None

    @pytest.mark.asyncio
    async def test_entries_are_keyed_by_page_and_value(self):
        store = InMemoryChallengeStore()
        await store.put(challenge("abc", page_id="one"))

        assert await store.get(PageId("two"), "abc") is None
        assert await store.get(PageId("one"), "abc") is not None

    @pytest.mark.asyncio
    async def test_concurrent_take_has_single_winner(self):
        store = InMemoryChallengeStore()
        await store.put(challenge("abc"))

        results = await asyncio.gather(
            *(store.take(PageId("dimanche"), "abc") for _ in range(10))
        )

        assert sum(r is not None for r in results) == 1

    @pytest.mark.asyncio
    async def test_sweep_removes_only_expired(self):
        store = InMemoryChallengeStore()
        await store.put(challenge("short", ttl=10))
        await store.put(challenge("long", ttl=600))

        removed = await store.sweep(NOW + timedelta(seconds=60))

        assert removed == 1
        assert len(store) == 1
        assert await store.get(PageId("dimanche"), "long") is not None

    @pytest.mark.asyncio
    async def test_discard_is_idempotent(self):
        store = InMemoryChallengeStore()

        await store.discard(PageId("dimanche"), "missing")

        assert len(store) == 0
