"""Unit tests for the background challenge sweeper."""

import asyncio
import contextlib

import pytest

from margin.domain.error import StorageError
from margin.interface.api.app import sweep_challenges
from margin.persistence.challenge_store import InMemoryChallengeStore


class FlakyStore(InMemoryChallengeStore):
    """Fails the first sweep, then signals once a later sweep succeeds."""

    def __init__(self):
        super().__init__()
        self.calls = 0
        self.recovered = asyncio.Event()

    async def sweep(self, now):
        self.calls += 1
        if self.calls == 1:
            raise StorageError("store unavailable")
        self.recovered.set()
        return await super().sweep(now)


class TestChallengeSweeper:
    """Tests for sweep_challenges."""

    @pytest.mark.asyncio
    async def test_keeps_sweeping_after_a_failed_pass(self):
        store = FlakyStore()
        sweeper = asyncio.create_task(sweep_challenges(store, interval_seconds=0))

        try:
            await asyncio.wait_for(store.recovered.wait(), timeout=1)
        finally:
            sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweeper

        assert store.calls >= 2
