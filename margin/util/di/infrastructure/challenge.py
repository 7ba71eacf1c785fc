"""Challenge store provider."""

from dishka import Scope, provide

from margin.domain.repository import ChallengeStore
from margin.persistence.challenge_store import InMemoryChallengeStore
from margin.util.di.base import ProviderBase


class ChallengeStoreProvider(ProviderBase):
    """Process-wide challenge store - concrete, no mocks needed.

    APP scope: every request and the background sweeper share one store.
    """

    @provide(scope=Scope.APP)
    def get_challenge_store(self) -> ChallengeStore:
        """Provide the challenge store."""
        return InMemoryChallengeStore()
