"""Infrastructure providers."""

# Import bases
from .challenge import ChallengeStoreProvider
from .persistence import PersistenceProvider
from .realtime import RealtimeProvider

# Import implementations (needed for __subclasses__())
from .persistence import ProdPersistenceProvider  # noqa: F401
from .realtime import ProdRealtimeProvider  # noqa: F401

__all__ = [
    "ChallengeStoreProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdRealtimeProvider",
    "RealtimeProvider",
]
