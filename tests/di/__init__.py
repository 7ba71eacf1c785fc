"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .realtime import MockRealtimeProvider, RecordingNotifier
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockRealtimeProvider",
    "RecordingNotifier",
    "build_test_container",
]
