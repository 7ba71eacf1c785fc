"""Realtime notification providers."""

from dishka import Scope, provide

from margin.domain.service import CommentNotifier
from margin.interface.realtime.broadcaster import PageRoomBroadcaster
from margin.util.di.base import ProviderBase


class RealtimeProvider(ProviderBase):
    """Realtime component base."""

    __mock_component__ = "realtime"


class ProdRealtimeProvider(RealtimeProvider):
    """Production realtime provider broadcasting over WebSocket rooms."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_broadcaster(self) -> PageRoomBroadcaster:
        """Provide the process-wide room registry."""
        return PageRoomBroadcaster()

    @provide(scope=Scope.APP)
    def get_notifier(self, broadcaster: PageRoomBroadcaster) -> CommentNotifier:
        """Publish comment events to page rooms."""
        return broadcaster
