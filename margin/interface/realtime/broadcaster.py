"""WebSocket room broadcaster.

Each page is a room. Sockets join a room by sending ``join-page`` and then
receive every notification published for that page. Messages are JSON
envelopes ``{"event": ..., "data": {...}}``.
"""

import asyncio
from collections import defaultdict
from typing import Any

import logfire
from fastapi import WebSocket

from margin.application.usecase.comment import CommentItem
from margin.domain.model import Comment
from margin.domain.service import CommentNotifier, PageEvent, PageNotification
from margin.domain.value import PageId


def envelope(event: PageEvent, data: dict[str, Any]) -> dict[str, Any]:
    return {"event": event.value, "data": data}


def comment_payload(comment: Comment) -> dict[str, Any]:
    return CommentItem.from_comment(comment).model_dump(mode="json", by_alias=True)


def notification_payload(notification: PageNotification) -> dict[str, Any]:
    """Render a notification as the data part of an envelope."""
    if notification.comment is not None:
        return comment_payload(notification.comment)

    data: dict[str, Any] = {"pageId": notification.page_id}
    if notification.comment_id is not None:
        data["commentId"] = str(notification.comment_id)
    if notification.votes is not None:
        data["votes"] = notification.votes
    return data


class PageRoomBroadcaster(CommentNotifier):
    """Fan-out of page notifications to connected WebSockets."""

    def __init__(self) -> None:
        self._rooms: dict[PageId, set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def join(self, page_id: PageId, websocket: WebSocket) -> None:
        """Subscribe a socket to a page room."""
        async with self._lock:
            self._rooms[page_id].add(websocket)
        logfire.info("Socket joined page room", page_id=page_id)

    async def leave_all(self, websocket: WebSocket) -> None:
        """Remove a socket from every room it joined."""
        async with self._lock:
            for page_id in list(self._rooms):
                self._rooms[page_id].discard(websocket)
                if not self._rooms[page_id]:
                    del self._rooms[page_id]

    def subscribers(self, page_id: PageId) -> int:
        room = self._rooms.get(page_id)
        return len(room) if room else 0

    async def publish(self, notification: PageNotification) -> None:
        """Send a notification to every socket in the page room.

        Sockets that fail to receive are dropped from all rooms.
        """
        async with self._lock:
            sockets = list(self._rooms.get(notification.page_id, ()))
        if not sockets:
            return

        message = envelope(notification.event, notification_payload(notification))
        stale = []
        for websocket in sockets:
            try:
                await websocket.send_json(message)
            except Exception as e:
                logfire.warn(
                    "Dropping socket after failed send",
                    page_id=notification.page_id,
                    event_name=notification.event.value,
                    error=str(e),
                )
                stale.append(websocket)

        for websocket in stale:
            await self.leave_all(websocket)

        logfire.debug(
            "Notification broadcast",
            page_id=notification.page_id,
            event_name=notification.event.value,
            recipients=len(sockets) - len(stale),
        )

    async def send_to(
        self, websocket: WebSocket, event: PageEvent, data: dict[str, Any]
    ) -> None:
        """Send an envelope to a single socket."""
        await websocket.send_json(envelope(event, data))
