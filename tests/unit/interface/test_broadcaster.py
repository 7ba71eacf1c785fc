"""Unit tests for the WebSocket room broadcaster."""

from uuid import uuid4

import pytest

from margin.domain.service import PageEvent, PageNotification
from margin.interface.realtime.broadcaster import (
    PageRoomBroadcaster,
    notification_payload,
)
from tests.conftest import make_comment


class FakeSocket:
    """Collects JSON messages; optionally fails on send."""

    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    async def send_json(self, data):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)


class TestNotificationPayload:
    """Tests for envelope data rendering."""

    def test_comment_notification_renders_camel_case_comment(self):
        comment = make_comment(content="Hello")
        notification = PageNotification(
            page_id="essay", event=PageEvent.NEW_MESSAGE, comment=comment
        )

        data = notification_payload(notification)

        assert data["id"] == str(comment.id)
        assert data["pageId"] == "essay"
        assert data["content"] == "Hello"
        assert "topLevelCommentId" in data

    def test_vote_notification_renders_ids_and_votes(self):
        comment_id = uuid4()
        notification = PageNotification(
            page_id="essay",
            event=PageEvent.VOTE_UPDATED,
            comment_id=comment_id,
            votes=3,
        )

        assert notification_payload(notification) == {
            "pageId": "essay",
            "commentId": str(comment_id),
            "votes": 3,
        }


class TestPageRoomBroadcaster:
    """Tests for room membership and fan-out."""

    @pytest.mark.asyncio
    async def test_publish_reaches_only_the_page_room(self):
        broadcaster = PageRoomBroadcaster()
        reader, other = FakeSocket(), FakeSocket()
        await broadcaster.join("essay", reader)
        await broadcaster.join("other", other)

        await broadcaster.publish(
            PageNotification(
                page_id="essay",
                event=PageEvent.COMMENT_DELETED,
                comment_id=uuid4(),
            )
        )

        assert [m["event"] for m in reader.sent] == ["comment-deleted"]
        assert other.sent == []

    @pytest.mark.asyncio
    async def test_failed_socket_is_dropped(self):
        broadcaster = PageRoomBroadcaster()
        healthy, broken = FakeSocket(), FakeSocket(fail=True)
        await broadcaster.join("essay", healthy)
        await broadcaster.join("essay", broken)

        await broadcaster.publish(
            PageNotification(
                page_id="essay",
                event=PageEvent.VOTE_UPDATED,
                comment_id=uuid4(),
                votes=1,
            )
        )

        assert len(healthy.sent) == 1
        assert broadcaster.subscribers("essay") == 1

    @pytest.mark.asyncio
    async def test_leave_all_empties_rooms(self):
        broadcaster = PageRoomBroadcaster()
        socket = FakeSocket()
        await broadcaster.join("essay", socket)
        await broadcaster.join("other", socket)

        await broadcaster.leave_all(socket)

        assert broadcaster.subscribers("essay") == 0
        assert broadcaster.subscribers("other") == 0

    @pytest.mark.asyncio
    async def test_send_to_wraps_in_envelope(self):
        broadcaster = PageRoomBroadcaster()
        socket = FakeSocket()

        await broadcaster.send_to(
            socket, PageEvent.COMMENT_ERROR, {"message": "Invalid vote type"}
        )

        assert socket.sent == [
            {"event": "comment-error", "data": {"message": "Invalid vote type"}}
        ]
