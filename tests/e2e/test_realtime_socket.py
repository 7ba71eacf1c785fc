"""End-to-end tests for the WebSocket channel."""

import pytest
from fastapi.testclient import TestClient

from margin.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with live broadcasting and in-memory storage."""
    app = create_app(build_test_container(unmock={"realtime"}))
    with TestClient(app) as test_client:
        yield test_client


def join(websocket, page_id="essay"):
    websocket.send_json({"event": "join-page", "data": {"pageId": page_id}})
    return websocket.receive_json()


class TestRealtimeSocket:
    """End-to-end tests for join, broadcast and error events."""

    def test_join_page_receives_existing_comments(self, client):
        client.post("/api/messages", json={"pageId": "essay", "content": "Hi"})

        with client.websocket_connect("/ws") as websocket:
            message = join(websocket)

        assert message["event"] == "init-messages"
        assert message["data"]["pageId"] == "essay"
        assert message["data"]["total"] == 1
        assert message["data"]["comments"][0]["content"] == "Hi"

    def test_send_message_is_broadcast_to_room(self, client):
        with client.websocket_connect("/ws") as sender:
            join(sender)
            with client.websocket_connect("/ws") as listener:
                join(listener)

                sender.send_json(
                    {
                        "event": "send-message",
                        "data": {"pageId": "essay", "content": "Live"},
                    }
                )

                for websocket in (sender, listener):
                    message = websocket.receive_json()
                    assert message["event"] == "new-message"
                    assert message["data"]["content"] == "Live"

    def test_http_writes_reach_joined_sockets(self, client):
        with client.websocket_connect("/ws") as websocket:
            join(websocket)

            comment = client.post(
                "/api/messages", json={"pageId": "essay", "content": "Via HTTP"}
            ).json()["comment"]
            client.post(
                "/api/votes", json={"commentId": comment["id"], "voteType": "upvote"}
            )

            created = websocket.receive_json()
            voted = websocket.receive_json()

        assert created["event"] == "new-message"
        assert voted == {
            "event": "vote-updated",
            "data": {"pageId": "essay", "commentId": comment["id"], "votes": 1},
        }

    def test_bad_command_reports_error_to_sender(self, client):
        with client.websocket_connect("/ws") as websocket:
            join(websocket)
            websocket.send_json(
                {"event": "vote", "data": {"commentId": "x", "voteType": "sideways"}}
            )

            message = websocket.receive_json()

        assert message == {
            "event": "comment-error",
            "data": {"message": "Invalid vote type: sideways"},
        }

    @pytest.mark.parametrize(
        "payload",
        ["not json", '{"data": {}}', '{"event": "dance", "data": {}}'],
    )
    def test_malformed_envelopes_report_errors(self, client, payload):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_text(payload)

            message = websocket.receive_json()

        assert message["event"] == "comment-error"
