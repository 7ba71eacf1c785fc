"""WebSocket channel for live page updates.

Clients send ``{"event": ..., "data": {...}}`` envelopes:

- ``join-page`` ``{pageId}``: subscribe and receive ``init-messages``
- ``send-message`` ``{pageId, username?, content, parentCommentId?}``
- ``vote`` ``{commentId, voteType}``
- ``delete-comment`` ``{commentId}``

Results of writes reach the room through the comment notifier once they are
stored. Failures are reported to the requesting socket only, as
``comment-error``.
"""

import json
from typing import Any

import logfire
from dishka import AsyncContainer
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from margin.application.usecase.comment import (
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsUseCase,
    PostCommentRequest,
    PostCommentUseCase,
    VoteCommentRequest,
    VoteCommentUseCase,
)
from margin.domain.error import DomainError, ValidationError
from margin.domain.service import PageEvent
from margin.domain.value import PageId
from margin.interface.error import INTERNAL_ERROR_MESSAGE, client_message
from margin.interface.realtime.broadcaster import PageRoomBroadcaster

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def page_socket(websocket: WebSocket) -> None:
    """Serve one client connection until it disconnects."""
    container: AsyncContainer = websocket.app.state.dishka_container
    broadcaster = await container.get(PageRoomBroadcaster)

    await websocket.accept()
    logfire.info("Socket connected")
    try:
        while True:
            raw = await websocket.receive_text()
            await _dispatch(raw, websocket, container, broadcaster)
    except WebSocketDisconnect:
        logfire.info("Socket disconnected")
    finally:
        await broadcaster.leave_all(websocket)


async def _dispatch(
    raw: str,
    websocket: WebSocket,
    container: AsyncContainer,
    broadcaster: PageRoomBroadcaster,
) -> None:
    event = None
    try:
        event, data = _parse_envelope(raw)
        async with container() as request_container:
            if event == "join-page":
                await _join_page(data, websocket, request_container, broadcaster)
            elif event == "send-message":
                use_case = await request_container.get(PostCommentUseCase)
                await use_case.execute(PostCommentRequest.model_validate(data))
            elif event == "vote":
                use_case = await request_container.get(VoteCommentUseCase)
                await use_case.execute(VoteCommentRequest.model_validate(data))
            elif event == "delete-comment":
                use_case = await request_container.get(DeleteCommentUseCase)
                await use_case.execute(DeleteCommentRequest.model_validate(data))
            else:
                raise ValidationError(f"Unknown event: {event}")
    except DomainError as e:
        logfire.warn(
            "Socket command failed",
            event_name=event,
            error_type=type(e).__name__,
            error=str(e),
        )
        await broadcaster.send_to(
            websocket, PageEvent.COMMENT_ERROR, {"message": client_message(e)}
        )
    except WebSocketDisconnect:
        raise
    except Exception:
        logfire.exception("Unhandled socket command error", event_name=event)
        await broadcaster.send_to(
            websocket, PageEvent.COMMENT_ERROR, {"message": INTERNAL_ERROR_MESSAGE}
        )


def _parse_envelope(raw: str) -> tuple[str, dict[str, Any]]:
    try:
        message = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError("Message is not valid JSON")

    if not isinstance(message, dict) or not isinstance(message.get("event"), str):
        raise ValidationError("Message must be an object with an event name")

    data = message.get("data") or {}
    if not isinstance(data, dict):
        raise ValidationError("Message data must be an object")
    # Request models only accept strings
    return message["event"], {
        key: value if value is None or isinstance(value, str) else str(value)
        for key, value in data.items()
    }


async def _join_page(
    data: dict[str, Any],
    websocket: WebSocket,
    request_container: AsyncContainer,
    broadcaster: PageRoomBroadcaster,
) -> None:
    page_id = (data.get("pageId") or "").strip()
    if not page_id:
        raise ValidationError("Missing pageId")

    await broadcaster.join(PageId(page_id), websocket)

    use_case = await request_container.get(GetCommentsUseCase)
    response = await use_case.execute(GetCommentsRequest(page_id=page_id))
    await broadcaster.send_to(
        websocket,
        PageEvent.INIT_MESSAGES,
        response.model_dump(mode="json", by_alias=True, exclude={"success"}),
    )
