"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire
import pytest

from margin.domain.model import Comment
from margin.domain.value import CommentId, PageId

# Keep telemetry local: nothing is exported and nothing printed
logfire.configure(send_to_logfire=False, console=False)


def make_comment(
    page_id: str = "essay",
    content: str = "A comment",
    username: str = "Reader",
    parent: Comment | None = None,
    timestamp: datetime | None = None,
    **overrides,
) -> Comment:
    """Helper to build a comment, threaded under ``parent`` when given.

    The parent's counters are not touched; use the service for that.
    """
    timestamp = timestamp or datetime.now(timezone.utc)
    fields = dict(
        id=CommentId(uuid4()),
        page_id=PageId(page_id),
        username=username,
        content=content,
        timestamp=timestamp,
        last_subthread_activity=timestamp,
        parent_comment_id=parent.id if parent else None,
        top_level_comment_id=parent.thread_root_id if parent else None,
    )
    fields.update(overrides)
    return Comment(**fields)


class FakeClock:
    """Controllable clock for services that take a ``clock`` callable."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
