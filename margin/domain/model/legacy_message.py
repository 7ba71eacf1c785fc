"""Legacy flat chat message (pre-threading)."""

from datetime import datetime

from margin.domain.model.common import DomainModel
from margin.domain.value import LegacyMessageId, PageId


class LegacyMessage(DomainModel):
    """Message from the original flat chat, with no threading fields."""

    id: LegacyMessageId
    username: str
    content: str
    page_id: PageId
    timestamp: datetime
