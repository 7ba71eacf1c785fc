"""Protected page entity."""

from typing import Optional

from margin.domain.model.common import DomainModel
from margin.domain.value import PageId


class ProtectedPage(DomainModel):
    """A page gated behind a password.

    The password itself is never stored: password_hash is
    ``sha256_hex(salt + password)``. Pages provisioned before salts existed
    have ``salt = None`` and must be re-provisioned before they can be
    unlocked.
    """

    page_id: PageId
    page_name: str
    password_hash: str
    salt: Optional[str] = None

    @property
    def is_provisioned(self) -> bool:
        return bool(self.salt)
