"""Protected page use cases."""

from .provision_pages import (
    ProvisionPagesRequest,
    ProvisionPagesResponse,
    ProvisionPagesUseCase,
)

__all__ = [
    "ProvisionPagesRequest",
    "ProvisionPagesResponse",
    "ProvisionPagesUseCase",
]
