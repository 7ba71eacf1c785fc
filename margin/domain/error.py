"""Domain layer errors.

Each error maps to a client-facing status class in the interface layer:
ValidationError -> 400, UnauthorizedError -> 401, NotFoundError -> 404,
ContentDeletedError -> 409, StorageError -> 503/500, InternalError -> 500.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Missing or empty required fields."""

    pass


class InvalidInputError(ValidationError):
    """User supplied input failed normalization (e.g. blank comment content)."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UnauthorizedError(DomainError):
    """Bad, expired or reused challenge, password mismatch or invalid token."""

    pass


class ContentDeletedError(DomainError):
    """Raised when attempting to edit deleted content."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"Cannot edit deleted {resource} {resource_id}")


class StorageError(DomainError):
    """Underlying persistence failure.

    Attributes:
        retryable: True when the failure was transient (timeout, lost
            connection) and the caller may safely retry.
    """

    def __init__(self, message: str, retryable: bool = False):
        self.retryable = retryable
        super().__init__(message)


class InternalError(DomainError):
    """Unexpected failure."""

    pass
