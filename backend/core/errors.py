"""Domain errors raised by services and mapped to HTTP status codes by routes."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for business-rule failures. Maps to HTTP 400."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Referenced entity does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: object = None) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class AuthenticationError(DomainError):
    status_code = 401


class InsufficientBalanceError(DomainError):
    def __init__(self, message: str = "Insufficient balance") -> None:
        super().__init__(message)


class CapacityError(DomainError):
    """Tournament or team has no free slot."""


class DuplicateError(DomainError):
    """Unique row (membership, participation, email...) already exists."""


class InvalidStateError(DomainError):
    """Operation not allowed in the entity's current state."""


class BatchEntryError(DomainError):
    """One entry of a batch failed; the whole batch was rolled back."""

    def __init__(self, index: int, cause: DomainError) -> None:
        super().__init__(f"Entry {index}: {cause.message}")
        self.index = index
        self.cause = cause
        self.status_code = cause.status_code
