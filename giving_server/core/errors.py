"""Error hierarchy shared by the store, the domain services and the HTTP layer.

Every error carries the HTTP status it maps to. ``ServerError`` keeps its
detailed message for logs but only exposes a generic message to callers.
"""

from __future__ import annotations

SERVER_ERROR_MESSAGE = "A server error occurred"


class GivingError(Exception):
    """Base class for all handled errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        return self.message

    def to_response(self) -> dict:
        return {"message": self.public_message}


class ValidationError(GivingError):
    """Malformed or missing input, or a field rejected by the store."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class RequestError(ValidationError):
    """The request shape itself is unusable (e.g. no donation target)."""


class AuthError(GivingError):
    """Missing, invalid or expired credentials, or insufficient role."""

    status_code = 401


class ConflictError(GivingError):
    """The request is well formed but conflicts with current domain state."""

    status_code = 409


class NotFoundError(ConflictError):
    def __init__(self, object_type: str, guid: str | None = None) -> None:
        super().__init__(f"{object_type.capitalize()} not found")
        self.object_type = object_type
        self.guid = guid


class InsufficientFundsError(ConflictError):
    def __init__(self, balance: int, amount: int) -> None:
        super().__init__("Insufficient funds")
        self.balance = balance
        self.amount = amount


class ServerError(GivingError):
    """Store failures and unexpected conditions. Never leaks details."""

    status_code = 500

    @property
    def public_message(self) -> str:
        return SERVER_ERROR_MESSAGE


class FanOutError(ServerError):
    """A donation backlink could not be appended after the donation committed."""

    def __init__(self, donation_guid: str, entity_type: str, entity_guid: str) -> None:
        super().__init__(
            f"Failed to append donation {donation_guid} to {entity_type} {entity_guid}"
        )
        self.donation_guid = donation_guid
        self.entity_type = entity_type
        self.entity_guid = entity_guid


__all__ = [
    "SERVER_ERROR_MESSAGE",
    "GivingError",
    "ValidationError",
    "RequestError",
    "AuthError",
    "ConflictError",
    "NotFoundError",
    "InsufficientFundsError",
    "ServerError",
    "FanOutError",
]
