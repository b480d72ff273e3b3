"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ValidationReason(str, Enum):
    """Reason a single input field was rejected."""
    REQUIRED = 'required'
    TOO_SHORT = 'too_short'
    TOO_LONG = 'too_long'
    INVALID_FORMAT = 'invalid_format'
    IN_FUTURE = 'in_future'
    BELOW_MIN_AGE = 'below_min_age'
    CONFIRMATION_MISMATCH = 'confirmation_mismatch'


@dataclass(frozen=True)
class FieldError:
    """One rejected field with a human-readable message."""
    field: str
    reason: ValidationReason
    message: str


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates one or more field validation rules."""

    def __init__(self, errors: list[FieldError]):
        if not errors:
            raise ValueError("ValidationError requires at least one field error")
        self.errors = list(errors)
        super().__init__("; ".join(e.message for e in self.errors))

    @property
    def field(self) -> str:
        return self.errors[0].field

    @property
    def reason(self) -> ValidationReason:
        return self.errors[0].reason

    def reasons(self) -> dict[str, ValidationReason]:
        """Map each rejected field to its reason."""
        return {e.field: e.reason for e in self.errors}


class UnauthorizedError(DomainError):
    """Bad credentials or unknown account (deliberately indistinguishable)."""

    def __init__(self):
        super().__init__("unauthorized")


class AuthenticationError(DomainError):
    """Bearer token was rejected."""


class TokenInvalidError(AuthenticationError):
    """Token is malformed, forged, uses the wrong algorithm or names an unknown user."""

    def __init__(self):
        super().__init__("invalid authentication")


class TokenExpiredError(AuthenticationError):
    """Token is authentic but past its validity window."""

    def __init__(self):
        super().__init__("token expired")


class InternalError(DomainError):
    """Failure not attributable to caller input."""

    def __init__(self):
        super().__init__("an internal error has happened")


class RepositoryError(DomainError):
    """User store failed or timed out."""
