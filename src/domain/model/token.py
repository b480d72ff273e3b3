"""Bearer token domain models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TokenClaims:
    """Decoded, verified view of a bearer token (Value Object).

    Attributes:
        user_id: Identifier of the authenticated user.
        issued_at: When the token was issued (UTC), or None if the claim was absent.
        expires_at: When the token stops being accepted (UTC).
    """
    user_id: str
    issued_at: datetime | None
    expires_at: datetime
