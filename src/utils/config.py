"""Process-wide authentication settings.

Built once at startup and passed by argument into the password, token and
workflow services. Nothing here is mutated after construction.
"""

import os
from dataclasses import dataclass, field
from datetime import timedelta

SUPPORTED_ALGORITHMS = ('HS256', 'HS384', 'HS512')

DEFAULT_ALGORITHM = 'HS512'
DEFAULT_TOKEN_VALIDITY = timedelta(days=15)
DEFAULT_BCRYPT_ROUNDS = 12
DEFAULT_STORE_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class AuthConfig:
    """Signing key, token lifetime, hashing cost and store timeout."""
    jwt_secret_key: str = field(repr=False)
    jwt_algorithm: str = DEFAULT_ALGORITHM
    token_validity: timedelta = DEFAULT_TOKEN_VALIDITY
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS
    store_timeout_seconds: float = DEFAULT_STORE_TIMEOUT_SECONDS

    def __post_init__(self):
        if not self.jwt_secret_key:
            raise ValueError("jwt_secret_key must not be empty")
        if self.jwt_algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(
                f"Unsupported JWT algorithm {self.jwt_algorithm!r}; "
                f"expected one of {', '.join(SUPPORTED_ALGORITHMS)}"
            )
        if self.token_validity <= timedelta(0):
            raise ValueError("token_validity must be positive")
        if not 4 <= self.bcrypt_rounds <= 31:
            raise ValueError("bcrypt_rounds must be between 4 and 31")
        if self.store_timeout_seconds <= 0:
            raise ValueError("store_timeout_seconds must be positive")


def load_config() -> AuthConfig:
    """Build AuthConfig from environment variables.

    Raises:
        ValueError: JWT_SECRET_KEY is missing or a value is out of range.
    """
    secret = os.getenv("JWT_SECRET_KEY")
    if not secret:
        raise ValueError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 64"
        )

    validity_hours = os.getenv("TOKEN_VALIDITY_HOURS")
    return AuthConfig(
        jwt_secret_key=secret,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", DEFAULT_ALGORITHM),
        token_validity=(
            timedelta(hours=float(validity_hours)) if validity_hours else DEFAULT_TOKEN_VALIDITY
        ),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS)),
        store_timeout_seconds=float(os.getenv("STORE_TIMEOUT_SECONDS", DEFAULT_STORE_TIMEOUT_SECONDS)),
    )
