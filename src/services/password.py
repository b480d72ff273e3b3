"""Password hashing and verification.

bcrypt with a random salt per hash and a configurable work factor.
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int) -> str:
    """Hash a password with bcrypt.

    Every call draws a new salt, so hashing the same password twice gives
    two different strings that both verify.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of a password against a bcrypt hash.

    Returns False for a malformed or empty hash instead of raising.
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode('utf-8'))
    except (ValueError, TypeError) as e:
        logger.warning("Stored password hash is malformed", extra={"error": str(e)})
        return False
