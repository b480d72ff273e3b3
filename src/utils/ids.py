"""Random identifier generation for new users."""

import secrets
import string

# 64 URL-safe symbols, 6 bits each: 21 characters give 126 bits of entropy
ID_ALPHABET = string.ascii_letters + string.digits + '_-'
ID_SIZE = 21


def generate_id(size: int = ID_SIZE) -> str:
    """Return a URL-safe random identifier.

    Raises:
        ValueError: size is not positive.
        OSError: the operating system entropy source is unavailable.
    """
    if size <= 0:
        raise ValueError("size must be positive")
    return ''.join(secrets.choice(ID_ALPHABET) for _ in range(size))
