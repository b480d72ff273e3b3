"""User domain models."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import date, datetime

# A word starts the name, follows whitespace or a hyphen, or follows an
# apostrophe that has at least two letters after it (O'Neil, not Mcdonald's)
_NAME_WORD_START_RE = re.compile(r"(^|[\s-]|'(?=\w\w))(\w)")


def normalize_name(value: str) -> str:
    """Lowercase a personal name, then capitalize the start of each word.

    'JOE' -> 'Joe', "o'NEIL" -> "O'Neil", "mcdonald's" -> "Mcdonald's",
    '2pac' -> '2pac'.
    """
    return _NAME_WORD_START_RE.sub(lambda m: m.group(1) + m.group(2).upper(), value.lower())


def normalize_email(value: str) -> str:
    return value.lower()


@dataclass(frozen=True)
class PublicUser:
    """User view safe to return to callers (no password hash)."""
    id: str
    first_name: str
    last_name: str
    email: str
    birth_date: date
    created_at: datetime


@dataclass(frozen=True)
class User:
    """Domain model representing a registered user (Entity).

    Immutable once created; the only way it changes is deletion.
    """
    id: str
    first_name: str
    last_name: str
    email: str
    birth_date: date
    password_hash: str
    created_at: datetime

    def to_public(self) -> PublicUser:
        return PublicUser(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            birth_date=self.birth_date,
            created_at=self.created_at,
        )


@dataclass(frozen=True)
class RegistrationInput:
    """Raw registration payload, before normalization and validation."""
    first_name: str
    last_name: str
    email: str
    birth_date: str
    password: str
    password_confirm: str

    def normalized(self) -> RegistrationInput:
        """Return a copy with title-cased names and a lowercase email.

        Passwords and the birth date are left untouched.
        """
        return replace(
            self,
            first_name=normalize_name(self.first_name),
            last_name=normalize_name(self.last_name),
            email=normalize_email(self.email),
        )

    def __repr__(self) -> str:
        return (
            f"RegistrationInput(first_name={self.first_name!r}, last_name={self.last_name!r}, "
            f"email={self.email!r}, birth_date={self.birth_date!r})"
        )


@dataclass(frozen=True)
class Credentials:
    """Transient email/password pair used for login. Never persisted."""
    email: str
    password: str

    def normalized(self) -> Credentials:
        return replace(self, email=normalize_email(self.email))

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r})"
