"""Registration input validation.

Pure functions, no I/O. Each field check returns None when the value is
acceptable or the first ValidationReason it fails, checking
required → format → semantic in that order. validate_registration runs every
field check (one field failing does not hide another) and collects the
results.
"""

import re
from datetime import date

from domain.model.errors import FieldError, ValidationReason
from domain.model.user import RegistrationInput

NAME_MAX_LEN = 50
EMAIL_MAX_LEN = 100
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128
MIN_AGE = 18
BIRTH_DATE_FORMAT = 'YYYY-MM-DD'

EMAIL_RE = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)
BIRTH_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
PASSWORD_CHARS_RE = re.compile(r"[A-Za-z0-9]")


def validate_name(name: str) -> ValidationReason | None:
    if not name:
        return ValidationReason.REQUIRED
    if len(name) > NAME_MAX_LEN:
        return ValidationReason.TOO_LONG
    return None


def validate_email(email: str) -> ValidationReason | None:
    """Check an (already lowercased) email address."""
    if not email:
        return ValidationReason.REQUIRED
    if len(email) > EMAIL_MAX_LEN:
        return ValidationReason.TOO_LONG
    if not EMAIL_RE.fullmatch(email):
        return ValidationReason.INVALID_FORMAT
    return None


def parse_birth_date(value: str) -> date | None:
    """Parse a strict YYYY-MM-DD string, returning None if it is not a real date."""
    if not BIRTH_DATE_RE.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def age_on(birth_date: date, today: date) -> int:
    """Whole calendar years elapsed between birth_date and today."""
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def validate_birth_date(birth_date: str, today: date | None = None) -> ValidationReason | None:
    if not birth_date:
        return ValidationReason.REQUIRED

    parsed = parse_birth_date(birth_date)
    if parsed is None:
        return ValidationReason.INVALID_FORMAT

    today = today or date.today()
    if parsed > today:
        return ValidationReason.IN_FUTURE
    if age_on(parsed, today) < MIN_AGE:
        return ValidationReason.BELOW_MIN_AGE
    return None


def validate_password(password: str, password_confirm: str) -> ValidationReason | None:
    """Check password length, character set and confirmation.

    The character-set rule only requires one ASCII letter or digit somewhere
    in the password; it does not enforce a mix of cases and digits.
    """
    if not password:
        return ValidationReason.REQUIRED
    if len(password) < PASSWORD_MIN_LEN:
        return ValidationReason.TOO_SHORT
    if len(password) > PASSWORD_MAX_LEN:
        return ValidationReason.TOO_LONG
    if not PASSWORD_CHARS_RE.search(password):
        return ValidationReason.INVALID_FORMAT
    if password != password_confirm:
        return ValidationReason.CONFIRMATION_MISMATCH
    return None


_MESSAGES: dict[tuple[str, ValidationReason], str] = {
    ('first_name', ValidationReason.REQUIRED): "first name is required",
    ('first_name', ValidationReason.TOO_LONG): f"first name cannot be longer than {NAME_MAX_LEN} characters",
    ('last_name', ValidationReason.REQUIRED): "last name is required",
    ('last_name', ValidationReason.TOO_LONG): f"last name cannot be longer than {NAME_MAX_LEN} characters",
    ('email', ValidationReason.REQUIRED): "email is required",
    ('email', ValidationReason.TOO_LONG): f"email cannot be longer than {EMAIL_MAX_LEN} characters",
    ('email', ValidationReason.INVALID_FORMAT): "invalid email address",
    ('birth_date', ValidationReason.REQUIRED): "birth date is required",
    ('birth_date', ValidationReason.INVALID_FORMAT): f"invalid birth date format. use {BIRTH_DATE_FORMAT}",
    ('birth_date', ValidationReason.IN_FUTURE): "birth date cannot be in the future",
    ('birth_date', ValidationReason.BELOW_MIN_AGE): f"must be at least {MIN_AGE} years old to register",
    ('password', ValidationReason.REQUIRED): "password is required",
    ('password', ValidationReason.TOO_SHORT): f"password must be at least {PASSWORD_MIN_LEN} characters long",
    ('password', ValidationReason.TOO_LONG): f"password cannot be longer than {PASSWORD_MAX_LEN} characters",
    ('password', ValidationReason.INVALID_FORMAT): "password must contain at least one letter or number",
    ('password', ValidationReason.CONFIRMATION_MISMATCH): "passwords do not match",
}


def _field_error(field: str, reason: ValidationReason) -> FieldError:
    return FieldError(field=field, reason=reason, message=_MESSAGES[(field, reason)])


def validate_registration(data: RegistrationInput, today: date | None = None) -> list[FieldError]:
    """Validate every registration field and return all failures.

    Expects input already normalized by RegistrationInput.normalized().
    An empty list means the input is acceptable.
    """
    checks = [
        ('first_name', validate_name(data.first_name)),
        ('last_name', validate_name(data.last_name)),
        ('email', validate_email(data.email)),
        ('birth_date', validate_birth_date(data.birth_date, today)),
        ('password', validate_password(data.password, data.password_confirm)),
    ]
    return [_field_error(field, reason) for field, reason in checks if reason is not None]
