"""Auth service: registration, login and token authentication.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from datetime import datetime, timezone
from functools import lru_cache

from jose import JWTError

from domain.model.errors import (
    DuplicateError,
    InternalError,
    RepositoryError,
    UnauthorizedError,
    ValidationError,
)
from domain.model.user import Credentials, PublicUser, RegistrationInput, User
from port.user_repository import UserRepository
from services.password import hash_password, verify_password
from services.token_service import issue_token, verify_token
from services.validation import parse_birth_date, validate_registration
from utils.config import AuthConfig
from utils.ids import generate_id

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    """Hash checked on unknown emails so their login costs the same bcrypt work."""
    return hash_password("not-a-real-password", rounds)


def register(repo: UserRepository, config: AuthConfig, data: RegistrationInput) -> PublicUser:
    """Register a new user.

    Returns the public view of the created user.

    Raises:
        ValidationError: one or more fields are invalid (nothing is stored)
        DuplicateError: email already registered
        InternalError: hashing, id generation or the store failed
    """
    data = data.normalized()

    errors = validate_registration(data)
    if errors:
        raise ValidationError(errors)

    try:
        password_hash = hash_password(data.password, config.bcrypt_rounds)
    except (ValueError, TypeError) as e:
        logger.error("Could not hash password", extra={"error": str(e)})
        raise InternalError() from e

    try:
        user_id = generate_id()
    except (OSError, NotImplementedError) as e:
        logger.error("Could not generate user id", extra={"error": str(e)})
        raise InternalError() from e

    user = User(
        id=user_id,
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        birth_date=parse_birth_date(data.birth_date),
        password_hash=password_hash,
        created_at=datetime.now(timezone.utc),
    )

    try:
        repo.insert(user)
    except DuplicateError:
        raise
    except RepositoryError as e:
        logger.error("Could not store user", extra={"userId": user.id, "error": str(e)})
        raise InternalError() from e

    logger.info("User registered", extra={"userId": user.id})
    return user.to_public()


def login(
    repo: UserRepository,
    config: AuthConfig,
    credentials: Credentials,
    now: datetime | None = None,
) -> str:
    """Check email and password and issue a bearer token.

    Unknown emails, wrong passwords and lookup failures all raise the same
    UnauthorizedError so callers cannot tell whether an account exists.

    Raises:
        UnauthorizedError: credentials rejected
    """
    credentials = credentials.normalized()

    try:
        user = repo.get_by_email(credentials.email)
    except RepositoryError as e:
        logger.error("Could not get user by email", extra={"error": str(e)})
        raise UnauthorizedError() from e

    if user is None:
        verify_password(credentials.password, _dummy_hash(config.bcrypt_rounds))
        logger.info("Login rejected: unknown email")
        raise UnauthorizedError()

    if not verify_password(credentials.password, user.password_hash):
        logger.info("Login rejected: wrong password", extra={"userId": user.id})
        raise UnauthorizedError()

    try:
        token = issue_token(config, user.id, now)
    except JWTError as e:
        logger.error("Could not sign token", extra={"userId": user.id, "error": str(e)})
        raise UnauthorizedError() from e

    logger.info("User logged in", extra={"userId": user.id})
    return token


def authenticate(
    repo: UserRepository,
    config: AuthConfig,
    token: str,
    now: datetime | None = None,
) -> str:
    """Verify a bearer token and return the authenticated user id.

    Raises:
        TokenInvalidError: token rejected
        TokenExpiredError: token past its validity window
    """
    return verify_token(config, repo, token, now).user_id
