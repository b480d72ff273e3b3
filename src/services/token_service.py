"""Bearer token issuance and verification.

Tokens are JWTs signed with the HMAC key and algorithm from AuthConfig.
Claims on the wire: ``user_id``, ``iat`` and ``exp`` (epoch seconds).

Verification is stateless and repeats every step on each call:
parse → algorithm check → signature → claims → expiry → user exists.
"""

import logging
from datetime import datetime, timezone

from jose import JWTError, jwt

from domain.model.errors import RepositoryError, TokenExpiredError, TokenInvalidError
from domain.model.token import TokenClaims
from port.user_repository import UserRepository
from utils.config import AuthConfig

logger = logging.getLogger(__name__)

USER_ID_CLAIM = 'user_id'
ISSUED_AT_CLAIM = 'iat'
EXPIRES_AT_CLAIM = 'exp'


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _from_epoch(value) -> datetime | None:
    try:
        return datetime.fromtimestamp(value, timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def issue_token(config: AuthConfig, user_id: str, now: datetime | None = None) -> str:
    """Create a signed token for user_id, valid for config.token_validity from now."""
    now = now or _utcnow()
    claims = {
        USER_ID_CLAIM: user_id,
        ISSUED_AT_CLAIM: int(now.timestamp()),
        EXPIRES_AT_CLAIM: int((now + config.token_validity).timestamp()),
    }
    return jwt.encode(claims, config.jwt_secret_key, algorithm=config.jwt_algorithm)


def _extract_claims(payload: dict) -> TokenClaims:
    user_id = payload.get(USER_ID_CLAIM)
    if not isinstance(user_id, str) or not user_id:
        logger.debug("Token has no user_id claim")
        raise TokenInvalidError()

    exp = payload.get(EXPIRES_AT_CLAIM)
    expires_at = _from_epoch(exp) if _is_number(exp) else None
    if expires_at is None:
        logger.debug("Token has no usable exp claim")
        raise TokenInvalidError()

    iat = payload.get(ISSUED_AT_CLAIM)
    issued_at = _from_epoch(iat) if _is_number(iat) else None

    return TokenClaims(user_id=user_id, issued_at=issued_at, expires_at=expires_at)


def verify_token(
    config: AuthConfig,
    repo: UserRepository,
    token: str,
    now: datetime | None = None,
) -> TokenClaims:
    """Verify a bearer token and return its claims.

    Raises:
        TokenInvalidError: empty, malformed, wrong algorithm, bad signature,
            missing claims, or the user no longer exists.
        TokenExpiredError: authentic token whose exp is in the past.
    """
    if not token:
        logger.debug("Missing token")
        raise TokenInvalidError()

    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        logger.debug("Token header could not be parsed", extra={"error": str(e)})
        raise TokenInvalidError()

    algorithm = header.get('alg')
    if algorithm != config.jwt_algorithm:
        logger.warning("Token signing method rejected", extra={"alg": str(algorithm)})
        raise TokenInvalidError()

    try:
        # exp is checked below so an expired token is reported as expired, not invalid
        payload = jwt.decode(
            token,
            config.jwt_secret_key,
            algorithms=[config.jwt_algorithm],
            options={'verify_exp': False},
        )
    except JWTError as e:
        logger.debug("JWT verification failed", extra={"error": str(e)})
        raise TokenInvalidError()

    claims = _extract_claims(payload)

    if claims.expires_at < (now or _utcnow()):
        logger.debug("Token expired", extra={"userId": claims.user_id})
        raise TokenExpiredError()

    try:
        user = repo.get_by_id(claims.user_id)
    except RepositoryError:
        logger.error("Could not look up token user", extra={"userId": claims.user_id})
        raise TokenInvalidError()
    if user is None:
        logger.info("Token names unknown user", extra={"userId": claims.user_id})
        raise TokenInvalidError()

    return claims
