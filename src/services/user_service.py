"""User service: lookup, listing and deletion of registered users."""

import logging

from domain.model.errors import InternalError, NotFoundError, RepositoryError
from domain.model.user import PublicUser
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


def get_user(repo: UserRepository, user_id: str) -> PublicUser:
    """Raises NotFoundError or InternalError."""
    try:
        user = repo.get_by_id(user_id)
    except RepositoryError as e:
        logger.error("Could not get user by id", extra={"userId": user_id, "error": str(e)})
        raise InternalError() from e
    if user is None:
        raise NotFoundError("could not find user")
    return user.to_public()


def delete_user(repo: UserRepository, user_id: str) -> None:
    """Raises NotFoundError or InternalError."""
    try:
        deleted = repo.delete(user_id)
    except RepositoryError as e:
        logger.error("Could not delete user", extra={"userId": user_id, "error": str(e)})
        raise InternalError() from e
    if not deleted:
        raise NotFoundError("could not find user")
    logger.info("User removed", extra={"userId": user_id})


def list_users(repo: UserRepository) -> list[PublicUser]:
    try:
        users = repo.list_all()
    except RepositoryError as e:
        logger.error("Could not list users", extra={"error": str(e)})
        raise InternalError() from e
    return [u.to_public() for u in users]
