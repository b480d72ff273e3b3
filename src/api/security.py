"""Bearer token authentication dependency."""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_auth_config, get_user_repo
from domain.model.errors import AuthenticationError
from port.user_repository import UserRepository
from services import auth_service
from utils.config import AuthConfig

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    config: AuthConfig = Depends(get_auth_config),
    user_repo: UserRepository = Depends(get_user_repo),
) -> str:
    """Return the authenticated user id. Raises 401 if the token is missing or rejected."""
    if not credentials:
        raise unauthorized("Not authenticated")

    try:
        return auth_service.authenticate(user_repo, config, credentials.credentials)
    except AuthenticationError as e:
        raise unauthorized(str(e))
