"""Token route (login)."""

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from api.dependencies import get_auth_config, get_user_repo
from api.models import LoginRequest, TokenResponse
from api.security import unauthorized
from domain.model.errors import UnauthorizedError
from domain.model.user import Credentials
from port.user_repository import UserRepository
from services import auth_service
from utils.config import AuthConfig

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["auth"])


@router.post("/token", response_model=TokenResponse)
async def create_token(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    config: AuthConfig = Depends(get_auth_config),
):
    """Exchange email and password for a bearer token.

    Raises:
        HTTPException: 401 if the email is unknown or the password is wrong
            (same response for both)
    """
    try:
        token = await run_in_threadpool(
            auth_service.login,
            repo,
            config,
            Credentials(email=request.email, password=request.password),
        )
    except UnauthorizedError as e:
        raise unauthorized(str(e))

    return TokenResponse(token=token)
