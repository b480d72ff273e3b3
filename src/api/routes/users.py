"""User routes.

- POST /users: Register a user
- GET /users: List users (authenticated)
- GET /users/me: Current user (authenticated)
- GET /users/{user_id}: Fetch a user
- DELETE /users/{user_id}: Remove a user (authenticated)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from api.dependencies import get_auth_config, get_user_repo
from api.models import FieldErrorResponse, RegisterRequest, UserListResponse, UserResponse
from api.security import get_current_user_id
from domain.model.errors import DuplicateError, InternalError, NotFoundError, ValidationError
from domain.model.user import RegistrationInput
from port.user_repository import UserRepository
from services import auth_service, user_service
from utils.config import AuthConfig

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

INTERNAL_ERROR_DETAIL = "an internal error has happened"


def _internal_error() -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_DETAIL)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    repo: UserRepository = Depends(get_user_repo),
    config: AuthConfig = Depends(get_auth_config),
):
    """Register a new user.

    Raises:
        HTTPException: 400 if validation fails, 409 if the email is taken,
            500 on storage failure
    """
    data = RegistrationInput(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        birth_date=request.birth_date,
        password=request.password,
        password_confirm=request.password_confirm,
    )
    try:
        # bcrypt is CPU-bound; keep it off the event loop
        user = await run_in_threadpool(auth_service.register, repo, config, data)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=[FieldErrorResponse.from_domain(err).model_dump() for err in e.errors],
        )
    except DuplicateError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")
    except InternalError:
        raise _internal_error()

    return UserResponse.from_domain(user)


@router.get("", response_model=UserListResponse)
async def list_users(
    current_user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repo),
):
    """List all registered users."""
    try:
        users = user_service.list_users(repo)
    except InternalError:
        raise _internal_error()

    logger.info("Users listed", extra={"count": len(users), "userId": current_user_id})
    return UserListResponse(data=[UserResponse.from_domain(u) for u in users])


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repo),
):
    """Get the user the bearer token belongs to."""
    try:
        user = user_service.get_user(repo, current_user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="could not find user")
    except InternalError:
        raise _internal_error()
    return UserResponse.from_domain(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, repo: UserRepository = Depends(get_user_repo)):
    """Fetch a user by ID."""
    try:
        user = user_service.get_user(repo, user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="could not find user")
    except InternalError:
        raise _internal_error()
    return UserResponse.from_domain(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repo),
):
    """Remove a user by ID. Outstanding tokens for that user stop verifying."""
    try:
        user_service.delete_user(repo, user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="could not find user")
    except InternalError:
        raise _internal_error()

    logger.info("User deleted via API", extra={"userId": user_id, "requestedBy": current_user_id})
