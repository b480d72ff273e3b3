"""Pydantic models for API request/response."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from domain.model.errors import FieldError
from domain.model.user import PublicUser


class RegisterRequest(BaseModel):
    """Request model for user registration.

    Fields default to empty strings so that missing values are reported by
    the field validator as "required" rather than by a generic 422.
    """
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    birth_date: str = Field("", description="YYYY-MM-DD")
    password: str = ""
    password_confirm: str = ""


class LoginRequest(BaseModel):
    """Request model for token creation."""
    email: str = ""
    password: str = ""


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """Public user payload (never contains the password hash)."""
    id: str
    first_name: str
    last_name: str
    email: str
    birth_date: date
    created_at: datetime

    @classmethod
    def from_domain(cls, user: PublicUser) -> "UserResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            birth_date=user.birth_date,
            created_at=user.created_at,
        )


class UserListResponse(BaseModel):
    data: list[UserResponse]


class FieldErrorResponse(BaseModel):
    field: str
    reason: str
    message: str

    @classmethod
    def from_domain(cls, error: FieldError) -> "FieldErrorResponse":
        return cls(field=error.field, reason=error.reason.value, message=error.message)
