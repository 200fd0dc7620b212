# apps/api/src/domains/auth/models.py
from datetime import datetime
from typing import Optional

from prisma.enums import UserRole
from prisma.models import User
from pydantic import BaseModel, EmailStr, Field, field_validator

MIN_PASSWORD_LENGTH = 6


def lower_email(value: Optional[str]) -> Optional[str]:
    """Emails are stored and looked up lowercased."""
    return value.lower() if value is not None else value


def require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Field cannot be empty")
    return value


class UserResponse(BaseModel):
    id: int
    email: str
    firstName: str
    lastName: str
    role: UserRole
    createdAt: Optional[datetime] = None

    @classmethod
    def from_prisma(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            firstName=user.firstName,
            lastName=user.lastName,
            role=user.role,
            createdAt=user.createdAt,
        )


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    firstName: str
    lastName: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return lower_email(v)

    @field_validator("firstName", "lastName")
    @classmethod
    def validate_names(cls, v: str) -> str:
        return require_text(v)


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip().lower()


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse


class CurrentUserResponse(BaseModel):
    user: UserResponse


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own account."""

    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[EmailStr] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return lower_email(v)

    @field_validator("firstName", "lastName")
    @classmethod
    def validate_names(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v) if v is not None else v


class PasswordChange(BaseModel):
    currentPassword: str
    newPassword: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
