# apps/api/src/domains/admin/models.py
from typing import Dict, List, Optional

from prisma.enums import UserRole
from pydantic import BaseModel, EmailStr, Field, field_validator

from src.domains.auth.models import (
    MIN_PASSWORD_LENGTH,
    UserResponse,
    lower_email,
    require_text,
)
from src.shared.pagination import PaginationMetadata


class UserListResponse(BaseModel):
    users: List[UserResponse]
    pagination: PaginationMetadata


class AdminUserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    firstName: str
    lastName: str
    role: UserRole = UserRole.user

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return lower_email(v)

    @field_validator("firstName", "lastName")
    @classmethod
    def validate_names(cls, v: str) -> str:
        return require_text(v)


class AdminUserUpdate(BaseModel):
    """Updatable account fields; a new password is hashed before storage."""

    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=MIN_PASSWORD_LENGTH)
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    role: Optional[UserRole] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return lower_email(v)

    @field_validator("firstName", "lastName")
    @classmethod
    def validate_names(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v) if v is not None else v


class UserStatsResponse(BaseModel):
    total: int
    admins: int
    regularUsers: int
    newThisMonth: int


class SettingValue(BaseModel):
    value: str
    description: Optional[str] = None


class SystemSettingsResponse(BaseModel):
    settings: Dict[str, SettingValue]


class SettingUpdate(BaseModel):
    value: str = Field(..., min_length=1)


class SettingResponse(BaseModel):
    key: str
    value: str
    description: Optional[str] = None
