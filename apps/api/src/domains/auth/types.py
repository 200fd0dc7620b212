"""Auth domain type definitions for type safety."""

from typing import Literal, Optional

from prisma.enums import UserRole
from pydantic import BaseModel, Field


class AccessTokenPayload(BaseModel):
    """Claims carried by the API's bearer tokens."""

    # Standard JWT claims
    sub: str = Field(..., description="Subject (user ID)")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")

    # Application claims
    email: Optional[str] = Field(None, description="User email address")
    role: Optional[Literal["user", "admin"]] = Field(None, description="User role")

    model_config = {"extra": "allow"}

    @property
    def user_id(self) -> int:
        return int(self.sub)


class CurrentUser(BaseModel):
    """The authenticated caller, as supplied to every route."""

    id: int
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin
