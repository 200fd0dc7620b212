# apps/api/src/domains/shares/models.py
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from prisma.enums import ResourceType, SharePermission
from prisma.models import Share, User
from pydantic import BaseModel, Field, field_validator

from src.shared.pagination import PaginationMetadata
from src.shared.permissions import normalize_share_permission


class ShareDirection(str, Enum):
    WITH_ME = "with-me"
    BY_ME = "by-me"
    ALL = "all"


class ShareCreate(BaseModel):
    resourceType: ResourceType
    resourceId: int = Field(..., ge=1)
    sharedWithUserId: int = Field(..., ge=1)
    permission: SharePermission = SharePermission.view
    message: Optional[str] = None

    @field_validator("permission", mode="before")
    @classmethod
    def accept_legacy_permission(cls, v: Any) -> Any:
        return normalize_share_permission(v)


class ShareUpdate(BaseModel):
    permission: SharePermission

    @field_validator("permission", mode="before")
    @classmethod
    def accept_legacy_permission(cls, v: Any) -> Any:
        return normalize_share_permission(v)


class ShareUserResponse(BaseModel):
    id: int
    firstName: str
    lastName: str
    email: str

    @classmethod
    def from_prisma(cls, user: User) -> "ShareUserResponse":
        return cls(
            id=user.id,
            firstName=user.firstName,
            lastName=user.lastName,
            email=user.email,
        )


def resource_title(share: Share) -> str:
    """Human label for the shared resource, read from its relation column."""
    resource_type = ResourceType(share.resourceType)
    if resource_type == ResourceType.contact and share.contact:
        return f"{share.contact.firstName} {share.contact.lastName}"
    if resource_type == ResourceType.activity and share.activity:
        return share.activity.subject
    if resource_type == ResourceType.deal and share.deal:
        return share.deal.title
    return f"{resource_type.value} #{share.resourceId}"


class ShareResponse(BaseModel):
    id: int
    resourceType: ResourceType
    resourceId: int
    sharedById: int
    sharedWithId: int
    permission: SharePermission
    message: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_prisma(cls, share: Share) -> "ShareResponse":
        return cls(
            id=share.id,
            resourceType=share.resourceType,
            resourceId=share.resourceId,
            sharedById=share.sharedById,
            sharedWithId=share.sharedWithId,
            permission=share.permission,
            message=share.message,
            createdAt=share.createdAt,
            updatedAt=share.updatedAt,
        )


class ShareListItem(ShareResponse):
    """A share as seen from one side, with the counterpart's details."""

    isSharedWithMe: bool
    resourceTitle: str
    ownerFirstName: Optional[str] = None
    ownerLastName: Optional[str] = None
    ownerEmail: Optional[str] = None
    sharedWithFirstName: Optional[str] = None
    sharedWithLastName: Optional[str] = None
    sharedWithEmail: Optional[str] = None

    @classmethod
    def for_user(cls, share: Share, user_id: int) -> "ShareListItem":
        owner = share.sharedBy
        grantee = share.sharedWith
        return cls(
            **ShareResponse.from_prisma(share).model_dump(),
            isSharedWithMe=share.sharedWithId == user_id,
            resourceTitle=resource_title(share),
            ownerFirstName=owner.firstName if owner else None,
            ownerLastName=owner.lastName if owner else None,
            ownerEmail=owner.email if owner else None,
            sharedWithFirstName=grantee.firstName if grantee else None,
            sharedWithLastName=grantee.lastName if grantee else None,
            sharedWithEmail=grantee.email if grantee else None,
        )


class ShareListResponse(BaseModel):
    shares: List[ShareListItem]
    pagination: PaginationMetadata
