# apps/api/src/domains/contacts/models.py
from datetime import datetime
from typing import List, Optional

from prisma.enums import ContactStatus, SharePermission
from pydantic import BaseModel, EmailStr, Field, field_validator

from src.shared.pagination import PaginationMetadata
from src.shared.permissions import AccessDecision


def clean_tags(tags: List[str]) -> List[str]:
    """Trim tags and drop blanks and repeats, keeping first-seen order."""
    seen: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class ContactResponse(BaseModel):
    """Response model for contact data"""

    id: int
    firstName: str
    lastName: str
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    organizationId: Optional[int] = None
    organizationName: Optional[str] = None
    notes: Optional[str] = None
    tags: List[str] = []
    status: ContactStatus
    userId: int
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    isSharedWithMe: bool = False
    permission: Optional[SharePermission] = None

    @classmethod
    def from_decision(cls, decision: AccessDecision) -> "ContactResponse":
        contact = decision.resource
        organization = getattr(contact, "organization", None)
        return cls(
            id=contact.id,
            firstName=contact.firstName,
            lastName=contact.lastName,
            email=contact.email,
            phone=contact.phone,
            position=contact.position,
            organizationId=contact.organizationId,
            organizationName=organization.name if organization else None,
            notes=contact.notes,
            tags=contact.tags or [],
            status=contact.status,
            userId=contact.userId,
            createdAt=contact.createdAt,
            updatedAt=contact.updatedAt,
            isSharedWithMe=decision.is_shared_with_me,
            permission=decision.permission,
        )


class ContactListResponse(BaseModel):
    """Response model for paginated contact list"""

    contacts: List[ContactResponse]
    pagination: PaginationMetadata


class ContactCreate(BaseModel):
    firstName: str = Field(..., min_length=1)
    lastName: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    organizationId: Optional[int] = None
    notes: Optional[str] = None
    tags: List[str] = []
    status: ContactStatus = ContactStatus.all_good

    @field_validator("firstName", "lastName")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: List[str]) -> List[str]:
        return clean_tags(v)


class ContactUpdate(BaseModel):
    """Updatable contact fields; anything else in the body is ignored."""

    firstName: Optional[str] = Field(None, min_length=1)
    lastName: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    organizationId: Optional[int] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    status: Optional[ContactStatus] = None

    @field_validator("firstName", "lastName")
    @classmethod
    def strip_names(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return clean_tags(v) if v is not None else v


class TagListResponse(BaseModel):
    tags: List[str]
