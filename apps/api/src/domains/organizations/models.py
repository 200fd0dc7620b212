# apps/api/src/domains/organizations/models.py
from datetime import datetime
from typing import List, Optional

from prisma.models import Organization
from pydantic import BaseModel, EmailStr, Field

from src.domains.contacts.models import ContactResponse
from src.domains.deals.models import DealResponse
from src.shared.pagination import PaginationMetadata


class OrganizationResponse(BaseModel):
    id: int
    name: str
    industry: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    userId: int
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_prisma(cls, organization: Organization) -> "OrganizationResponse":
        return cls(
            id=organization.id,
            name=organization.name,
            industry=organization.industry,
            website=organization.website,
            phone=organization.phone,
            email=organization.email,
            address=organization.address,
            notes=organization.notes,
            userId=organization.userId,
            createdAt=organization.createdAt,
            updatedAt=organization.updatedAt,
        )


class OrganizationSummary(OrganizationResponse):
    contactCount: int = 0
    dealCount: int = 0


class OrganizationListResponse(BaseModel):
    organizations: List[OrganizationSummary]
    pagination: PaginationMetadata


class OrganizationDetailResponse(OrganizationResponse):
    """An organization with the caller's own contacts and deals there."""

    contacts: List[ContactResponse] = []
    deals: List[DealResponse] = []


class OrganizationCreate(BaseModel):
    name: str = Field(..., min_length=1)
    industry: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    notes: Optional[str] = None


class OrganizationUpdate(BaseModel):
    """Updatable organization fields; anything else in the body is ignored."""

    name: Optional[str] = Field(None, min_length=1)
    industry: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    notes: Optional[str] = None
