# apps/api/src/domains/deals/models.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from prisma.enums import SharePermission
from prisma.models import Deal, DealStage
from pydantic import BaseModel, Field, field_validator

from src.shared.pagination import PaginationMetadata
from src.shared.permissions import AccessDecision


class DealStageResponse(BaseModel):
    id: int
    name: str
    orderIndex: int

    @classmethod
    def from_prisma(cls, stage: DealStage) -> "DealStageResponse":
        return cls(id=stage.id, name=stage.name, orderIndex=stage.orderIndex)


class DealResponse(BaseModel):
    """Response model for deal data"""

    id: int
    title: str
    value: Decimal
    currency: str
    stageId: Optional[int] = None
    stageName: Optional[str] = None
    contactId: Optional[int] = None
    contactName: Optional[str] = None
    organizationId: Optional[int] = None
    organizationName: Optional[str] = None
    expectedCloseDate: Optional[datetime] = None
    probability: int = 0
    notes: Optional[str] = None
    userId: int
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    isSharedWithMe: bool = False
    permission: Optional[SharePermission] = None

    @classmethod
    def from_prisma(cls, deal: Deal) -> "DealResponse":
        contact = getattr(deal, "contact", None)
        organization = getattr(deal, "organization", None)
        stage = getattr(deal, "stage", None)
        return cls(
            id=deal.id,
            title=deal.title,
            value=deal.value,
            currency=deal.currency,
            stageId=deal.stageId,
            stageName=stage.name if stage else None,
            contactId=deal.contactId,
            contactName=(
                f"{contact.firstName} {contact.lastName}" if contact else None
            ),
            organizationId=deal.organizationId,
            organizationName=organization.name if organization else None,
            expectedCloseDate=deal.expectedCloseDate,
            probability=deal.probability,
            notes=deal.notes,
            userId=deal.userId,
            createdAt=deal.createdAt,
            updatedAt=deal.updatedAt,
        )

    @classmethod
    def from_decision(cls, decision: AccessDecision) -> "DealResponse":
        response = cls.from_prisma(decision.resource)
        response.isSharedWithMe = decision.is_shared_with_me
        response.permission = decision.permission
        return response


class DealListResponse(BaseModel):
    """Response model for paginated deal list"""

    deals: List[DealResponse]
    pagination: PaginationMetadata


class StageDeals(BaseModel):
    stage: DealStageResponse
    deals: List[DealResponse]


class DealsByStageResponse(BaseModel):
    stages: List[StageDeals]


class DealCreate(BaseModel):
    title: str = Field(..., min_length=1)
    value: Decimal = Field(Decimal("0"), ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    stageId: Optional[int] = None
    contactId: Optional[int] = None
    organizationId: Optional[int] = None
    expectedCloseDate: Optional[datetime] = None
    probability: int = Field(0, ge=0, le=100)
    notes: Optional[str] = None

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()


class DealUpdate(BaseModel):
    """Updatable deal fields; anything else in the body is ignored."""

    title: Optional[str] = Field(None, min_length=1)
    value: Optional[Decimal] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    stageId: Optional[int] = None
    contactId: Optional[int] = None
    organizationId: Optional[int] = None
    expectedCloseDate: Optional[datetime] = None
    probability: Optional[int] = Field(None, ge=0, le=100)
    notes: Optional[str] = None

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else v
