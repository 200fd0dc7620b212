# apps/api/src/domains/activities/models.py
from datetime import datetime
from typing import List, Optional

from prisma.enums import ActivityType, SharePermission
from prisma.models import Activity
from pydantic import BaseModel, Field

from src.shared.pagination import PaginationMetadata
from src.shared.permissions import AccessDecision


class ActivityResponse(BaseModel):
    """Response model for activity data"""

    id: int
    type: ActivityType
    subject: str
    description: Optional[str] = None
    dueDate: Optional[datetime] = None
    completed: bool = False
    contactId: Optional[int] = None
    contactName: Optional[str] = None
    organizationId: Optional[int] = None
    organizationName: Optional[str] = None
    dealId: Optional[int] = None
    dealTitle: Optional[str] = None
    userId: int
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    isSharedWithMe: bool = False
    permission: Optional[SharePermission] = None

    @classmethod
    def from_prisma(cls, activity: Activity) -> "ActivityResponse":
        contact = getattr(activity, "contact", None)
        organization = getattr(activity, "organization", None)
        deal = getattr(activity, "deal", None)
        return cls(
            id=activity.id,
            type=activity.type,
            subject=activity.subject,
            description=activity.description,
            dueDate=activity.dueDate,
            completed=activity.completed,
            contactId=activity.contactId,
            contactName=(
                f"{contact.firstName} {contact.lastName}" if contact else None
            ),
            organizationId=activity.organizationId,
            organizationName=organization.name if organization else None,
            dealId=activity.dealId,
            dealTitle=deal.title if deal else None,
            userId=activity.userId,
            createdAt=activity.createdAt,
            updatedAt=activity.updatedAt,
        )

    @classmethod
    def from_decision(cls, decision: AccessDecision) -> "ActivityResponse":
        response = cls.from_prisma(decision.resource)
        response.isSharedWithMe = decision.is_shared_with_me
        response.permission = decision.permission
        return response


class ActivityListResponse(BaseModel):
    """Response model for paginated activity list"""

    activities: List[ActivityResponse]
    pagination: PaginationMetadata


class ActivityCreate(BaseModel):
    type: ActivityType
    subject: str = Field(..., min_length=1)
    description: Optional[str] = None
    dueDate: Optional[datetime] = None
    completed: bool = False
    contactId: Optional[int] = None
    organizationId: Optional[int] = None
    dealId: Optional[int] = None


class ActivityUpdate(BaseModel):
    """Updatable activity fields; anything else in the body is ignored."""

    type: Optional[ActivityType] = None
    subject: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    dueDate: Optional[datetime] = None
    completed: Optional[bool] = None
    contactId: Optional[int] = None
    organizationId: Optional[int] = None
    dealId: Optional[int] = None
