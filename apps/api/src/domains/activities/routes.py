# apps/api/src/domains/activities/routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from prisma.enums import ActivityType, ResourceType

from prisma import Prisma
from src.core.database import get_db
from src.domains.activities.models import (
    ActivityCreate,
    ActivityListResponse,
    ActivityResponse,
    ActivityUpdate,
)
from src.domains.activities.service import ACTIVITY_INCLUDE, ActivityService
from src.domains.auth.dependencies import get_current_user
from src.domains.auth.types import CurrentUser
from src.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.shared.permissions import AccessDecision, Action, require_resource_access
from src.shared.responses import MessageResponse

router = APIRouter(prefix="/activities", tags=["Activities"])


@router.get("", response_model=ActivityListResponse, operation_id="getActivities")
async def get_activities(
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
    page: int = Query(1, description="Page number for pagination", ge=1),
    limit: int = Query(
        DEFAULT_PAGE_SIZE,
        description="Number of records per page",
        ge=1,
        le=MAX_PAGE_SIZE,
    ),
    search: Optional[str] = Query(
        None, description="Search in subject or description"
    ),
    type: Optional[ActivityType] = Query(None, description="Filter by type"),
    completed: Optional[bool] = Query(None, description="Filter by completion"),
    contactId: Optional[int] = Query(None, description="Filter by contact"),
    organizationId: Optional[int] = Query(None, description="Filter by organization"),
    dealId: Optional[int] = Query(None, description="Filter by deal"),
) -> ActivityListResponse:
    """
    Get activities owned by or shared with the current user
    """
    return await ActivityService(db).list_activities(
        current_user.id,
        page=page,
        limit=limit,
        search=search.strip() if search else None,
        activity_type=type,
        completed=completed,
        contact_id=contactId,
        organization_id=organizationId,
        deal_id=dealId,
    )


@router.get(
    "/upcoming",
    response_model=List[ActivityResponse],
    operation_id="getUpcomingActivities",
)
async def get_upcoming_activities(
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> List[ActivityResponse]:
    return await ActivityService(db).get_upcoming(current_user.id)


@router.get(
    "/{resource_id}", response_model=ActivityResponse, operation_id="getActivity"
)
async def get_activity(
    access: AccessDecision = Depends(
        require_resource_access(
            ResourceType.activity, Action.READ, include=ACTIVITY_INCLUDE
        )
    ),
) -> ActivityResponse:
    return ActivityResponse.from_decision(access)


@router.post(
    "",
    response_model=ActivityResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createActivity",
)
async def create_activity(
    activity_data: ActivityCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> ActivityResponse:
    return await ActivityService(db).create_activity(current_user.id, activity_data)


@router.put(
    "/{resource_id}", response_model=ActivityResponse, operation_id="updateActivity"
)
async def update_activity(
    resource_id: int,
    updates: ActivityUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> ActivityResponse:
    return await ActivityService(db).update_activity(
        current_user.id, resource_id, updates
    )


@router.patch(
    "/{resource_id}/toggle-complete",
    response_model=ActivityResponse,
    operation_id="toggleActivityComplete",
)
async def toggle_activity_complete(
    resource_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> ActivityResponse:
    return await ActivityService(db).toggle_complete(current_user.id, resource_id)


@router.delete(
    "/{resource_id}", response_model=MessageResponse, operation_id="deleteActivity"
)
async def delete_activity(
    resource_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> MessageResponse:
    await ActivityService(db).delete_activity(current_user.id, resource_id)
    return MessageResponse(message="Activity deleted successfully")
