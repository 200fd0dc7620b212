# apps/api/src/domains/deals/routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from prisma.enums import ResourceType

from prisma import Prisma
from src.core.database import get_db
from src.domains.auth.dependencies import get_current_user
from src.domains.auth.types import CurrentUser
from src.domains.deals.models import (
    DealCreate,
    DealListResponse,
    DealResponse,
    DealsByStageResponse,
    DealStageResponse,
    DealUpdate,
)
from src.domains.deals.service import DEAL_INCLUDE, DealService
from src.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.shared.permissions import AccessDecision, Action, require_resource_access
from src.shared.responses import MessageResponse

router = APIRouter(prefix="/deals", tags=["Deals"])


@router.get(
    "/stages", response_model=List[DealStageResponse], operation_id="getDealStages"
)
async def get_deal_stages(
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> List[DealStageResponse]:
    return await DealService(db).get_stages(current_user.id)


@router.get("", response_model=DealListResponse, operation_id="getDeals")
async def get_deals(
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
        None, description="Search in deal title or organization name"
    ),
    stageId: Optional[int] = Query(None, description="Filter by stage"),
    organizationId: Optional[int] = Query(None, description="Filter by organization"),
) -> DealListResponse:
    """
    Get deals owned by or shared with the current user
    """
    return await DealService(db).list_deals(
        current_user.id,
        page=page,
        limit=limit,
        search=search.strip() if search else None,
        stage_id=stageId,
        organization_id=organizationId,
    )


@router.get(
    "/by-stage", response_model=DealsByStageResponse, operation_id="getDealsByStage"
)
async def get_deals_by_stage(
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> DealsByStageResponse:
    return await DealService(db).get_deals_by_stage(current_user.id)


@router.get("/{resource_id}", response_model=DealResponse, operation_id="getDeal")
async def get_deal(
    access: AccessDecision = Depends(
        require_resource_access(ResourceType.deal, Action.READ, include=DEAL_INCLUDE)
    ),
) -> DealResponse:
    return DealResponse.from_decision(access)


@router.post(
    "",
    response_model=DealResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createDeal",
)
async def create_deal(
    deal_data: DealCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> DealResponse:
    return await DealService(db).create_deal(current_user.id, deal_data)


@router.put("/{resource_id}", response_model=DealResponse, operation_id="updateDeal")
async def update_deal(
    resource_id: int,
    updates: DealUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> DealResponse:
    return await DealService(db).update_deal(current_user.id, resource_id, updates)


@router.delete(
    "/{resource_id}", response_model=MessageResponse, operation_id="deleteDeal"
)
async def delete_deal(
    resource_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> MessageResponse:
    await DealService(db).delete_deal(current_user.id, resource_id)
    return MessageResponse(message="Deal deleted successfully")
