# apps/api/src/domains/shares/routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from prisma.enums import ResourceType

from prisma import Prisma
from src.core.database import get_db
from src.domains.auth.dependencies import get_current_user
from src.domains.auth.types import CurrentUser
from src.domains.shares.models import (
    ShareCreate,
    ShareDirection,
    ShareListResponse,
    ShareResponse,
    ShareUpdate,
    ShareUserResponse,
)
from src.domains.shares.service import ShareService
from src.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.shared.responses import MessageResponse

router = APIRouter(prefix="/shares", tags=["Shares"])


@router.get("", response_model=ShareListResponse, operation_id="getShares")
async def get_shares(
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
    direction: ShareDirection = Query(
        ShareDirection.ALL, description="with-me, by-me or all"
    ),
    resource_type: Optional[ResourceType] = Query(
        None, description="Only shares of this resource type"
    ),
    page: int = Query(1, description="Page number for pagination", ge=1),
    limit: int = Query(
        DEFAULT_PAGE_SIZE,
        description="Number of records per page",
        ge=1,
        le=MAX_PAGE_SIZE,
    ),
) -> ShareListResponse:
    return await ShareService(db).list_shares(
        current_user.id,
        direction=direction,
        resource_type=resource_type,
        page=page,
        limit=limit,
    )


@router.get(
    "/users",
    response_model=List[ShareUserResponse],
    operation_id="getShareableUsers",
)
async def get_shareable_users(
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> List[ShareUserResponse]:
    """
    Users the caller can share with, i.e. everyone else.
    """
    return await ShareService(db).list_shareable_users(current_user.id)


@router.post(
    "",
    response_model=ShareResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createShare",
)
async def create_share(
    request: ShareCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> ShareResponse:
    """
    Share a resource the caller owns with another user.
    """
    return await ShareService(db).create_share(current_user.id, request)


@router.put("/{share_id}", response_model=ShareResponse, operation_id="updateShare")
async def update_share(
    share_id: int,
    request: ShareUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> ShareResponse:
    return await ShareService(db).update_share(current_user.id, share_id, request)


@router.delete(
    "/{share_id}", response_model=MessageResponse, operation_id="deleteShare"
)
async def delete_share(
    share_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> MessageResponse:
    await ShareService(db).revoke_share(current_user.id, share_id)
    return MessageResponse(message="Share removed successfully")
