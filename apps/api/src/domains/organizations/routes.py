# apps/api/src/domains/organizations/routes.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from prisma import Prisma
from src.core.database import get_db
from src.domains.auth.dependencies import get_current_user
from src.domains.auth.types import CurrentUser
from src.domains.organizations.models import (
    OrganizationCreate,
    OrganizationDetailResponse,
    OrganizationListResponse,
    OrganizationResponse,
    OrganizationUpdate,
)
from src.domains.organizations.service import OrganizationService
from src.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.shared.responses import MessageResponse

# Add a prefix and tag to group this route clearly in OpenAPI
router = APIRouter(prefix="/organizations", tags=["Organizations"])


@router.get(
    "", response_model=OrganizationListResponse, operation_id="getOrganizations"
)
async def get_organizations(
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
        None, description="Search in name, industry, email or website"
    ),
) -> OrganizationListResponse:
    """
    List the organization directory with contact and deal counts.
    """
    return await OrganizationService(db).list_organizations(
        page=page, limit=limit, search=search.strip() if search else None
    )


@router.get(
    "/{organization_id}",
    response_model=OrganizationDetailResponse,
    operation_id="getOrganization",
)
async def get_organization(
    organization_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> OrganizationDetailResponse:
    return await OrganizationService(db).get_organization(
        current_user.id, organization_id
    )


@router.post(
    "",
    response_model=OrganizationResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createOrganization",
)
async def create_organization(
    organization_data: OrganizationCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> OrganizationResponse:
    return await OrganizationService(db).create_organization(
        current_user.id, organization_data
    )


@router.put(
    "/{organization_id}",
    response_model=OrganizationResponse,
    operation_id="updateOrganization",
)
async def update_organization(
    organization_id: int,
    updates: OrganizationUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> OrganizationResponse:
    """
    Update an organization. Only its creator may.
    """
    return await OrganizationService(db).update_organization(
        current_user.id, organization_id, updates
    )


@router.delete(
    "/{organization_id}",
    response_model=MessageResponse,
    operation_id="deleteOrganization",
)
async def delete_organization(
    organization_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> MessageResponse:
    await OrganizationService(db).delete_organization(current_user.id, organization_id)
    return MessageResponse(message="Organization deleted successfully")
