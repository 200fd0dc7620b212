# apps/api/src/domains/admin/routes.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from prisma.enums import UserRole

from prisma import Prisma
from src.core.database import get_db
from src.domains.admin.models import (
    AdminUserCreate,
    AdminUserUpdate,
    SettingResponse,
    SettingUpdate,
    SystemSettingsResponse,
    UserListResponse,
    UserStatsResponse,
)
from src.domains.admin.service import AdminService
from src.domains.auth.dependencies import require_admin
from src.domains.auth.models import UserResponse
from src.domains.auth.types import CurrentUser
from src.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.shared.responses import MessageResponse

# Every route here requires the admin role
router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/users", response_model=UserListResponse, operation_id="adminGetUsers")
async def get_users(
    admin: CurrentUser = Depends(require_admin),
    db: Prisma = Depends(get_db),
    page: int = Query(1, description="Page number for pagination", ge=1),
    limit: int = Query(
        DEFAULT_PAGE_SIZE,
        description="Number of records per page",
        ge=1,
        le=MAX_PAGE_SIZE,
    ),
    search: Optional[str] = Query(None, description="Search in name or email"),
    role: Optional[UserRole] = Query(None, description="Filter by role"),
) -> UserListResponse:
    return await AdminService(db).list_users(
        page=page,
        limit=limit,
        search=search.strip() if search else None,
        role=role,
    )


@router.get(
    "/users/stats/overview",
    response_model=UserStatsResponse,
    operation_id="adminGetUserStats",
)
async def get_user_stats(
    admin: CurrentUser = Depends(require_admin),
    db: Prisma = Depends(get_db),
) -> UserStatsResponse:
    return await AdminService(db).get_user_stats()


@router.get(
    "/users/{user_id}", response_model=UserResponse, operation_id="adminGetUser"
)
async def get_user(
    user_id: int,
    admin: CurrentUser = Depends(require_admin),
    db: Prisma = Depends(get_db),
) -> UserResponse:
    return await AdminService(db).get_user(user_id)


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="adminCreateUser",
)
async def create_user(
    user_data: AdminUserCreate,
    admin: CurrentUser = Depends(require_admin),
    db: Prisma = Depends(get_db),
) -> UserResponse:
    return await AdminService(db).create_user(admin.id, user_data)


@router.put(
    "/users/{user_id}", response_model=UserResponse, operation_id="adminUpdateUser"
)
async def update_user(
    user_id: int,
    updates: AdminUserUpdate,
    admin: CurrentUser = Depends(require_admin),
    db: Prisma = Depends(get_db),
) -> UserResponse:
    return await AdminService(db).update_user(admin.id, user_id, updates)


@router.delete(
    "/users/{user_id}", response_model=MessageResponse, operation_id="adminDeleteUser"
)
async def delete_user(
    user_id: int,
    admin: CurrentUser = Depends(require_admin),
    db: Prisma = Depends(get_db),
) -> MessageResponse:
    await AdminService(db).delete_user(admin.id, user_id)
    return MessageResponse(message="User deleted successfully")


@router.get(
    "/settings",
    response_model=SystemSettingsResponse,
    operation_id="adminGetSettings",
)
async def get_settings(
    admin: CurrentUser = Depends(require_admin),
    db: Prisma = Depends(get_db),
) -> SystemSettingsResponse:
    return await AdminService(db).get_settings()


@router.put(
    "/settings/{key}",
    response_model=SettingResponse,
    operation_id="adminUpdateSetting",
)
async def update_setting(
    key: str,
    update: SettingUpdate,
    admin: CurrentUser = Depends(require_admin),
    db: Prisma = Depends(get_db),
) -> SettingResponse:
    return await AdminService(db).update_setting(admin.id, key, update.value)
