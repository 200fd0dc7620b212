# apps/api/src/domains/auth/routes.py
from fastapi import APIRouter, Depends, status

from prisma import Prisma
from src.core.database import get_db
from src.domains.auth.dependencies import get_current_user
from src.domains.auth.models import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    PasswordChange,
    ProfileUpdate,
    RegisterRequest,
)
from src.domains.auth.service import AuthService
from src.domains.auth.types import CurrentUser
from src.shared.responses import MessageResponse

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="register",
)
async def register(
    request: RegisterRequest, db: Prisma = Depends(get_db)
) -> AuthResponse:
    return await AuthService(db).register(request)


@router.post("/login", response_model=AuthResponse, operation_id="login")
async def login(request: LoginRequest, db: Prisma = Depends(get_db)) -> AuthResponse:
    return await AuthService(db).login(request.email, request.password)


@router.get("/me", response_model=CurrentUserResponse, operation_id="getCurrentUser")
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> CurrentUserResponse:
    user = await AuthService(db).get_user(current_user.id)
    return CurrentUserResponse(user=user)


@router.post("/logout", response_model=MessageResponse, operation_id="logout")
async def logout(
    current_user: CurrentUser = Depends(get_current_user),
) -> MessageResponse:
    """
    Tokens are stateless; the client discards its copy.
    """
    return MessageResponse(message="Logged out successfully")


@router.put(
    "/profile", response_model=CurrentUserResponse, operation_id="updateProfile"
)
async def update_profile(
    updates: ProfileUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> CurrentUserResponse:
    user = await AuthService(db).update_profile(current_user.id, updates)
    return CurrentUserResponse(user=user)


@router.put(
    "/password", response_model=MessageResponse, operation_id="changePassword"
)
async def change_password(
    change: PasswordChange,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> MessageResponse:
    await AuthService(db).change_password(current_user.id, change)
    return MessageResponse(message="Password updated successfully")
