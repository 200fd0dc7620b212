# apps/api/src/domains/admin/service.py
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from prisma.enums import UserRole
from prisma.models import User

from prisma import Prisma
from src.domains.admin.models import (
    AdminUserCreate,
    AdminUserUpdate,
    SettingResponse,
    SettingValue,
    SystemSettingsResponse,
    UserListResponse,
    UserStatsResponse,
)
from src.domains.auth.models import UserResponse
from src.domains.auth.security import hash_password
from src.domains.deals.service import seed_default_stages
from src.domains.settings.service import MAX_USERS, REGISTRATION_ENABLED
from src.shared.exceptions import (
    EmailInUseError,
    InvalidDataError,
    SettingNotFoundError,
    UserNotFoundError,
)
from src.shared.pagination import build_pagination, page_offset
from src.shared.responses import update_data

logger = logging.getLogger(__name__)


def validate_setting_value(key: str, value: str) -> None:
    """
    Raises:
        InvalidDataError: The value is not valid for this key
    """
    if key == REGISTRATION_ENABLED and value not in ("true", "false"):
        raise InvalidDataError("registration_enabled must be 'true' or 'false'")
    if key == MAX_USERS and not value.isdigit():
        raise InvalidDataError("max_users must be a non-negative number")


def start_of_month() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


class AdminService:
    def __init__(self, db: Prisma):
        self.db = db

    async def list_users(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        role: Optional[UserRole] = None,
    ) -> UserListResponse:
        where: dict[str, Any] = {}
        if search:
            where["OR"] = [
                {"firstName": {"contains": search, "mode": "insensitive"}},
                {"lastName": {"contains": search, "mode": "insensitive"}},
                {"email": {"contains": search, "mode": "insensitive"}},
            ]
        if role:
            where["role"] = role

        users = await self.db.user.find_many(
            where=where,  # type: ignore[arg-type]
            skip=page_offset(page, limit),
            take=limit,
            order={"createdAt": "desc"},
        )
        total = await self.db.user.count(where=where)  # type: ignore[arg-type]
        return UserListResponse(
            users=[UserResponse.from_prisma(user) for user in users],
            pagination=build_pagination(page, limit, total),
        )

    async def get_user(self, user_id: int) -> UserResponse:
        return UserResponse.from_prisma(await self._get_or_404(user_id))

    async def create_user(
        self, admin_id: int, user_data: AdminUserCreate
    ) -> UserResponse:
        if await self.db.user.find_unique(where={"email": user_data.email}):
            raise EmailInUseError("User already exists")

        user = await self.db.user.create(
            data={
                "email": user_data.email,
                "passwordHash": hash_password(user_data.password),
                "firstName": user_data.firstName,
                "lastName": user_data.lastName,
                "role": user_data.role,
            }
        )
        await seed_default_stages(self.db, user.id)
        logger.info(f"Admin {admin_id} created user {user.id} ({user.role})")
        return UserResponse.from_prisma(user)

    async def update_user(
        self, admin_id: int, user_id: int, updates: AdminUserUpdate
    ) -> UserResponse:
        """
        Update another account, or the admin's own without demoting it.

        Raises:
            UserNotFoundError: No such user
            InvalidDataError: Self-demotion or empty update
            EmailInUseError: Another account already uses the email
        """
        await self._get_or_404(user_id)

        if admin_id == user_id and updates.role == UserRole.user:
            raise InvalidDataError("Cannot change your own admin role")

        data = update_data(
            updates, required=("email", "password", "firstName", "lastName", "role")
        )
        if not data:
            raise InvalidDataError("No valid fields to update")

        if "email" in data:
            owner = await self.db.user.find_unique(where={"email": data["email"]})
            if owner and owner.id != user_id:
                raise EmailInUseError()

        if "password" in data:
            data["passwordHash"] = hash_password(data.pop("password"))

        user = await self.db.user.update(where={"id": user_id}, data=data)  # type: ignore[arg-type]
        logger.info(f"Admin {admin_id} updated user {user_id}")
        return UserResponse.from_prisma(user)  # type: ignore[arg-type]

    async def delete_user(self, admin_id: int, user_id: int) -> None:
        """Delete an account and, by cascade, everything it owns."""
        if admin_id == user_id:
            raise InvalidDataError("Cannot delete your own account")
        await self._get_or_404(user_id)
        await self.db.user.delete(where={"id": user_id})
        logger.info(f"Admin {admin_id} deleted user {user_id}")

    async def get_user_stats(self) -> UserStatsResponse:
        return UserStatsResponse(
            total=await self.db.user.count(),
            admins=await self.db.user.count(where={"role": UserRole.admin}),
            regularUsers=await self.db.user.count(where={"role": UserRole.user}),
            newThisMonth=await self.db.user.count(
                where={"createdAt": {"gte": start_of_month()}}
            ),
        )

    async def get_settings(self) -> SystemSettingsResponse:
        settings = await self.db.systemsetting.find_many(order={"key": "asc"})
        return SystemSettingsResponse(
            settings={
                setting.key: SettingValue(
                    value=setting.value, description=setting.description
                )
                for setting in settings
            }
        )

    async def update_setting(
        self, admin_id: int, key: str, value: str
    ) -> SettingResponse:
        validate_setting_value(key, value)

        setting = await self.db.systemsetting.find_unique(where={"key": key})
        if not setting:
            raise SettingNotFoundError()

        setting = await self.db.systemsetting.update(
            where={"key": key}, data={"value": value}
        )
        logger.info(f"Admin {admin_id} set {key} to {value!r}")
        return SettingResponse(
            key=setting.key,  # type: ignore[union-attr]
            value=setting.value,  # type: ignore[union-attr]
            description=setting.description,  # type: ignore[union-attr]
        )

    async def _get_or_404(self, user_id: int) -> User:
        user = await self.db.user.find_unique(where={"id": user_id})
        if not user:
            raise UserNotFoundError()
        return user
