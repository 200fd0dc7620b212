# apps/api/src/domains/settings/service.py
import logging
from typing import Optional

from prisma.errors import PrismaError

from prisma import Prisma

logger = logging.getLogger(__name__)

REGISTRATION_ENABLED = "registration_enabled"
MAX_USERS = "max_users"
APP_NAME = "app_name"

DEFAULT_SETTINGS: dict[str, tuple[str, str]] = {
    REGISTRATION_ENABLED: ("true", "Allow new users to register"),
    MAX_USERS: ("0", "Maximum number of users (0 = unlimited)"),
    APP_NAME: ("OMW CRM", "Application display name"),
}


async def get_system_setting(
    db: Prisma, key: str, default: Optional[str] = None
) -> Optional[str]:
    """
    Read a system setting, falling back to a default.

    Args:
        db: Prisma database connection
        key: Setting key
        default: Value returned when the setting is missing or unreadable

    Returns:
        The stored value, or the default
    """
    try:
        setting = await db.systemsetting.find_unique(where={"key": key})
    except PrismaError as e:
        logger.error(f"Error reading system setting {key}: {e}")
        return default

    if setting is None:
        return default
    return setting.value


async def is_registration_enabled(db: Prisma) -> bool:
    value = await get_system_setting(db, REGISTRATION_ENABLED, "true")
    return value == "true"


async def get_max_users(db: Prisma) -> int:
    """Maximum allowed users, 0 meaning unlimited."""
    value = await get_system_setting(db, MAX_USERS, "0")
    try:
        return max(int(value or "0"), 0)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {MAX_USERS} setting: {value!r}")
        return 0


async def is_user_limit_reached(db: Prisma) -> bool:
    max_users = await get_max_users(db)
    if max_users == 0:
        return False

    current_users = await db.user.count()
    return current_users >= max_users
