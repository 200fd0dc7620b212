# apps/api/src/domains/auth/dependencies.py
from fastapi import Depends, Header

from prisma import Prisma
from src.core.database import get_db
from src.shared.exceptions import AdminRequiredError, InvalidTokenError

from .security import decode_access_token
from .types import AccessTokenPayload, CurrentUser


def get_bearer_token(authorization: str = Header(None)) -> str:
    """
    Extracts the bearer token from the Authorization header.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise InvalidTokenError("Access token required")

    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise InvalidTokenError("Access token required")
    return token


def get_token_payload(token: str = Depends(get_bearer_token)) -> AccessTokenPayload:
    return decode_access_token(token)


async def get_current_user(
    payload: AccessTokenPayload = Depends(get_token_payload),
    db: Prisma = Depends(get_db),
) -> CurrentUser:
    """
    Resolves the token's subject to a live user.

    The role is read from the database rather than the token so that
    demotions take effect immediately.
    """
    try:
        user_id = payload.user_id
    except ValueError:
        raise InvalidTokenError("Invalid token")

    user = await db.user.find_unique(where={"id": user_id})
    if not user:
        raise InvalidTokenError("User not found")
    return CurrentUser(id=user.id, email=user.email, role=user.role)


async def require_admin(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    if not current_user.is_admin:
        raise AdminRequiredError()
    return current_user
