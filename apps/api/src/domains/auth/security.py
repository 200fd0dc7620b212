"""Password hashing and bearer token helpers."""

from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from fastapi import HTTPException, status

from src.core.settings import Settings, settings
from src.shared.exceptions import InvalidTokenError

from .types import AccessTokenPayload


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed hash in storage
        return False


def _require_secret(app_settings: Settings) -> str:
    if not app_settings.JWT_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="JWT secret not configured",
        )
    return app_settings.JWT_SECRET


def create_access_token(
    user_id: int, email: str, role: str, app_settings: Settings = settings
) -> str:
    """
    Issue a signed bearer token for a user.

    Args:
        user_id: The user's ID, stored as the subject claim
        email: The user's email
        role: The user's role
        app_settings: Settings providing the secret and lifetime

    Returns:
        Encoded JWT
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=app_settings.JWT_EXPIRES_MINUTES),
    }
    return jwt.encode(
        payload, _require_secret(app_settings), algorithm=app_settings.JWT_ALGORITHM
    )


def decode_access_token(
    token: str, app_settings: Settings = settings
) -> AccessTokenPayload:
    """
    Verify a bearer token's signature and expiry.

    Raises:
        InvalidTokenError: The token is malformed, expired or wrongly signed
    """
    secret = _require_secret(app_settings)
    try:
        payload = jwt.decode(token, secret, algorithms=[app_settings.JWT_ALGORITHM])
        return AccessTokenPayload(**dict(payload))
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError("Token expired")
    except (jwt.PyJWTError, ValueError):
        raise InvalidTokenError("Invalid token")
