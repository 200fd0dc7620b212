import logging

from prisma.enums import UserRole

from prisma import Prisma
from src.domains.auth.models import (
    AuthResponse,
    PasswordChange,
    ProfileUpdate,
    RegisterRequest,
    UserResponse,
)
from src.domains.auth.security import (
    create_access_token,
    hash_password,
    verify_password,
)
from src.domains.deals.service import seed_default_stages
from src.domains.settings.service import (
    is_registration_enabled,
    is_user_limit_reached,
)
from src.shared.exceptions import (
    EmailInUseError,
    InvalidCredentialsError,
    InvalidDataError,
    RegistrationClosedError,
    UserNotFoundError,
)
from src.shared.responses import update_data

logger = logging.getLogger(__name__)


class AuthService:
    """Service for account and credential operations"""

    def __init__(self, db: Prisma):
        self.db = db

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """
        Create an account and sign the new user in.

        Registration can be closed by an administrator, either outright or
        by capping the number of users.

        Args:
            request: Registration details

        Returns:
            AuthResponse with a bearer token for the new user

        Raises:
            RegistrationClosedError: Registration disabled or user cap reached
            EmailInUseError: An account already uses the email
        """
        if not await is_registration_enabled(self.db):
            raise RegistrationClosedError(
                "User registration is currently disabled by the administrator"
            )
        if await is_user_limit_reached(self.db):
            raise RegistrationClosedError(
                "Maximum number of users reached. Contact administrator."
            )

        existing = await self.db.user.find_unique(where={"email": request.email})
        if existing:
            raise EmailInUseError("User already exists")

        user = await self.db.user.create(
            data={
                "email": request.email,
                "passwordHash": hash_password(request.password),
                "firstName": request.firstName,
                "lastName": request.lastName,
                "role": UserRole.user,
            }
        )
        await seed_default_stages(self.db, user.id)
        logger.info(f"Registered user {user.id}")

        return AuthResponse(
            message="User created successfully",
            token=create_access_token(user.id, user.email, user.role),
            user=UserResponse.from_prisma(user),
        )

    async def login(self, email: str, password: str) -> AuthResponse:
        """
        Exchange credentials for a bearer token.

        Unknown emails and wrong passwords fail identically.
        """
        user = await self.db.user.find_unique(where={"email": email})
        if not user or not verify_password(password, user.passwordHash):
            raise InvalidCredentialsError()

        return AuthResponse(
            message="Login successful",
            token=create_access_token(user.id, user.email, user.role),
            user=UserResponse.from_prisma(user),
        )

    async def get_user(self, user_id: int) -> UserResponse:
        user = await self.db.user.find_unique(where={"id": user_id})
        if not user:
            raise UserNotFoundError()
        return UserResponse.from_prisma(user)

    async def update_profile(
        self, user_id: int, updates: ProfileUpdate
    ) -> UserResponse:
        data = update_data(updates, required=("firstName", "lastName", "email"))
        if not data:
            raise InvalidDataError("No valid fields to update")

        if "email" in data:
            owner = await self.db.user.find_unique(where={"email": data["email"]})
            if owner and owner.id != user_id:
                raise EmailInUseError()

        user = await self.db.user.update(where={"id": user_id}, data=data)  # type: ignore[arg-type]
        if not user:
            raise UserNotFoundError()
        return UserResponse.from_prisma(user)

    async def change_password(self, user_id: int, change: PasswordChange) -> None:
        """
        Replace the caller's password after verifying the current one.

        Raises:
            UserNotFoundError: The account no longer exists
            InvalidDataError: The current password does not match
        """
        user = await self.db.user.find_unique(where={"id": user_id})
        if not user:
            raise UserNotFoundError()
        if not verify_password(change.currentPassword, user.passwordHash):
            raise InvalidDataError("Current password is incorrect")

        await self.db.user.update(
            where={"id": user_id},
            data={"passwordHash": hash_password(change.newPassword)},
        )
        logger.info(f"User {user_id} changed their password")
