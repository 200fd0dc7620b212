"""
Tests for AdminService in src/domains/admin/service.py
"""

from unittest.mock import Mock

import pytest
from prisma.enums import UserRole
from pydantic import ValidationError

from src.domains.admin.models import AdminUserCreate, AdminUserUpdate
from src.domains.admin.service import AdminService, validate_setting_value
from src.domains.auth.security import verify_password
from src.shared.exceptions import (
    EmailInUseError,
    InvalidDataError,
    SettingNotFoundError,
    UserNotFoundError,
)
from tests.helpers.fake_prisma import FakePrisma

ADMIN, USER = 1, 2


@pytest.fixture
def crm(fake_db: FakePrisma) -> FakePrisma:
    fake_db.insert(
        "user",
        email="admin@example.com",
        passwordHash="hash",
        firstName="Ada",
        lastName="Admin",
        role=UserRole.admin,
    )
    fake_db.insert(
        "user",
        email="user@example.com",
        passwordHash="hash",
        firstName="Uma",
        lastName="User",
    )
    fake_db.insert("contact", firstName="C", lastName="One", userId=USER)
    fake_db.insert("systemsetting", key="registration_enabled", value="true")
    fake_db.insert("systemsetting", key="max_users", value="0")
    return fake_db


class TestValidateSettingValue:
    @pytest.mark.parametrize(
        "key,value",
        [
            ("registration_enabled", "true"),
            ("registration_enabled", "false"),
            ("max_users", "10"),
            ("app_name", "anything"),
        ],
    )
    def test_accepts(self, key, value):
        validate_setting_value(key, value)

    @pytest.mark.parametrize(
        "key,value",
        [("registration_enabled", "yes"), ("max_users", "-1"), ("max_users", "x")],
    )
    def test_rejects(self, key, value):
        with pytest.raises(InvalidDataError):
            validate_setting_value(key, value)


class TestUserManagement:
    @pytest.mark.asyncio
    async def test_list_users_search_and_role(self, crm: FakePrisma):
        service = AdminService(crm)

        searched = await service.list_users(search="UMA")
        admins = await service.list_users(role=UserRole.admin)

        assert [u.email for u in searched.users] == ["user@example.com"]
        assert [u.email for u in admins.users] == ["admin@example.com"]

    @pytest.mark.asyncio
    async def test_create_user_seeds_pipeline(self, crm: FakePrisma):
        response = await AdminService(crm).create_user(
            ADMIN,
            AdminUserCreate(
                email="New@Example.com",
                password="secret123",
                firstName="New",
                lastName="Person",
            ),
        )

        assert response.email == "new@example.com"
        assert response.role == UserRole.user
        assert await crm.dealstage.count(where={"userId": response.id}) == 6

    @pytest.mark.asyncio
    async def test_create_user_duplicate_email(self, crm: FakePrisma):
        with pytest.raises(EmailInUseError):
            await AdminService(crm).create_user(
                ADMIN,
                AdminUserCreate(
                    email="user@example.com",
                    password="secret123",
                    firstName="X",
                    lastName="Y",
                ),
            )

    @pytest.mark.asyncio
    async def test_update_user_rehashes_password(self, crm: FakePrisma):
        await AdminService(crm).update_user(
            ADMIN, USER, AdminUserUpdate(password="another1", role=UserRole.admin)
        )

        user = await crm.user.find_unique(where={"id": USER})
        assert verify_password("another1", user.passwordHash)
        assert user.role == UserRole.admin
        assert not hasattr(user, "password")

    @pytest.mark.asyncio
    async def test_admin_cannot_demote_self(self, crm: FakePrisma):
        with pytest.raises(InvalidDataError) as exc_info:
            await AdminService(crm).update_user(
                ADMIN, ADMIN, AdminUserUpdate(role=UserRole.user)
            )

        assert exc_info.value.detail == "Cannot change your own admin role"

    @pytest.mark.asyncio
    async def test_update_email_in_use(self, crm: FakePrisma):
        with pytest.raises(EmailInUseError):
            await AdminService(crm).update_user(
                ADMIN, USER, AdminUserUpdate(email="admin@example.com")
            )

    @pytest.mark.asyncio
    async def test_update_missing_user(self, crm: FakePrisma):
        with pytest.raises(UserNotFoundError):
            await AdminService(crm).update_user(
                ADMIN, 404, AdminUserUpdate(firstName="X")
            )

    @pytest.mark.asyncio
    async def test_admin_cannot_delete_self(self, crm: FakePrisma):
        with pytest.raises(InvalidDataError) as exc_info:
            await AdminService(crm).delete_user(ADMIN, ADMIN)

        assert exc_info.value.detail == "Cannot delete your own account"

    @pytest.mark.asyncio
    async def test_delete_user_cascades(self, crm: FakePrisma):
        await AdminService(crm).delete_user(ADMIN, USER)

        assert await crm.user.count() == 1
        assert await crm.contact.count() == 0

    @pytest.mark.asyncio
    async def test_stats(self, crm: FakePrisma):
        stats = await AdminService(crm).get_user_stats()

        assert stats.total == 2
        assert stats.admins == 1
        assert stats.regularUsers == 1

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError):
            AdminUserCreate(
                email="a@example.com", password="123", firstName="A", lastName="B"
            )


class TestSystemSettings:
    @pytest.mark.asyncio
    async def test_get_settings(self, crm: FakePrisma):
        response = await AdminService(crm).get_settings()

        assert set(response.settings) == {"registration_enabled", "max_users"}
        assert response.settings["max_users"].value == "0"

    @pytest.mark.asyncio
    async def test_update_setting(self, crm: FakePrisma):
        response = await AdminService(crm).update_setting(
            ADMIN, "registration_enabled", "false"
        )

        assert response.value == "false"

    @pytest.mark.asyncio
    async def test_update_unknown_setting(self, crm: FakePrisma):
        with pytest.raises(SettingNotFoundError):
            await AdminService(crm).update_setting(ADMIN, "theme", "dark")

    @pytest.mark.asyncio
    async def test_invalid_value_rejected_before_lookup(self, mock_prisma: Mock):
        with pytest.raises(InvalidDataError):
            await AdminService(mock_prisma).update_setting(ADMIN, "max_users", "lots")

        mock_prisma.systemsetting.find_unique.assert_not_called()
