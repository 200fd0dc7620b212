"""
Tests for admin routes: role enforcement over HTTP and route delegation.
"""

from typing import Iterator
from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient
from prisma.enums import UserRole

from src.core.database import get_db
from src.domains.admin.models import SettingResponse, SettingUpdate
from src.domains.admin.routes import delete_user, update_setting
from src.domains.auth.security import create_access_token
from src.domains.auth.types import CurrentUser
from src.main import app
from tests.helpers.fake_prisma import FakePrisma


@pytest.fixture
def api(fake_db: FakePrisma) -> Iterator[TestClient]:
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
    app.dependency_overrides[get_db] = lambda: fake_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def bearer(user_id: int, email: str, role: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id, email, role)}"}


class TestAdminHttp:
    def test_regular_user_forbidden(self, api: TestClient):
        response = api.get(
            "/api/admin/users", headers=bearer(2, "user@example.com", "user")
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"

    def test_admin_lists_users(self, api: TestClient):
        response = api.get(
            "/api/admin/users", headers=bearer(1, "admin@example.com", "admin")
        )

        assert response.status_code == 200
        assert response.json()["pagination"]["total"] == 2

    def test_role_claim_alone_does_not_grant_admin(self, api: TestClient):
        """The stored role wins over whatever the token claims."""
        response = api.get(
            "/api/admin/users/stats/overview",
            headers=bearer(2, "user@example.com", "admin"),
        )

        assert response.status_code == 403

    def test_stats_route_not_shadowed_by_user_id(self, api: TestClient):
        response = api.get(
            "/api/admin/users/stats/overview",
            headers=bearer(1, "admin@example.com", "admin"),
        )

        assert response.status_code == 200
        assert response.json()["admins"] == 1


class TestAdminRoutes:
    @pytest.mark.asyncio
    async def test_delete_user(self, admin_user: CurrentUser):
        with patch("src.domains.admin.routes.AdminService") as mock_service_class:
            mock_service = mock_service_class.return_value
            mock_service.delete_user = AsyncMock(return_value=None)

            # Act
            result = await delete_user(5, admin=admin_user, db=Mock())

            # Assert
            assert result.message == "User deleted successfully"
            mock_service.delete_user.assert_awaited_once_with(admin_user.id, 5)

    @pytest.mark.asyncio
    async def test_update_setting(self, admin_user: CurrentUser):
        expected = SettingResponse(key="max_users", value="10")
        with patch("src.domains.admin.routes.AdminService") as mock_service_class:
            mock_service = mock_service_class.return_value
            mock_service.update_setting = AsyncMock(return_value=expected)

            result = await update_setting(
                "max_users", SettingUpdate(value="10"), admin=admin_user, db=Mock()
            )

            assert result is expected
            mock_service.update_setting.assert_awaited_once_with(
                admin_user.id, "max_users", "10"
            )
