"""
Tests for contact routes in src/domains/contacts/routes.py
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest
from prisma.enums import ResourceType, SharePermission

from src.domains.auth.types import CurrentUser
from src.domains.contacts.models import ContactListResponse
from src.domains.contacts.routes import (
    delete_contact,
    get_contact,
    get_contact_tags,
    get_contacts,
)
from src.shared.pagination import build_pagination
from src.shared.permissions import AccessDecision


class TestContactRoutes:
    @pytest.mark.asyncio
    async def test_get_contacts_trims_search(self, current_user: CurrentUser):
        expected = ContactListResponse(
            contacts=[], pagination=build_pagination(1, 20, 0)
        )
        with patch("src.domains.contacts.routes.ContactService") as mock_service_class:
            mock_service = mock_service_class.return_value
            mock_service.list_contacts = AsyncMock(return_value=expected)

            # Act
            result = await get_contacts(
                current_user=current_user,
                db=Mock(),
                page=2,
                limit=5,
                search="  ada ",
                tags=["vip"],
                status=None,
            )

            # Assert
            assert result is expected
            mock_service.list_contacts.assert_awaited_once_with(
                current_user.id,
                page=2,
                limit=5,
                search="ada",
                tags=["vip"],
                status=None,
            )

    @pytest.mark.asyncio
    async def test_get_contact_renders_shared_decision(self, shared_contact: Mock):
        decision = AccessDecision(
            resource=shared_contact,
            resource_type=ResourceType.contact,
            is_owner=False,
            permission=SharePermission.view,
        )

        result = await get_contact(access=decision)

        assert result.id == shared_contact.id
        assert result.organizationName == "Acme Corp"
        assert result.isSharedWithMe is True
        assert result.permission == SharePermission.view

    @pytest.mark.asyncio
    async def test_get_contact_tags(self, current_user: CurrentUser):
        with patch("src.domains.contacts.routes.ContactService") as mock_service_class:
            mock_service_class.return_value.get_all_tags = AsyncMock(
                return_value=["lead", "vip"]
            )

            result = await get_contact_tags(current_user=current_user, db=Mock())

            assert result.tags == ["lead", "vip"]

    @pytest.mark.asyncio
    async def test_delete_contact(self, current_user: CurrentUser):
        with patch("src.domains.contacts.routes.ContactService") as mock_service_class:
            mock_service = mock_service_class.return_value
            mock_service.delete_contact = AsyncMock(return_value=None)

            result = await delete_contact(5, current_user=current_user, db=Mock())

            assert result.message == "Contact deleted successfully"
            mock_service.delete_contact.assert_awaited_once_with(current_user.id, 5)
