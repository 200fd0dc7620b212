"""
Test fixtures for shares and the users on either side of them.
"""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from prisma.enums import ResourceType, SharePermission
from prisma.models import Share, User


def make_user(user_id: int, first: str, last: str) -> Mock:
    user = Mock(spec=User)
    user.id = user_id
    user.firstName = first
    user.lastName = last
    user.email = f"{first.lower()}@example.com"
    return user


@pytest.fixture
def mock_share() -> Mock:
    """User 1 granted user 2 view access to contact 5."""
    share = Mock(spec=Share)
    share.id = 7
    share.resourceType = ResourceType.contact
    share.resourceId = 5
    share.sharedById = 1
    share.sharedWithId = 2
    share.permission = SharePermission.view
    share.message = "Please take a look"
    share.contactId = 5
    share.dealId = None
    share.activityId = None
    share.contact = None
    share.deal = None
    share.activity = None
    share.sharedBy = make_user(1, "Olive", "Owner")
    share.sharedWith = make_user(2, "Gina", "Grantee")
    share.createdAt = datetime(2024, 2, 1, tzinfo=timezone.utc)
    share.updatedAt = datetime(2024, 2, 1, tzinfo=timezone.utc)
    return share
