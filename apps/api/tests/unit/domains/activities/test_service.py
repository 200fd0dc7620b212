"""
Tests for ActivityService in src/domains/activities/service.py
"""

from datetime import timedelta

import pytest
from prisma.enums import ActivityType, ResourceType, SharePermission

from src.domains.activities.models import ActivityCreate, ActivityUpdate
from src.domains.activities.service import ActivityService, start_of_today
from src.shared.exceptions import (
    ForbiddenError,
    InvalidDataError,
    ResourceNotFoundError,
)
from src.shared.permissions import AccessResolver
from tests.helpers.fake_prisma import FakePrisma

OWNER, GRANTEE = 1, 2


@pytest.fixture
def crm(fake_db: FakePrisma) -> FakePrisma:
    for user_id in (OWNER, GRANTEE):
        fake_db.insert(
            "user",
            id=user_id,
            email=f"user{user_id}@example.com",
            passwordHash="hash",
            firstName="User",
            lastName=str(user_id),
        )
    today = start_of_today()
    fake_db.insert("deal", title="Renewal", userId=OWNER)
    fake_db.insert(
        "activity",
        type="call",
        subject="Kickoff call",
        dueDate=today + timedelta(days=2),
        dealId=1,
        userId=OWNER,
    )
    fake_db.insert(
        "activity",
        type="email",
        subject="Send proposal",
        dueDate=today + timedelta(days=1),
        userId=OWNER,
    )
    fake_db.insert("activity", type="task", subject="Someday", userId=OWNER)
    fake_db.insert(
        "activity",
        type="meeting",
        subject="Old meeting",
        dueDate=today - timedelta(days=3),
        userId=OWNER,
    )
    fake_db.insert(
        "activity",
        type="call",
        subject="Done call",
        completed=True,
        userId=OWNER,
    )
    return fake_db


class TestListActivities:
    @pytest.mark.asyncio
    async def test_due_date_order_with_undated_last(self, crm: FakePrisma):
        response = await ActivityService(crm).list_activities(OWNER, completed=False)

        assert [a.subject for a in response.activities] == [
            "Old meeting",
            "Send proposal",
            "Kickoff call",
            "Someday",
        ]

    @pytest.mark.asyncio
    async def test_filters(self, crm: FakePrisma):
        service = ActivityService(crm)

        calls = await service.list_activities(OWNER, activity_type=ActivityType.call)
        for_deal = await service.list_activities(OWNER, deal_id=1)
        searched = await service.list_activities(OWNER, search="PROPOSAL")

        assert {a.subject for a in calls.activities} == {"Kickoff call", "Done call"}
        assert [a.dealTitle for a in for_deal.activities] == ["Renewal"]
        assert [a.subject for a in searched.activities] == ["Send proposal"]

    @pytest.mark.asyncio
    async def test_grantee_sees_only_shared(self, crm: FakePrisma):
        await AccessResolver(crm).create_share(
            OWNER, ResourceType.activity, 2, GRANTEE
        )

        response = await ActivityService(crm).list_activities(GRANTEE)

        assert [a.subject for a in response.activities] == ["Send proposal"]
        assert response.activities[0].isSharedWithMe is True


class TestUpcoming:
    @pytest.mark.asyncio
    async def test_open_activities_from_today(self, crm: FakePrisma):
        upcoming = await ActivityService(crm).get_upcoming(OWNER)

        assert [a.subject for a in upcoming] == [
            "Send proposal",
            "Kickoff call",
            "Someday",
        ]

    @pytest.mark.asyncio
    async def test_shared_activities_not_included(self, crm: FakePrisma):
        await AccessResolver(crm).create_share(
            OWNER, ResourceType.activity, 2, GRANTEE
        )

        assert await ActivityService(crm).get_upcoming(GRANTEE) == []


class TestCreateActivity:
    @pytest.mark.asyncio
    async def test_links_visible_deal(self, crm: FakePrisma):
        response = await ActivityService(crm).create_activity(
            OWNER, ActivityCreate(type="note", subject="Recap", dealId=1)
        )

        assert response.dealTitle == "Renewal"
        assert response.completed is False

    @pytest.mark.asyncio
    async def test_rejects_invisible_deal(self, crm: FakePrisma):
        with pytest.raises(InvalidDataError) as exc_info:
            await ActivityService(crm).create_activity(
                GRANTEE, ActivityCreate(type="note", subject="Recap", dealId=1)
            )

        assert exc_info.value.detail == "Invalid deal ID"


class TestToggleComplete:
    @pytest.mark.asyncio
    async def test_owner_toggles_back_and_forth(self, crm: FakePrisma):
        service = ActivityService(crm)

        first = await service.toggle_complete(OWNER, 1)
        second = await service.toggle_complete(OWNER, 1)

        assert first.completed is True
        assert second.completed is False

    @pytest.mark.asyncio
    async def test_view_grantee_forbidden(self, crm: FakePrisma):
        await AccessResolver(crm).create_share(
            OWNER, ResourceType.activity, 1, GRANTEE, SharePermission.view
        )

        with pytest.raises(ForbiddenError):
            await ActivityService(crm).toggle_complete(GRANTEE, 1)

    @pytest.mark.asyncio
    async def test_edit_grantee_allowed(self, crm: FakePrisma):
        await AccessResolver(crm).create_share(
            OWNER, ResourceType.activity, 1, GRANTEE, SharePermission.edit
        )

        response = await ActivityService(crm).toggle_complete(GRANTEE, 1)

        assert response.completed is True
        assert response.permission == SharePermission.edit


class TestUpdateAndDelete:
    @pytest.mark.asyncio
    async def test_update_subject(self, crm: FakePrisma):
        response = await ActivityService(crm).update_activity(
            OWNER, 3, ActivityUpdate(subject="Next quarter", description=None)
        )

        assert response.subject == "Next quarter"

    @pytest.mark.asyncio
    async def test_stranger_cannot_delete(self, crm: FakePrisma):
        with pytest.raises(ResourceNotFoundError):
            await ActivityService(crm).delete_activity(GRANTEE, 1)

    @pytest.mark.asyncio
    async def test_owner_deletes(self, crm: FakePrisma):
        await ActivityService(crm).delete_activity(OWNER, 1)

        assert await crm.activity.count(where={"id": 1}) == 0
