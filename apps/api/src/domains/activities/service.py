# apps/api/src/domains/activities/service.py
import logging
from datetime import datetime, time, timezone
from typing import Any, List, Optional

from prisma.enums import ActivityType, ResourceType

from prisma import Prisma
from src.domains.activities.models import (
    ActivityCreate,
    ActivityListResponse,
    ActivityResponse,
    ActivityUpdate,
)
from src.domains.contacts.service import ensure_organization_exists
from src.domains.deals.service import ensure_contact_readable
from src.shared.exceptions import InvalidDataError
from src.shared.pagination import build_pagination
from src.shared.permissions import AccessResolver, Action
from src.shared.responses import update_data

logger = logging.getLogger(__name__)

ACTIVITY_INCLUDE = {"contact": True, "organization": True, "deal": True}
ACTIVITY_ORDER = [{"dueDate": "asc"}, {"createdAt": "desc"}]
REQUIRED_FIELDS = ("type", "subject", "completed")
UPCOMING_LIMIT = 10


async def ensure_deal_readable(
    db: Prisma, deal_id: Optional[int], user_id: int
) -> None:
    if deal_id is None:
        return
    if not await AccessResolver(db).can_read(user_id, ResourceType.deal, deal_id):
        raise InvalidDataError("Invalid deal ID")


def start_of_today() -> datetime:
    today = datetime.now(timezone.utc).date()
    return datetime.combine(today, time.min, tzinfo=timezone.utc)


class ActivityService:
    def __init__(self, db: Prisma):
        self.db = db

    async def list_activities(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        activity_type: Optional[ActivityType] = None,
        completed: Optional[bool] = None,
        contact_id: Optional[int] = None,
        organization_id: Optional[int] = None,
        deal_id: Optional[int] = None,
    ) -> ActivityListResponse:
        """
        Get activities the user owns or has been granted

        Activities are ordered by due date, undated ones last, then newest
        first.

        Returns:
            ActivityListResponse with activities and pagination metadata
        """
        filters: list[dict[str, Any]] = []
        if search:
            filters.append(
                {
                    "OR": [
                        {"subject": {"contains": search, "mode": "insensitive"}},
                        {"description": {"contains": search, "mode": "insensitive"}},
                    ]
                }
            )
        if activity_type:
            filters.append({"type": activity_type})
        if completed is not None:
            filters.append({"completed": completed})
        if contact_id:
            filters.append({"contactId": contact_id})
        if organization_id:
            filters.append({"organizationId": organization_id})
        if deal_id:
            filters.append({"dealId": deal_id})

        decisions, total = await AccessResolver(self.db).list_visible(
            user_id,
            ResourceType.activity,
            page,
            limit,
            where={"AND": filters} if filters else None,
            order=ACTIVITY_ORDER,
            include=ACTIVITY_INCLUDE,
        )
        return ActivityListResponse(
            activities=[ActivityResponse.from_decision(d) for d in decisions],
            pagination=build_pagination(page, limit, total),
        )

    async def get_upcoming(self, user_id: int) -> List[ActivityResponse]:
        """The user's own open activities due today or later, or undated."""
        activities = await self.db.activity.find_many(
            where={
                "userId": user_id,
                "completed": False,
                "OR": [{"dueDate": None}, {"dueDate": {"gte": start_of_today()}}],
            },
            include=ACTIVITY_INCLUDE,
            order=ACTIVITY_ORDER,  # type: ignore[arg-type]
            take=UPCOMING_LIMIT,
        )
        return [ActivityResponse.from_prisma(activity) for activity in activities]

    async def create_activity(
        self, user_id: int, activity_data: ActivityCreate
    ) -> ActivityResponse:
        await ensure_contact_readable(self.db, activity_data.contactId, user_id)
        await ensure_organization_exists(self.db, activity_data.organizationId)
        await ensure_deal_readable(self.db, activity_data.dealId, user_id)

        activity = await self.db.activity.create(
            data={**activity_data.model_dump(), "userId": user_id},  # type: ignore[typeddict-item]
            include=ACTIVITY_INCLUDE,
        )
        logger.info(f"User {user_id} created activity {activity.id}")
        return ActivityResponse.from_decision(
            AccessResolver.owned(ResourceType.activity, activity)
        )

    async def update_activity(
        self, user_id: int, activity_id: int, updates: ActivityUpdate
    ) -> ActivityResponse:
        """
        Update an activity the user owns or holds an edit grant on.

        Raises:
            ResourceNotFoundError: Activity invisible to the user
            ForbiddenError: User only has view access
            InvalidDataError: Empty update or invalid reference
        """
        data = update_data(updates, required=REQUIRED_FIELDS)
        async with self.db.tx() as tx:
            decision = await AccessResolver(tx).require_access(
                user_id, ResourceType.activity, activity_id, Action.WRITE
            )
            if not data:
                raise InvalidDataError("No valid fields to update")
            await ensure_contact_readable(tx, data.get("contactId"), user_id)
            await ensure_organization_exists(tx, data.get("organizationId"))
            await ensure_deal_readable(tx, data.get("dealId"), user_id)

            decision.resource = await tx.activity.update(
                where={"id": activity_id},
                data=data,  # type: ignore[arg-type]
                include=ACTIVITY_INCLUDE,
            )
        return ActivityResponse.from_decision(decision)

    async def toggle_complete(
        self, user_id: int, activity_id: int
    ) -> ActivityResponse:
        async with self.db.tx() as tx:
            decision = await AccessResolver(tx).require_access(
                user_id, ResourceType.activity, activity_id, Action.WRITE
            )
            decision.resource = await tx.activity.update(
                where={"id": activity_id},
                data={"completed": not decision.resource.completed},
                include=ACTIVITY_INCLUDE,
            )
        return ActivityResponse.from_decision(decision)

    async def delete_activity(self, user_id: int, activity_id: int) -> None:
        async with self.db.tx() as tx:
            await AccessResolver(tx).require_access(
                user_id, ResourceType.activity, activity_id, Action.DELETE
            )
            await tx.activity.delete(where={"id": activity_id})
        logger.info(f"User {user_id} deleted activity {activity_id}")
