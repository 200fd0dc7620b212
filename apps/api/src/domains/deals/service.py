# apps/api/src/domains/deals/service.py
import logging
from typing import Any, List, Optional

from prisma.enums import ResourceType

from prisma import Prisma
from src.domains.contacts.service import ensure_organization_exists
from src.domains.deals.models import (
    DealCreate,
    DealListResponse,
    DealResponse,
    DealsByStageResponse,
    DealStageResponse,
    DealUpdate,
    StageDeals,
)
from src.shared.exceptions import InvalidDataError
from src.shared.pagination import build_pagination
from src.shared.permissions import AccessResolver, Action
from src.shared.responses import update_data

logger = logging.getLogger(__name__)

DEFAULT_STAGES = ["Lead", "Qualified", "Proposal", "Negotiation", "Won", "Lost"]

DEAL_INCLUDE = {"stage": True, "contact": True, "organization": True}
REQUIRED_FIELDS = ("title", "value", "currency", "probability")


async def seed_default_stages(db: Prisma, user_id: int) -> None:
    """Give a user the default pipeline unless they already have stages."""
    existing = await db.dealstage.count(where={"userId": user_id})
    if existing:
        return

    await db.dealstage.create_many(
        data=[
            {"name": name, "orderIndex": index, "userId": user_id}
            for index, name in enumerate(DEFAULT_STAGES, start=1)
        ]
    )
    logger.info(f"Created default deal stages for user {user_id}")


async def ensure_stage_belongs_to(
    db: Prisma, stage_id: Optional[int], owner_id: int
) -> None:
    if stage_id is None:
        return
    stage = await db.dealstage.find_first(where={"id": stage_id, "userId": owner_id})
    if not stage:
        raise InvalidDataError("Invalid stage ID")


async def ensure_contact_readable(
    db: Prisma, contact_id: Optional[int], user_id: int
) -> None:
    if contact_id is None:
        return
    if not await AccessResolver(db).can_read(user_id, ResourceType.contact, contact_id):
        raise InvalidDataError("Invalid contact ID")


class DealService:
    def __init__(self, db: Prisma):
        self.db = db

    async def get_stages(self, user_id: int) -> List[DealStageResponse]:
        stages = await self.db.dealstage.find_many(
            where={"userId": user_id}, order={"orderIndex": "asc"}
        )
        return [DealStageResponse.from_prisma(stage) for stage in stages]

    async def list_deals(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        stage_id: Optional[int] = None,
        organization_id: Optional[int] = None,
    ) -> DealListResponse:
        """
        Get deals the user owns or has been granted, newest first

        Args:
            user_id: The caller
            page: Page number (1-based)
            limit: Number of records per page
            search: Search in deal title or organization name
            stage_id: Filter by pipeline stage
            organization_id: Filter by organization

        Returns:
            DealListResponse with deals and pagination metadata
        """
        filters: list[dict[str, Any]] = []
        if search:
            filters.append(
                {
                    "OR": [
                        {"title": {"contains": search, "mode": "insensitive"}},
                        {
                            "organization": {
                                "is": {
                                    "name": {"contains": search, "mode": "insensitive"}
                                }
                            }
                        },
                    ]
                }
            )
        if stage_id:
            filters.append({"stageId": stage_id})
        if organization_id:
            filters.append({"organizationId": organization_id})

        decisions, total = await AccessResolver(self.db).list_visible(
            user_id,
            ResourceType.deal,
            page,
            limit,
            where={"AND": filters} if filters else None,
            include=DEAL_INCLUDE,
        )
        return DealListResponse(
            deals=[DealResponse.from_decision(d) for d in decisions],
            pagination=build_pagination(page, limit, total),
        )

    async def get_deals_by_stage(self, user_id: int) -> DealsByStageResponse:
        """
        The user's own deals grouped under their stages, for the pipeline board.
        """
        stages = await self.db.dealstage.find_many(
            where={"userId": user_id}, order={"orderIndex": "asc"}
        )
        deals = await self.db.deal.find_many(
            where={"userId": user_id},
            include=DEAL_INCLUDE,
            order={"createdAt": "desc"},
        )

        grouped = []
        for stage in stages:
            grouped.append(
                StageDeals(
                    stage=DealStageResponse.from_prisma(stage),
                    deals=[
                        DealResponse.from_prisma(deal)
                        for deal in deals
                        if deal.stageId == stage.id
                    ],
                )
            )
        return DealsByStageResponse(stages=grouped)

    async def create_deal(self, user_id: int, deal_data: DealCreate) -> DealResponse:
        await ensure_stage_belongs_to(self.db, deal_data.stageId, user_id)
        await ensure_contact_readable(self.db, deal_data.contactId, user_id)
        await ensure_organization_exists(self.db, deal_data.organizationId)

        deal = await self.db.deal.create(
            data={**deal_data.model_dump(), "userId": user_id},  # type: ignore[typeddict-item]
            include=DEAL_INCLUDE,
        )
        logger.info(f"User {user_id} created deal {deal.id}")
        return DealResponse.from_decision(AccessResolver.owned(ResourceType.deal, deal))

    async def update_deal(
        self, user_id: int, deal_id: int, updates: DealUpdate
    ) -> DealResponse:
        """
        Update a deal the user owns or holds an edit grant on.

        A new stage must come from the deal owner's pipeline.

        Raises:
            ResourceNotFoundError: Deal invisible to the user
            ForbiddenError: User only has view access
            InvalidDataError: Empty update or invalid reference
        """
        data = update_data(updates, required=REQUIRED_FIELDS)
        async with self.db.tx() as tx:
            decision = await AccessResolver(tx).require_access(
                user_id, ResourceType.deal, deal_id, Action.WRITE
            )
            if not data:
                raise InvalidDataError("No valid fields to update")
            await ensure_stage_belongs_to(
                tx, data.get("stageId"), decision.resource.userId
            )
            await ensure_contact_readable(tx, data.get("contactId"), user_id)
            await ensure_organization_exists(tx, data.get("organizationId"))

            decision.resource = await tx.deal.update(
                where={"id": deal_id},
                data=data,  # type: ignore[arg-type]
                include=DEAL_INCLUDE,
            )
        return DealResponse.from_decision(decision)

    async def delete_deal(self, user_id: int, deal_id: int) -> None:
        async with self.db.tx() as tx:
            await AccessResolver(tx).require_access(
                user_id, ResourceType.deal, deal_id, Action.DELETE
            )
            await tx.deal.delete(where={"id": deal_id})
        logger.info(f"User {user_id} deleted deal {deal_id}")
