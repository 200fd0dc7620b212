# apps/api/src/domains/organizations/service.py
import logging
from typing import Any, Optional

from prisma.enums import ResourceType
from prisma.models import Organization

from prisma import Prisma
from src.domains.contacts.models import ContactResponse
from src.domains.contacts.service import CONTACT_INCLUDE
from src.domains.deals.models import DealResponse
from src.domains.deals.service import DEAL_INCLUDE
from src.domains.organizations.models import (
    OrganizationCreate,
    OrganizationDetailResponse,
    OrganizationListResponse,
    OrganizationResponse,
    OrganizationSummary,
    OrganizationUpdate,
)
from src.shared.exceptions import (
    ForbiddenError,
    InvalidDataError,
    ResourceNotFoundError,
)
from src.shared.pagination import build_pagination, page_offset
from src.shared.permissions import AccessResolver
from src.shared.responses import update_data

logger = logging.getLogger(__name__)


class OrganizationService:
    """
    Organizations form a directory shared by every user. Anyone may list and
    read them; only the user who created one may change or delete it.
    """

    def __init__(self, db: Prisma):
        self.db = db

    async def list_organizations(
        self, page: int = 1, limit: int = 20, search: Optional[str] = None
    ) -> OrganizationListResponse:
        where: dict[str, Any] = {}
        if search:
            where["OR"] = [
                {"name": {"contains": search, "mode": "insensitive"}},
                {"industry": {"contains": search, "mode": "insensitive"}},
                {"email": {"contains": search, "mode": "insensitive"}},
                {"website": {"contains": search, "mode": "insensitive"}},
            ]

        organizations = await self.db.organization.find_many(
            where=where,  # type: ignore[arg-type]
            skip=page_offset(page, limit),
            take=limit,
            order={"createdAt": "desc"},
        )
        total = await self.db.organization.count(where=where)  # type: ignore[arg-type]

        ids = [organization.id for organization in organizations]
        contact_counts = await self._count_by_organization(self.db.contact, ids)
        deal_counts = await self._count_by_organization(self.db.deal, ids)

        summaries = [
            OrganizationSummary(
                **OrganizationResponse.from_prisma(organization).model_dump(),
                contactCount=contact_counts.get(organization.id, 0),
                dealCount=deal_counts.get(organization.id, 0),
            )
            for organization in organizations
        ]

        return OrganizationListResponse(
            organizations=summaries,
            pagination=build_pagination(page, limit, total),
        )

    async def get_organization(
        self, user_id: int, organization_id: int
    ) -> OrganizationDetailResponse:
        organization = await self._get_or_404(self.db, organization_id)

        contacts = await self.db.contact.find_many(
            where={"organizationId": organization_id, "userId": user_id},
            include=CONTACT_INCLUDE,
            order={"createdAt": "desc"},
        )
        deals = await self.db.deal.find_many(
            where={"organizationId": organization_id, "userId": user_id},
            include=DEAL_INCLUDE,
            order={"createdAt": "desc"},
        )

        return OrganizationDetailResponse(
            **OrganizationResponse.from_prisma(organization).model_dump(),
            contacts=[
                ContactResponse.from_decision(
                    AccessResolver.owned(ResourceType.contact, contact)
                )
                for contact in contacts
            ],
            deals=[DealResponse.from_prisma(deal) for deal in deals],
        )

    async def create_organization(
        self, user_id: int, organization_data: OrganizationCreate
    ) -> OrganizationResponse:
        organization = await self.db.organization.create(
            data={**organization_data.model_dump(), "userId": user_id}  # type: ignore[typeddict-item]
        )
        logger.info(f"User {user_id} created organization {organization.id}")
        return OrganizationResponse.from_prisma(organization)

    async def update_organization(
        self, user_id: int, organization_id: int, updates: OrganizationUpdate
    ) -> OrganizationResponse:
        """
        Raises:
            ResourceNotFoundError: No such organization
            ForbiddenError: The caller did not create it
            InvalidDataError: Empty update
        """
        data = update_data(updates, required=("name",))
        async with self.db.tx() as tx:
            await self._require_creator(tx, user_id, organization_id)
            if not data:
                raise InvalidDataError("No valid fields to update")
            organization = await tx.organization.update(
                where={"id": organization_id}, data=data  # type: ignore[arg-type]
            )
        return OrganizationResponse.from_prisma(organization)  # type: ignore[arg-type]

    async def delete_organization(self, user_id: int, organization_id: int) -> None:
        async with self.db.tx() as tx:
            await self._require_creator(tx, user_id, organization_id)
            await tx.organization.delete(where={"id": organization_id})
        logger.info(f"User {user_id} deleted organization {organization_id}")

    @staticmethod
    async def _count_by_organization(delegate: Any, ids: list[int]) -> dict[int, int]:
        """Row counts per organization for one page, in a single grouped query."""
        if not ids:
            return {}
        groups = await delegate.group_by(
            ["organizationId"],
            where={"organizationId": {"in": ids}},
            count=True,
        )
        return {
            group["organizationId"]: group["_count"]["_all"] for group in groups
        }

    async def _get_or_404(self, db: Prisma, organization_id: int) -> Organization:
        organization = await db.organization.find_unique(where={"id": organization_id})
        if not organization:
            raise ResourceNotFoundError("Organization")
        return organization

    async def _require_creator(
        self, db: Prisma, user_id: int, organization_id: int
    ) -> Organization:
        # Everyone can see the directory, so a non-creator gets 403 rather than 404
        organization = await self._get_or_404(db, organization_id)
        if organization.userId != user_id:
            raise ForbiddenError(
                "Only the user who created this organization can change it"
            )
        return organization
