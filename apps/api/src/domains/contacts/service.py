# apps/api/src/domains/contacts/service.py
import logging
from typing import Any, List, Optional

from prisma.enums import ContactStatus, ResourceType

from prisma import Prisma
from src.domains.contacts.models import (
    ContactCreate,
    ContactListResponse,
    ContactResponse,
    ContactUpdate,
)
from src.shared.exceptions import InvalidDataError
from src.shared.pagination import build_pagination
from src.shared.permissions import AccessResolver, Action
from src.shared.responses import update_data

logger = logging.getLogger(__name__)

CONTACT_INCLUDE = {"organization": True}
REQUIRED_FIELDS = ("firstName", "lastName", "tags", "status")


async def ensure_organization_exists(db: Prisma, organization_id: Optional[int]) -> None:
    """Organizations are a shared directory, so any existing one may be linked."""
    if organization_id is None:
        return
    organization = await db.organization.find_unique(where={"id": organization_id})
    if not organization:
        raise InvalidDataError("Invalid organization ID")


class ContactService:
    def __init__(self, db: Prisma):
        self.db = db

    async def list_contacts(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        tags: Optional[List[str]] = None,
        status: Optional[ContactStatus] = None,
    ) -> ContactListResponse:
        """
        Get contacts the user owns or has been granted, newest first

        Args:
            user_id: The caller
            page: Page number (1-based)
            limit: Number of records per page
            search: Search in names, email, phone or tags
            tags: Only contacts carrying any of these tags
            status: Filter by contact status

        Returns:
            ContactListResponse with contacts and pagination metadata
        """
        filters: list[dict[str, Any]] = []
        if search:
            filters.append(
                {
                    "OR": [
                        {"firstName": {"contains": search, "mode": "insensitive"}},
                        {"lastName": {"contains": search, "mode": "insensitive"}},
                        {"email": {"contains": search, "mode": "insensitive"}},
                        {"phone": {"contains": search, "mode": "insensitive"}},
                        {"tags": {"has": search}},
                    ]
                }
            )
        if tags:
            filters.append({"tags": {"hasSome": tags}})
        if status:
            filters.append({"status": status})

        decisions, total = await AccessResolver(self.db).list_visible(
            user_id,
            ResourceType.contact,
            page,
            limit,
            where={"AND": filters} if filters else None,
            include=CONTACT_INCLUDE,
        )
        return ContactListResponse(
            contacts=[ContactResponse.from_decision(d) for d in decisions],
            pagination=build_pagination(page, limit, total),
        )

    async def create_contact(
        self, user_id: int, contact_data: ContactCreate
    ) -> ContactResponse:
        await ensure_organization_exists(self.db, contact_data.organizationId)

        contact = await self.db.contact.create(
            data={**contact_data.model_dump(), "userId": user_id},  # type: ignore[typeddict-item]
            include=CONTACT_INCLUDE,
        )
        logger.info(f"User {user_id} created contact {contact.id}")
        return ContactResponse.from_decision(
            AccessResolver.owned(ResourceType.contact, contact)
        )

    async def update_contact(
        self, user_id: int, contact_id: int, updates: ContactUpdate
    ) -> ContactResponse:
        """
        Update a contact the user owns or holds an edit grant on.

        Raises:
            ResourceNotFoundError: Contact invisible to the user
            ForbiddenError: User only has view access
            InvalidDataError: Empty update or unknown organization
        """
        data = update_data(updates, required=REQUIRED_FIELDS)
        async with self.db.tx() as tx:
            decision = await AccessResolver(tx).require_access(
                user_id, ResourceType.contact, contact_id, Action.WRITE
            )
            if not data:
                raise InvalidDataError("No valid fields to update")
            await ensure_organization_exists(tx, data.get("organizationId"))

            decision.resource = await tx.contact.update(
                where={"id": contact_id},
                data=data,  # type: ignore[arg-type]
                include=CONTACT_INCLUDE,
            )
        return ContactResponse.from_decision(decision)

    async def delete_contact(self, user_id: int, contact_id: int) -> None:
        """
        Delete a contact. Only the owner may; grants on it go with it.
        """
        async with self.db.tx() as tx:
            await AccessResolver(tx).require_access(
                user_id, ResourceType.contact, contact_id, Action.DELETE
            )
            await tx.contact.delete(where={"id": contact_id})
        logger.info(f"User {user_id} deleted contact {contact_id}")

    async def get_all_tags(self, user_id: int) -> List[str]:
        """Distinct tags across the user's own contacts, sorted."""
        contacts = await self.db.contact.find_many(where={"userId": user_id})
        tags = {tag for contact in contacts for tag in (contact.tags or [])}
        return sorted(tags)
