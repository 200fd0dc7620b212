# apps/api/src/domains/contacts/routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from prisma.enums import ContactStatus, ResourceType

from prisma import Prisma
from src.core.database import get_db
from src.domains.auth.dependencies import get_current_user
from src.domains.auth.types import CurrentUser
from src.domains.contacts.models import (
    ContactCreate,
    ContactListResponse,
    ContactResponse,
    ContactUpdate,
    TagListResponse,
)
from src.domains.contacts.service import CONTACT_INCLUDE, ContactService
from src.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.shared.permissions import AccessDecision, Action, require_resource_access
from src.shared.responses import MessageResponse

router = APIRouter(prefix="/contacts", tags=["Contacts"])


@router.get("", response_model=ContactListResponse, operation_id="getContacts")
async def get_contacts(
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
    page: int = Query(1, description="Page number for pagination", ge=1),
    limit: int = Query(
        DEFAULT_PAGE_SIZE,
        description="Number of records per page",
        ge=1,
        le=MAX_PAGE_SIZE,
    ),
    search: Optional[str] = Query(
        None, description="Search in name, email, phone or tags"
    ),
    tags: Optional[List[str]] = Query(
        None, description="Only contacts with any of these tags"
    ),
    status: Optional[ContactStatus] = Query(
        None, description="Filter by contact status"
    ),
) -> ContactListResponse:
    """
    Get contacts owned by or shared with the current user
    """
    return await ContactService(db).list_contacts(
        current_user.id,
        page=page,
        limit=limit,
        search=search.strip() if search else None,
        tags=tags,
        status=status,
    )


@router.get("/tags/all", response_model=TagListResponse, operation_id="getContactTags")
async def get_contact_tags(
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> TagListResponse:
    tags = await ContactService(db).get_all_tags(current_user.id)
    return TagListResponse(tags=tags)


@router.get(
    "/{resource_id}", response_model=ContactResponse, operation_id="getContact"
)
async def get_contact(
    access: AccessDecision = Depends(
        require_resource_access(
            ResourceType.contact, Action.READ, include=CONTACT_INCLUDE
        )
    ),
) -> ContactResponse:
    return ContactResponse.from_decision(access)


@router.post(
    "",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createContact",
)
async def create_contact(
    contact_data: ContactCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> ContactResponse:
    return await ContactService(db).create_contact(current_user.id, contact_data)


@router.put(
    "/{resource_id}", response_model=ContactResponse, operation_id="updateContact"
)
async def update_contact(
    resource_id: int,
    updates: ContactUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> ContactResponse:
    """
    Update a contact. Requires ownership or an edit grant.
    """
    return await ContactService(db).update_contact(
        current_user.id, resource_id, updates
    )


@router.delete(
    "/{resource_id}", response_model=MessageResponse, operation_id="deleteContact"
)
async def delete_contact(
    resource_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> MessageResponse:
    """
    Delete a contact. Only the owner may delete.
    """
    await ContactService(db).delete_contact(current_user.id, resource_id)
    return MessageResponse(message="Contact deleted successfully")
