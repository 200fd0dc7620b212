# apps/api/src/domains/notes/routes.py
from fastapi import APIRouter, Depends, status

from prisma import Prisma
from src.core.database import get_db
from src.domains.auth.dependencies import get_current_user
from src.domains.auth.types import CurrentUser
from src.domains.notes.models import (
    ACTIVITY_NOTES,
    CONTACT_NOTES,
    ActivityNoteCreate,
    ContactNoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
)
from src.domains.notes.service import NoteService
from src.shared.responses import MessageResponse

contact_notes_router = APIRouter(prefix="/contact-notes", tags=["Contact Notes"])
activity_notes_router = APIRouter(prefix="/activity-notes", tags=["Activity Notes"])


# Contact notes


@contact_notes_router.get(
    "/contact/{contact_id}",
    response_model=NoteListResponse,
    operation_id="getContactNotes",
)
async def get_contact_notes(
    contact_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> NoteListResponse:
    notes = await NoteService(db, CONTACT_NOTES).list_notes(current_user.id, contact_id)
    return NoteListResponse(notes=notes)


@contact_notes_router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createContactNote",
)
async def create_contact_note(
    note_data: ContactNoteCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> NoteResponse:
    return await NoteService(db, CONTACT_NOTES).create_note(
        current_user.id, note_data.contactId, note_data.content, note_data.title
    )


@contact_notes_router.put(
    "/{note_id}", response_model=NoteResponse, operation_id="updateContactNote"
)
async def update_contact_note(
    note_id: int,
    updates: NoteUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> NoteResponse:
    return await NoteService(db, CONTACT_NOTES).update_note(
        current_user.id, note_id, updates
    )


@contact_notes_router.delete(
    "/{note_id}", response_model=MessageResponse, operation_id="deleteContactNote"
)
async def delete_contact_note(
    note_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> MessageResponse:
    await NoteService(db, CONTACT_NOTES).delete_note(current_user.id, note_id)
    return MessageResponse(message="Note deleted successfully")


# Activity notes


@activity_notes_router.get(
    "/activity/{activity_id}",
    response_model=NoteListResponse,
    operation_id="getActivityNotes",
)
async def get_activity_notes(
    activity_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> NoteListResponse:
    notes = await NoteService(db, ACTIVITY_NOTES).list_notes(
        current_user.id, activity_id
    )
    return NoteListResponse(notes=notes)


@activity_notes_router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createActivityNote",
)
async def create_activity_note(
    note_data: ActivityNoteCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> NoteResponse:
    return await NoteService(db, ACTIVITY_NOTES).create_note(
        current_user.id, note_data.activityId, note_data.content, note_data.title
    )


@activity_notes_router.put(
    "/{note_id}", response_model=NoteResponse, operation_id="updateActivityNote"
)
async def update_activity_note(
    note_id: int,
    updates: NoteUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> NoteResponse:
    return await NoteService(db, ACTIVITY_NOTES).update_note(
        current_user.id, note_id, updates
    )


@activity_notes_router.delete(
    "/{note_id}", response_model=MessageResponse, operation_id="deleteActivityNote"
)
async def delete_activity_note(
    note_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Prisma = Depends(get_db),
) -> MessageResponse:
    await NoteService(db, ACTIVITY_NOTES).delete_note(current_user.id, note_id)
    return MessageResponse(message="Note deleted successfully")
