# apps/api/src/domains/notes/service.py
import logging
from typing import Any, Optional

from prisma import Prisma
from src.domains.notes.models import NoteKind, NoteResponse, NoteUpdate
from src.shared.exceptions import InvalidDataError, ResourceNotFoundError
from src.shared.permissions import AccessResolver, Action
from src.shared.responses import update_data

logger = logging.getLogger(__name__)

NOTE_INCLUDE = {"user": True}


class NoteService:
    """
    Notes inherit access from their parent contact or activity: anyone who
    can read the parent sees its notes, anyone who can write it may add
    one. Only a note's author may change or delete it, and only while
    they can still write the parent.
    """

    def __init__(self, db: Prisma, kind: NoteKind):
        self.db = db
        self.kind = kind

    def _notes(self, db: Prisma) -> Any:
        return getattr(db, self.kind.client_attr)

    async def list_notes(self, user_id: int, parent_id: int) -> list[NoteResponse]:
        await AccessResolver(self.db).require_access(
            user_id, self.kind.parent_type, parent_id, Action.READ
        )
        notes = await self._notes(self.db).find_many(
            where={self.kind.parent_field: parent_id},
            include=NOTE_INCLUDE,
            order={"createdAt": "desc"},
        )
        return [NoteResponse.from_prisma(note) for note in notes]

    async def create_note(
        self,
        user_id: int,
        parent_id: int,
        content: str,
        title: Optional[str] = None,
    ) -> NoteResponse:
        """
        Add a note to a parent the user may write.

        Raises:
            ResourceNotFoundError: Parent invisible to the user
            ForbiddenError: User only has view access to the parent
        """
        async with self.db.tx() as tx:
            await AccessResolver(tx).require_access(
                user_id, self.kind.parent_type, parent_id, Action.WRITE
            )
            note = await self._notes(tx).create(
                data={
                    self.kind.parent_field: parent_id,
                    "title": title,
                    "content": content,
                    "userId": user_id,
                },
                include=NOTE_INCLUDE,
            )
        logger.info(
            f"User {user_id} added note {note.id} to "
            f"{self.kind.parent_type.value} {parent_id}"
        )
        return NoteResponse.from_prisma(note)

    async def update_note(
        self, user_id: int, note_id: int, updates: NoteUpdate
    ) -> NoteResponse:
        data = update_data(updates, required=("content",))
        async with self.db.tx() as tx:
            await self._get_authored(tx, user_id, note_id)
            if not data:
                raise InvalidDataError("No valid fields to update")
            note = await self._notes(tx).update(
                where={"id": note_id}, data=data, include=NOTE_INCLUDE
            )
        return NoteResponse.from_prisma(note)

    async def delete_note(self, user_id: int, note_id: int) -> None:
        async with self.db.tx() as tx:
            await self._get_authored(tx, user_id, note_id)
            await self._notes(tx).delete(where={"id": note_id})
        logger.info(f"User {user_id} deleted note {note_id}")

    async def _get_authored(self, db: Prisma, user_id: int, note_id: int) -> Any:
        note = await self._notes(db).find_first(
            where={"id": note_id, "userId": user_id}
        )
        if not note:
            raise ResourceNotFoundError(self.kind.label)
        # A revoked or downgraded grant ends the author's hold on the note
        await AccessResolver(db).require_access(
            user_id,
            self.kind.parent_type,
            getattr(note, self.kind.parent_field),
            Action.WRITE,
        )
        return note
