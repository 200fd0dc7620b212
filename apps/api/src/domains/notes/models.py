# apps/api/src/domains/notes/models.py
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

from prisma.enums import ResourceType
from pydantic import BaseModel, Field, field_validator


@dataclass(frozen=True)
class NoteKind:
    """Which note table hangs off which shareable parent."""

    client_attr: str
    parent_field: str
    parent_type: ResourceType
    label: str


CONTACT_NOTES = NoteKind("contactnote", "contactId", ResourceType.contact, "Note")
ACTIVITY_NOTES = NoteKind("activitynote", "activityId", ResourceType.activity, "Note")


class NoteResponse(BaseModel):
    id: int
    title: Optional[str] = None
    content: str
    contactId: Optional[int] = None
    activityId: Optional[int] = None
    userId: int
    authorName: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_prisma(cls, note: Any) -> "NoteResponse":
        author = getattr(note, "user", None)
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            contactId=getattr(note, "contactId", None),
            activityId=getattr(note, "activityId", None),
            userId=note.userId,
            authorName=f"{author.firstName} {author.lastName}" if author else None,
            createdAt=note.createdAt,
            updatedAt=note.updatedAt,
        )


class NoteListResponse(BaseModel):
    notes: List[NoteResponse]


def require_content(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Note content is required")
    return value


class ContactNoteCreate(BaseModel):
    contactId: int = Field(..., ge=1)
    title: Optional[str] = None
    content: str

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return require_content(v)


class ActivityNoteCreate(BaseModel):
    activityId: int = Field(..., ge=1)
    title: Optional[str] = None
    content: str

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return require_content(v)


class NoteUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: Optional[str]) -> Optional[str]:
        return require_content(v) if v is not None else v
