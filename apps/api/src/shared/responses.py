from typing import Any, Iterable

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


def update_data(updates: BaseModel, required: Iterable[str] = ()) -> dict[str, Any]:
    """
    Fields explicitly sent in an update request, ready for Prisma.

    Args:
        updates: Typed update request; only its declared fields are used
        required: Non-nullable columns, dropped when sent as null

    Returns:
        Mapping of column name to new value
    """
    required = set(required)
    return {
        key: value
        for key, value in updates.model_dump(exclude_unset=True).items()
        if value is not None or key not in required
    }
