"""
Shared access-control resolver for owned and shared resources.

A user may read a resource they own or that has been shared with them, write
it when they own it or hold an edit grant, and delete or share it only as
the owner. Routes use the resolver instead of re-deriving these rules.

Usage:
    from src.shared.permissions import Action, require_resource_access

    @router.get("/{resource_id}")
    async def get_contact(
        access: AccessDecision = Depends(
            require_resource_access(ResourceType.contact, Action.READ)
        )
    ):
        pass
"""

from .dependencies import require_resource_access
from .models import (
    RESOURCE_MODELS,
    AccessDecision,
    Action,
    allowed_actions,
    normalize_share_permission,
)
from .services import AccessResolver, visibility_filter

__all__ = [
    "AccessDecision",
    "AccessResolver",
    "Action",
    "RESOURCE_MODELS",
    "allowed_actions",
    "normalize_share_permission",
    "require_resource_access",
    "visibility_filter",
]
