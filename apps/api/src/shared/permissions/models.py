from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Set

from prisma.enums import ResourceType, SharePermission


class Action(Enum):
    """
    Actions a user can attempt on an owned resource.

    READ and WRITE may be granted through a share; DELETE and SHARE are
    reserved for the owner.
    """

    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    SHARE = "share"


@dataclass(frozen=True)
class ResourceModel:
    """Where a shareable resource type lives in the Prisma client."""

    client_attr: str  # accessor on the Prisma client, e.g. db.contact
    share_field: str  # relation column on Share that cascades on delete
    label: str


RESOURCE_MODELS: dict[ResourceType, ResourceModel] = {
    ResourceType.contact: ResourceModel("contact", "contactId", "Contact"),
    ResourceType.deal: ResourceModel("deal", "dealId", "Deal"),
    ResourceType.activity: ResourceModel("activity", "activityId", "Activity"),
}


OWNER_ACTIONS: Set[Action] = set(Action)

SHARE_PERMISSION_ACTIONS: dict[SharePermission, Set[Action]] = {
    SharePermission.view: {Action.READ},
    SharePermission.edit: {Action.READ, Action.WRITE},
}

# Spellings used by older clients of the shares API
LEGACY_PERMISSION_ALIASES: dict[str, str] = {
    "read": "view",
    "write": "edit",
}


def normalize_share_permission(value: Any) -> Any:
    """Map legacy permission spellings onto the canonical view/edit values."""
    if isinstance(value, str):
        return LEGACY_PERMISSION_ALIASES.get(value.lower(), value.lower())
    return value


def allowed_actions(is_owner: bool, permission: Optional[SharePermission]) -> Set[Action]:
    """
    Actions available to a user given their relationship to a resource.

    Args:
        is_owner: Whether the user created the resource
        permission: The user's share grant on the resource, if any

    Returns:
        The set of permitted actions (empty when the user has no access)
    """
    if is_owner:
        return OWNER_ACTIONS
    if permission is None:
        return set()
    return SHARE_PERMISSION_ACTIONS.get(SharePermission(permission), set())


@dataclass
class AccessDecision:
    """The caller's access to one resource, read from a single query."""

    resource: Any
    resource_type: ResourceType
    is_owner: bool
    permission: Optional[SharePermission] = None

    @property
    def is_shared_with_me(self) -> bool:
        return not self.is_owner

    def allows(self, action: Action) -> bool:
        return action in allowed_actions(self.is_owner, self.permission)

    @property
    def can_read(self) -> bool:
        return self.allows(Action.READ)

    @property
    def can_write(self) -> bool:
        return self.allows(Action.WRITE)

    @property
    def can_delete(self) -> bool:
        return self.allows(Action.DELETE)
