from typing import Any, Awaitable, Callable, Optional

from fastapi import Depends
from prisma.enums import ResourceType

from prisma import Prisma
from src.core.database import get_db
from src.domains.auth.dependencies import get_current_user
from src.domains.auth.types import CurrentUser

from .models import AccessDecision, Action
from .services import AccessResolver


def require_resource_access(
    resource_type: ResourceType,
    action: Action,
    include: Optional[dict[str, Any]] = None,
) -> Callable[..., Awaitable[AccessDecision]]:
    """
    Dependency factory for ownership and sharing checks.

    Creates a dependency that loads the resource named by the `resource_id`
    path parameter and validates the current user may perform the action.

    Args:
        resource_type: The kind of resource the route serves
        action: The action the route performs
        include: Extra relations to load with the resource

    Returns:
        Async dependency function returning the caller's AccessDecision
    """

    async def check_access(
        resource_id: int,
        current_user: CurrentUser = Depends(get_current_user),
        db: Prisma = Depends(get_db),
    ) -> AccessDecision:
        """
        Raises:
            ResourceNotFoundError: If the resource is invisible to the user
            ForbiddenError: If the user can see it but lacks the action
        """
        resolver = AccessResolver(db)
        return await resolver.require_access(
            current_user.id, resource_type, resource_id, action, include=include
        )

    return check_access
