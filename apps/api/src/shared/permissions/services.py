import logging
from typing import Any, Optional

from prisma.enums import ResourceType, SharePermission
from prisma.errors import UniqueViolationError
from prisma.models import Share

from prisma import Prisma
from src.shared.exceptions import (
    DuplicateGrantError,
    ForbiddenError,
    InvalidGranteeError,
    ResourceNotFoundError,
)
from src.shared.pagination import page_offset

from .models import RESOURCE_MODELS, AccessDecision, Action, ResourceModel

logger = logging.getLogger(__name__)

ACTION_VERBS = {
    Action.READ: "view",
    Action.WRITE: "edit",
    Action.DELETE: "delete",
    Action.SHARE: "share",
}


def visibility_filter(user_id: int) -> dict[str, Any]:
    """Where clause matching resources the user owns or has been granted."""
    return {
        "OR": [
            {"userId": user_id},
            {"shares": {"some": {"sharedWithId": user_id}}},
        ]
    }


def _grant_include(user_id: int, include: Optional[dict[str, Any]]) -> dict[str, Any]:
    # Only the caller's own grant is loaded alongside the row
    merged = dict(include or {})
    merged["shares"] = {"where": {"sharedWithId": user_id}}
    return merged


def decision_for(
    user_id: int, resource_type: ResourceType, resource: Any
) -> AccessDecision:
    """Build an AccessDecision from a row loaded with the caller's grant."""
    is_owner = resource.userId == user_id
    grants = getattr(resource, "shares", None) or []
    permission = None
    if not is_owner and grants:
        permission = SharePermission(grants[0].permission)
    return AccessDecision(
        resource=resource,
        resource_type=resource_type,
        is_owner=is_owner,
        permission=permission,
    )


class AccessResolver:
    """
    Single source of truth for ownership and sharing decisions.

    Every check is one query on the resource table that matches the owner
    and the caller's grant together. Construct it with a transaction client
    to keep a check and the write it guards atomic.
    """

    def __init__(self, db: Prisma):
        self.db = db

    @staticmethod
    def owned(resource_type: ResourceType, resource: Any) -> AccessDecision:
        """Decision for a row the caller has just created."""
        return AccessDecision(
            resource=resource, resource_type=resource_type, is_owner=True
        )

    def _model(self, resource_type: ResourceType) -> ResourceModel:
        return RESOURCE_MODELS[ResourceType(resource_type)]

    def _delegate(self, resource_type: ResourceType) -> Any:
        return getattr(self.db, self._model(resource_type).client_attr)

    async def fetch_access(
        self,
        user_id: int,
        resource_type: ResourceType,
        resource_id: int,
        include: Optional[dict[str, Any]] = None,
    ) -> Optional[AccessDecision]:
        """
        Load a resource together with the caller's access to it.

        Args:
            user_id: The caller
            resource_type: Which resource table to query
            resource_id: The resource's ID
            include: Extra relations to load with the row

        Returns:
            AccessDecision, or None when the resource is absent or invisible
        """
        resource = await self._delegate(resource_type).find_first(
            where={"id": resource_id, **visibility_filter(user_id)},
            include=_grant_include(user_id, include),
        )
        if resource is None:
            return None
        return decision_for(user_id, resource_type, resource)

    async def can_read(
        self, user_id: int, resource_type: ResourceType, resource_id: int
    ) -> bool:
        decision = await self.fetch_access(user_id, resource_type, resource_id)
        return decision is not None and decision.can_read

    async def can_write(
        self, user_id: int, resource_type: ResourceType, resource_id: int
    ) -> bool:
        decision = await self.fetch_access(user_id, resource_type, resource_id)
        return decision is not None and decision.can_write

    async def can_delete(
        self, user_id: int, resource_type: ResourceType, resource_id: int
    ) -> bool:
        decision = await self.fetch_access(user_id, resource_type, resource_id)
        return decision is not None and decision.can_delete

    async def can_manage_share(self, user_id: int, share_id: int) -> bool:
        share = await self.db.share.find_unique(where={"id": share_id})
        return share is not None and share.sharedById == user_id

    async def require_access(
        self,
        user_id: int,
        resource_type: ResourceType,
        resource_id: int,
        action: Action,
        include: Optional[dict[str, Any]] = None,
    ) -> AccessDecision:
        """
        Guard used before every read or mutation of a shareable resource.

        Raises:
            ResourceNotFoundError: The resource is absent or invisible to the caller
            ForbiddenError: The caller can see the resource but lacks the action
        """
        model = self._model(resource_type)
        decision = await self.fetch_access(
            user_id, resource_type, resource_id, include=include
        )
        if decision is None:
            raise ResourceNotFoundError(model.label)
        if not decision.allows(action):
            raise ForbiddenError(
                f"You don't have permission to {ACTION_VERBS[action]} "
                f"this {model.label.lower()}"
            )
        return decision

    async def list_visible(
        self,
        user_id: int,
        resource_type: ResourceType,
        page: int,
        limit: int,
        where: Optional[dict[str, Any]] = None,
        order: Optional[Any] = None,
        include: Optional[dict[str, Any]] = None,
    ) -> tuple[list[AccessDecision], int]:
        """
        Page through the resources a user owns or has been granted.

        Args:
            user_id: The caller
            resource_type: Which resource table to list
            page: 1-based page number
            limit: Page size
            where: Additional filters combined with the visibility clause
            order: Prisma order clause, newest first by default
            include: Extra relations to load with each row

        Returns:
            Tuple of (decisions for the page, total visible rows)
        """
        visible: dict[str, Any] = visibility_filter(user_id)
        if where:
            visible = {"AND": [visible, where]}

        delegate = self._delegate(resource_type)
        rows = await delegate.find_many(
            where=visible,
            include=_grant_include(user_id, include),
            order=order or {"createdAt": "desc"},
            skip=page_offset(page, limit),
            take=limit,
        )
        total = await delegate.count(where=visible)
        return [decision_for(user_id, resource_type, row) for row in rows], total

    async def create_share(
        self,
        granter_id: int,
        resource_type: ResourceType,
        resource_id: int,
        grantee_id: int,
        permission: SharePermission = SharePermission.view,
        message: Optional[str] = None,
    ) -> Share:
        """
        Grant another user access to a resource the granter owns.

        Grants never stack: an existing grant must be updated instead.

        Raises:
            ResourceNotFoundError: Resource absent or not owned by the granter
            InvalidGranteeError: Grantee does not exist or is the granter
            DuplicateGrantError: The grantee already holds a grant on it
        """
        model = self._model(resource_type)
        async with self.db.tx() as tx:
            resource = await getattr(tx, model.client_attr).find_first(
                where={"id": resource_id, "userId": granter_id}
            )
            if resource is None:
                raise ResourceNotFoundError(model.label)

            if grantee_id == granter_id:
                raise InvalidGranteeError("You cannot share with yourself")
            grantee = await tx.user.find_unique(where={"id": grantee_id})
            if grantee is None:
                raise InvalidGranteeError()

            existing = await tx.share.find_first(
                where={
                    "sharedWithId": grantee_id,
                    "resourceType": resource_type,
                    "resourceId": resource_id,
                }
            )
            if existing is not None:
                raise DuplicateGrantError(model.label)

            try:
                share = await tx.share.create(
                    data={
                        "resourceType": resource_type,
                        "resourceId": resource_id,
                        "sharedById": granter_id,
                        "sharedWithId": grantee_id,
                        "permission": permission,
                        "message": message,
                        model.share_field: resource_id,
                    }
                )
            except UniqueViolationError:
                raise DuplicateGrantError(model.label)

        logger.info(
            f"User {granter_id} shared {model.label.lower()} {resource_id} "
            f"with user {grantee_id} ({SharePermission(permission).value})"
        )
        return share

    async def _managed_share(self, db: Prisma, user_id: int, share_id: int) -> Share:
        # Grantees know the share exists; anyone else learns nothing
        share = await db.share.find_unique(where={"id": share_id})
        if share is None:
            raise ResourceNotFoundError("Share")
        if share.sharedById == user_id:
            return share
        if share.sharedWithId == user_id:
            raise ForbiddenError("Only the user who created this share can change it")
        raise ResourceNotFoundError("Share")

    async def update_share_permission(
        self, granter_id: int, share_id: int, permission: SharePermission
    ) -> Share:
        """
        Change the permission level of a grant the caller created.

        Raises:
            ResourceNotFoundError: No such share visible to the caller
            ForbiddenError: The caller is the grantee, not the granter
        """
        async with self.db.tx() as tx:
            await self._managed_share(tx, granter_id, share_id)
            share = await tx.share.update(
                where={"id": share_id}, data={"permission": permission}
            )
        logger.info(
            f"User {granter_id} set share {share_id} to "
            f"{SharePermission(permission).value}"
        )
        return share  # type: ignore[return-value]

    async def revoke_share(self, granter_id: int, share_id: int) -> None:
        """
        Delete a grant the caller created.

        Raises:
            ResourceNotFoundError: No such share visible to the caller
            ForbiddenError: The caller is the grantee, not the granter
        """
        async with self.db.tx() as tx:
            await self._managed_share(tx, granter_id, share_id)
            await tx.share.delete(where={"id": share_id})
        logger.info(f"User {granter_id} revoked share {share_id}")
