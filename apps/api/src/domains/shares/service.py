# apps/api/src/domains/shares/service.py
from typing import Any, List, Optional

from prisma.enums import ResourceType

from prisma import Prisma
from src.domains.shares.models import (
    ShareCreate,
    ShareDirection,
    ShareListItem,
    ShareListResponse,
    ShareResponse,
    ShareUpdate,
    ShareUserResponse,
)
from src.shared.pagination import build_pagination, page_offset
from src.shared.permissions import AccessResolver

SHARE_INCLUDE = {
    "sharedBy": True,
    "sharedWith": True,
    "contact": True,
    "deal": True,
    "activity": True,
}


def direction_filter(user_id: int, direction: ShareDirection) -> dict[str, Any]:
    if direction == ShareDirection.WITH_ME:
        return {"sharedWithId": user_id}
    if direction == ShareDirection.BY_ME:
        return {"sharedById": user_id}
    return {"OR": [{"sharedWithId": user_id}, {"sharedById": user_id}]}


class ShareService:
    """Transport-facing wrapper over the access resolver's grant operations."""

    def __init__(self, db: Prisma):
        self.db = db
        self.resolver = AccessResolver(db)

    async def create_share(self, user_id: int, request: ShareCreate) -> ShareResponse:
        share = await self.resolver.create_share(
            granter_id=user_id,
            resource_type=request.resourceType,
            resource_id=request.resourceId,
            grantee_id=request.sharedWithUserId,
            permission=request.permission,
            message=request.message,
        )
        return ShareResponse.from_prisma(share)

    async def update_share(
        self, user_id: int, share_id: int, request: ShareUpdate
    ) -> ShareResponse:
        share = await self.resolver.update_share_permission(
            user_id, share_id, request.permission
        )
        return ShareResponse.from_prisma(share)

    async def revoke_share(self, user_id: int, share_id: int) -> None:
        await self.resolver.revoke_share(user_id, share_id)

    async def list_shares(
        self,
        user_id: int,
        direction: ShareDirection = ShareDirection.ALL,
        resource_type: Optional[ResourceType] = None,
        page: int = 1,
        limit: int = 20,
    ) -> ShareListResponse:
        """
        Get grants the user received, gave, or both, newest first

        Args:
            user_id: The caller
            direction: Which side of the grant the caller is on
            resource_type: Only grants on this kind of resource
            page: Page number (1-based)
            limit: Number of records per page

        Returns:
            ShareListResponse with counterpart details and resource titles
        """
        where = direction_filter(user_id, direction)
        if resource_type:
            where = {"AND": [where, {"resourceType": resource_type}]}

        shares = await self.db.share.find_many(
            where=where,  # type: ignore[arg-type]
            include=SHARE_INCLUDE,  # type: ignore[arg-type]
            order={"createdAt": "desc"},
            skip=page_offset(page, limit),
            take=limit,
        )
        total = await self.db.share.count(where=where)  # type: ignore[arg-type]

        return ShareListResponse(
            shares=[ShareListItem.for_user(share, user_id) for share in shares],
            pagination=build_pagination(page, limit, total),
        )

    async def list_shareable_users(self, user_id: int) -> List[ShareUserResponse]:
        users = await self.db.user.find_many(
            where={"id": {"not": user_id}},
            order=[{"firstName": "asc"}, {"lastName": "asc"}],
        )
        return [ShareUserResponse.from_prisma(user) for user in users]
