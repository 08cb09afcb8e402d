# ============================================================================
# SEO META SERVICE
# ============================================================================
# STATUS: Domain service - Business rules for SEO meta updates
# PURPOSE: Eligibility, authorization and minimal-diff writes of meta fields
# ============================================================================
"""
SeoMetaService

Business logic behind POST /rank-math-api/v1/update-meta.

Request flow (each step can end the request):
    1. check_post_id          - post_id names an existing, eligible item
    2. check_route_permission - caller holds edit_posts
    3. update_meta            - caller holds edit_post on the item, then
                                each supplied field is diffed and written

Field writes are independent: a failed write is reported as "failed" for
that field and processing continues with the next one. Nothing is retried.

Read-then-write per field is not atomic. Two concurrent requests for the
same field may both read the old value and both write; the last write wins.

Pattern: Constructor injection of AsyncConnectionPool, repos instantiated
in __init__, async methods.
"""

from typing import Any, Optional

from psycopg_pool import AsyncConnectionPool

from core.config import get_eligible_kinds
from core.contracts import Capability, FieldOutcome
from core.errors import ForbiddenError, NoFieldsProvidedError
from core.logging import ComponentType, get_logger
from core.models.caller import Caller
from core.models.meta_update import MetaUpdateRequest, MetaUpdateResult
from core.sanitize import parse_non_negative_int
from infrastructure.auth.capabilities import CapabilityService, get_capability_service
from repositories.content_repo import ContentItemRepository
from repositories.meta_repo import ContentMetaRepository

logger = get_logger(__name__, ComponentType.SERVICE)


class SeoMetaService:
    """Business rules for updating SEO meta fields on content items."""

    def __init__(
        self,
        pool: AsyncConnectionPool,
        capability_service: Optional[CapabilityService] = None,
    ):
        self.pool = pool
        self.content_repo = ContentItemRepository(pool)
        self.meta_repo = ContentMetaRepository(pool)
        self.capabilities = capability_service or get_capability_service()

    async def check_post_id(self, value: Any) -> bool:
        """
        Validate a raw post_id parameter.

        True only if it parses as a non-negative integer naming an existing
        content item whose kind is currently eligible.
        """
        post_id = parse_non_negative_int(value)
        if post_id is None or post_id == 0:
            return False

        item = await self.content_repo.get(post_id)
        if item is None:
            logger.info(f"post_id {post_id} does not exist")
            return False

        eligible = get_eligible_kinds()
        if item.kind not in eligible:
            logger.info(
                f"post_id {post_id} has ineligible kind '{item.kind}'",
                extra={"eligible_kinds": list(eligible)},
            )
            return False

        return True

    def check_route_permission(self, caller: Caller) -> bool:
        """Coarse gate: may the caller edit content at all?"""
        return self.capabilities.user_can(caller, Capability.EDIT_POSTS.value)

    async def update_meta(self, request: MetaUpdateRequest, caller: Caller) -> MetaUpdateResult:
        """
        Apply the supplied meta fields to a content item.

        Raises:
            ForbiddenError: Caller may not edit this item (nothing read or written).
            NoFieldsProvidedError: No meta field was supplied.
        """
        item = await self.content_repo.get(request.post_id)
        if not self.capabilities.user_can_for_item(caller, Capability.EDIT_POST.value, item):
            logger.warning(f"User {caller.user_id} denied edit on post {request.post_id}")
            raise ForbiddenError("You do not have permission to edit this post.", status=403)

        supplied = request.supplied()
        if not supplied:
            raise NoFieldsProvidedError()

        result = MetaUpdateResult(post_id=request.post_id)

        for meta_field, value in supplied:
            current = await self.meta_repo.get_value(request.post_id, meta_field.value)

            if current == value:
                result.record(meta_field, FieldOutcome.UNCHANGED)
            elif await self.meta_repo.set_value(request.post_id, meta_field.value, value):
                result.record(meta_field, FieldOutcome.UPDATED)
            else:
                logger.error(f"Store rejected write of {meta_field.value} on post {request.post_id}")
                result.record(meta_field, FieldOutcome.FAILED)

        logger.info(
            f"Processed {len(supplied)} meta field(s) for post {request.post_id}",
            extra={"outcomes": result.to_response()},
        )
        return result
