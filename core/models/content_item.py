# ============================================================================
# CONTENT ITEM MODEL
# ============================================================================
# STATUS: Domain model - Addressable unit of content owned by the host
# PURPOSE: Identity, kind, status and owner used for eligibility and auth
# ============================================================================
"""
ContentItem Model

A content item (article, product, ...) exists before any request reaches
this service; creation and deletion are out of scope. Only the columns the
update endpoint needs are modeled.
"""

from datetime import datetime, timezone
from typing import ClassVar, Optional

from pydantic import BaseModel, Field

from core.contracts import ContentStatus


class ContentItem(BaseModel):
    """
    A content item as read from the content store.
    Maps to: seoapp.content_items
    """

    __sql_table__: ClassVar[str] = "content_items"

    id: int = Field(..., gt=0)
    kind: str = Field(..., max_length=20, description="'post', 'product', ...")
    status: ContentStatus = Field(default=ContentStatus.DRAFT)
    author_id: Optional[int] = Field(default=None, description="Owning user, FK to users")
    title: str = Field(default="")
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def is_owned_by(self, user_id: Optional[int]) -> bool:
        """True if user_id is this item's author."""
        return user_id is not None and self.author_id == user_id
