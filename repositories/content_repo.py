# ============================================================================
# CONTENT ITEM REPOSITORY
# ============================================================================
# STATUS: Domain - Read access to content items
# PURPOSE: Existence, kind, status and owner lookups for content_items
# ============================================================================
"""
ContentItem Repository

Read-only: content items are created and deleted by the host platform.
All SQL uses psycopg sql.SQL composition for injection safety.
"""

import logging
from typing import Any, Dict, Optional

from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from core.models.content_item import ContentItem
from .database import TABLE_CONTENT_ITEMS

logger = logging.getLogger(__name__)


class ContentItemRepository:
    """Repository for ContentItem entities."""

    def __init__(self, pool: AsyncConnectionPool):
        self.pool = pool

    async def get(self, item_id: int) -> Optional[ContentItem]:
        """Get a content item by ID, None if it does not exist."""
        async with self.pool.connection() as conn:
            conn.row_factory = dict_row
            result = await conn.execute(
                sql.SQL("""
                    SELECT id, kind, status, author_id, title, updated_at
                    FROM {} WHERE id = %s
                """).format(TABLE_CONTENT_ITEMS),
                (item_id,),
            )
            row = await result.fetchone()
            return self._row_to_model(row) if row else None

    def _row_to_model(self, row: Dict[str, Any]) -> ContentItem:
        return ContentItem(
            id=row["id"],
            kind=row["kind"],
            status=row["status"],
            author_id=row.get("author_id"),
            title=row.get("title") or "",
            updated_at=row["updated_at"],
        )
