# ============================================================================
# CONTENT META REPOSITORY
# ============================================================================
# STATUS: Domain - Key/value metadata attached to content items
# PURPOSE: Read and write single meta values in content_meta
# ============================================================================
"""
ContentMeta Repository

Generic key/value metadata store for content items. One row per
(item_id, meta_key).

get_value returns "" for a missing key, so "never set" and "set to empty"
read the same.

set_value upserts and reports success as a boolean:
- True:  a row was inserted or its value changed
- False: the stored value was already identical, or the write failed

Write failures are logged here and never raised; the caller reports them
per field.
"""

import logging

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from .database import TABLE_CONTENT_META

logger = logging.getLogger(__name__)


class ContentMetaRepository:
    """Repository for content item meta values."""

    def __init__(self, pool: AsyncConnectionPool):
        self.pool = pool

    async def get_value(self, item_id: int, meta_key: str) -> str:
        """Stored value for (item_id, meta_key), "" if not set."""
        async with self.pool.connection() as conn:
            conn.row_factory = dict_row
            result = await conn.execute(
                sql.SQL("""
                    SELECT meta_value FROM {}
                    WHERE item_id = %s AND meta_key = %s
                """).format(TABLE_CONTENT_META),
                (item_id, meta_key),
            )
            row = await result.fetchone()
            if row is None or row["meta_value"] is None:
                return ""
            return row["meta_value"]

    async def set_value(self, item_id: int, meta_key: str, value: str) -> bool:
        """
        Insert or update a meta value.

        Returns:
            True if a row was written, False if unchanged or on database error.
        """
        try:
            async with self.pool.connection() as conn:
                result = await conn.execute(
                    sql.SQL("""
                        INSERT INTO {table} (item_id, meta_key, meta_value, updated_at)
                        VALUES (%(item_id)s, %(meta_key)s, %(meta_value)s, NOW())
                        ON CONFLICT (item_id, meta_key) DO UPDATE
                        SET meta_value = EXCLUDED.meta_value,
                            updated_at = EXCLUDED.updated_at
                        WHERE {table}.meta_value IS DISTINCT FROM EXCLUDED.meta_value
                    """).format(table=TABLE_CONTENT_META),
                    {
                        "item_id": item_id,
                        "meta_key": meta_key,
                        "meta_value": value,
                    },
                )
                written = result.rowcount > 0
        except psycopg.Error as e:
            logger.error(
                f"Failed to write meta '{meta_key}' for item {item_id}: {e}",
                exc_info=True,
            )
            return False

        if written:
            logger.debug(f"Wrote meta '{meta_key}' for item {item_id}")
        return written
