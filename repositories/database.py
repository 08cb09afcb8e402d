# ============================================================================
# DATABASE CONNECTION POOL
# ============================================================================
# STATUS: Core - Async PostgreSQL connection management
# PURPOSE: One psycopg3 async pool per process, plus seoapp table identifiers
# ============================================================================
"""
Database Connection Pool

main.py opens the pool in its lifespan and closes it on shutdown;
repositories receive it through their constructor.

Connection settings: DATABASE_URL, or POSTGRES_HOST / POSTGRES_PORT /
POSTGRES_DB / POSTGRES_USER / POSTGRES_PASSWORD / POSTGRES_SSLMODE.
Pool sizes: DB_POOL_MIN_SIZE / DB_POOL_MAX_SIZE (see core.config).
"""

import logging
import os
from typing import Optional

from psycopg import sql
from psycopg.conninfo import make_conninfo
from psycopg_pool import AsyncConnectionPool

from core.config import get_defaults

logger = logging.getLogger(__name__)

SCHEMA = "seoapp"

TABLE_CONTENT_ITEMS = sql.Identifier(SCHEMA, "content_items")
TABLE_CONTENT_META = sql.Identifier(SCHEMA, "content_meta")
TABLE_USERS = sql.Identifier(SCHEMA, "users")
TABLE_API_TOKENS = sql.Identifier(SCHEMA, "api_tokens")

_pool: Optional[AsyncConnectionPool] = None


def get_connection_string() -> str:
    """DATABASE_URL if set, else a conninfo built from POSTGRES_* variables."""
    url = os.environ.get("DATABASE_URL")
    if url:
        return url

    return make_conninfo(
        host=os.environ.get("POSTGRES_HOST", "localhost"),
        port=os.environ.get("POSTGRES_PORT", "5432"),
        dbname=os.environ.get("POSTGRES_DB", "postgres"),
        user=os.environ.get("POSTGRES_USER", "postgres"),
        password=os.environ.get("POSTGRES_PASSWORD", ""),
        sslmode=os.environ.get("POSTGRES_SSLMODE", "prefer"),
    )


def mask_conninfo(conninfo: str) -> str:
    """Connection string without credentials, for logs."""
    if "://" in conninfo:
        return conninfo.rsplit("@", 1)[-1]
    return " ".join(
        part for part in conninfo.split()
        if not part.startswith(("password=", "user="))
    )


async def init_pool(
    min_size: Optional[int] = None,
    max_size: Optional[int] = None,
    connection_string: Optional[str] = None,
) -> AsyncConnectionPool:
    """
    Open the process-wide pool. Calling it again returns the open pool.

    Sizes default to DatabaseDefaults; the connection string to
    get_connection_string().
    """
    global _pool
    if _pool is not None:
        return _pool

    db = get_defaults().database
    conninfo = connection_string or get_connection_string()
    pool = AsyncConnectionPool(
        conninfo=conninfo,
        min_size=db.pool_min_size if min_size is None else min_size,
        max_size=db.pool_max_size if max_size is None else max_size,
        open=False,
    )
    await pool.open()
    _pool = pool

    logger.info(f"Connection pool open on {mask_conninfo(conninfo)} (min={pool.min_size}, max={pool.max_size})")
    return _pool


async def get_pool() -> AsyncConnectionPool:
    """The process-wide pool, opening it on first use."""
    return _pool if _pool is not None else await init_pool()


def get_current_pool() -> Optional[AsyncConnectionPool]:
    """The pool if open, None otherwise. Never opens one."""
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return
    pool, _pool = _pool, None
    await pool.close()
    logger.info("Connection pool closed")
