# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# STATUS: Core - Database access layer
# PURPOSE: Read/write access to content items, meta values and API tokens
# ============================================================================
"""
Repositories Module

Provides database access for the SEO meta service.
Uses psycopg3 async with connection pooling.

Usage:
    from repositories import get_pool, ContentMetaRepository

    pool = await get_pool()
    meta_repo = ContentMetaRepository(pool)
    title = await meta_repo.get_value(42, "rank_math_title")
"""

from .database import get_pool, init_pool, close_pool
from .content_repo import ContentItemRepository
from .meta_repo import ContentMetaRepository
from .token_repo import ApiTokenRepository, hash_token

__all__ = [
    "get_pool",
    "init_pool",
    "close_pool",
    "ContentItemRepository",
    "ContentMetaRepository",
    "ApiTokenRepository",
    "hash_token",
]
