# ============================================================================
# API TOKEN REPOSITORY
# ============================================================================
# STATUS: Auth - Bearer token lookup
# PURPOSE: Resolve a hashed API token to its user row
# ============================================================================
"""
ApiToken Repository

Tokens are never stored in clear: api_tokens.token_hash holds the SHA-256
hex digest. A token resolves only while not revoked and not expired.
"""

import hashlib
import logging
from typing import Any, Dict, Optional

from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from .database import TABLE_API_TOKENS, TABLE_USERS

logger = logging.getLogger(__name__)


def hash_token(token: str) -> str:
    """SHA-256 hex digest used as the stored token key."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class ApiTokenRepository:
    """Repository for API tokens and the users they belong to."""

    def __init__(self, pool: AsyncConnectionPool):
        self.pool = pool

    async def get_user_by_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        User row (id, login, role, extra_caps) for an active token.

        Returns:
            Dict with user columns, or None if the token is unknown,
            revoked or expired.
        """
        async with self.pool.connection() as conn:
            conn.row_factory = dict_row
            result = await conn.execute(
                sql.SQL("""
                    SELECT u.id, u.login, u.role, u.extra_caps
                    FROM {tokens} t
                    JOIN {users} u ON u.id = t.user_id
                    WHERE t.token_hash = %s
                      AND t.revoked_at IS NULL
                      AND (t.expires_at IS NULL OR t.expires_at > NOW())
                """).format(tokens=TABLE_API_TOKENS, users=TABLE_USERS),
                (hash_token(token),),
            )
            return await result.fetchone()
