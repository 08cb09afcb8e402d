# ============================================================================
# CALLER IDENTITY
# ============================================================================
# STATUS: Auth - Bearer token authentication
# PURPOSE: Resolve the Authorization header to a Caller
# ============================================================================
"""
Caller identity for the SEO meta service.

Authentication Flow:
-------------------
1. Client sends "Authorization: Bearer <token>"
2. Token is hashed and looked up in api_tokens (see ApiTokenRepository)
3. The user's role capabilities plus explicit grants form the Caller
4. Missing, malformed, unknown, revoked or expired tokens yield an
   anonymous Caller; authorization decides what that means

Identity resolution never raises for bad credentials.
"""

import logging
from typing import Optional

from psycopg_pool import AsyncConnectionPool

from core.models.caller import Caller
from infrastructure.auth.capabilities import capabilities_for_role
from repositories.token_repo import ApiTokenRepository

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def parse_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an Authorization header value."""
    if not authorization:
        return None
    if not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class IdentityService:
    """Resolves request credentials to a Caller."""

    def __init__(self, pool: AsyncConnectionPool):
        self.pool = pool
        self.token_repo = ApiTokenRepository(pool)

    async def resolve(self, authorization: Optional[str]) -> Caller:
        """Caller for an Authorization header value."""
        token = parse_bearer_token(authorization)
        if token is None:
            return Caller.anonymous()

        user = await self.token_repo.get_user_by_token(token)
        if user is None:
            logger.info("Rejected unknown, revoked or expired API token")
            return Caller.anonymous()

        return Caller(
            user_id=user["id"],
            login=user.get("login"),
            role=user.get("role"),
            capabilities=capabilities_for_role(user.get("role"), user.get("extra_caps")),
        )
