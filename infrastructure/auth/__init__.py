# ============================================================================
# AUTHENTICATION MODULE
# ============================================================================
# PURPOSE: Caller identity and capability checks
# ============================================================================
"""
Authentication module for the SEO meta service.

Provides:
- IdentityService: bearer token -> Caller
- CapabilityService: primitive and per-item capability checks

Usage:
    from infrastructure.auth import IdentityService, get_capability_service

    caller = await IdentityService(pool).resolve(request.headers.get("Authorization"))
    get_capability_service().user_can(caller, "edit_posts")
"""

from infrastructure.auth.capabilities import (
    DEFAULT_ROLES,
    CapabilityService,
    capabilities_for_role,
    get_capability_service,
    map_item_capability,
)
from infrastructure.auth.identity import IdentityService, parse_bearer_token

__all__ = [
    'DEFAULT_ROLES',
    'CapabilityService',
    'capabilities_for_role',
    'get_capability_service',
    'map_item_capability',
    'IdentityService',
    'parse_bearer_token',
]
