# ============================================================================
# CAPABILITY CHECKS
# ============================================================================
# STATUS: Auth - Role capabilities and per-item capability mapping
# PURPOSE: Answer "can the caller do X" and "can the caller do X on item Y"
# ============================================================================
"""
Capability Checks

Two kinds of checks back the update endpoint:

- Primitive capability ("edit_posts"): held directly through the caller's
  role or an explicit grant.
- Per-item capability ("edit_post" on item 42): mapped to the primitive
  capabilities the item requires, then checked like a primitive one.

Mapping for edit_post, with <kinds> the item kind's plural (posts, products):

    own item, published/scheduled     -> edit_published_<kinds>
    own item, otherwise               -> edit_<kinds>
    someone else's item               -> edit_others_<kinds>
        + published/scheduled         -> edit_published_<kinds>
        + private                     -> edit_private_<kinds>
    trashed item / no item            -> never allowed

Usage:
    from infrastructure.auth import get_capability_service

    caps = get_capability_service()
    caps.user_can(caller, "edit_posts")
    caps.user_can_for_item(caller, "edit_post", item)
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional

from core.contracts import Capability, ContentStatus
from core.models.caller import Caller
from core.models.content_item import ContentItem

logger = logging.getLogger(__name__)

DO_NOT_ALLOW = "do_not_allow"


def _kind_caps(plural: str) -> List[str]:
    return [
        f"edit_{plural}",
        f"edit_published_{plural}",
        f"edit_others_{plural}",
        f"edit_private_{plural}",
    ]


_EDITOR_CAPS = ["read"] + _kind_caps("posts") + _kind_caps("pages")
_PRODUCT_CAPS = _kind_caps("products")

DEFAULT_ROLES: Dict[str, FrozenSet[str]] = {
    "administrator": frozenset(_EDITOR_CAPS + _PRODUCT_CAPS + ["manage_options"]),
    "editor": frozenset(_EDITOR_CAPS),
    "shop_manager": frozenset(_EDITOR_CAPS + _PRODUCT_CAPS),
    "author": frozenset(["read", "edit_posts", "edit_published_posts"]),
    "contributor": frozenset(["read", "edit_posts"]),
    "subscriber": frozenset(["read"]),
}


def capabilities_for_role(
    role: Optional[str],
    extra: Optional[Iterable[str]] = None,
    roles: Optional[Dict[str, FrozenSet[str]]] = None,
) -> FrozenSet[str]:
    """Primitive capabilities of a role plus any explicit grants."""
    roles = roles if roles is not None else DEFAULT_ROLES
    caps = set(roles.get(role or "", frozenset()))
    if extra:
        caps.update(extra)
    return frozenset(caps)


def map_item_capability(
    capability: str,
    user_id: Optional[int],
    item: Optional[ContentItem],
) -> List[str]:
    """Primitive capabilities required for a per-item capability."""
    if capability != Capability.EDIT_POST.value:
        return [capability]

    if item is None or item.status == ContentStatus.TRASH:
        return [DO_NOT_ALLOW]

    plural = f"{item.kind}s"
    published = item.status.is_published()

    if item.is_owned_by(user_id):
        return [f"edit_published_{plural}" if published else f"edit_{plural}"]

    caps = [f"edit_others_{plural}"]
    if published:
        caps.append(f"edit_published_{plural}")
    elif item.status == ContentStatus.PRIVATE:
        caps.append(f"edit_private_{plural}")
    return caps


class CapabilityService:
    """Checks capabilities of the current caller."""

    def user_can(self, caller: Caller, capability: str) -> bool:
        """Does the caller hold a primitive capability?"""
        return caller.has_cap(capability)

    def user_can_for_item(
        self,
        caller: Caller,
        capability: str,
        item: Optional[ContentItem],
    ) -> bool:
        """Does the caller hold a capability on a specific content item?"""
        if not caller.is_authenticated:
            return False

        required = map_item_capability(capability, caller.user_id, item)
        allowed = DO_NOT_ALLOW not in required and all(
            caller.has_cap(cap) for cap in required
        )
        if not allowed:
            logger.debug(
                f"User {caller.user_id} lacks {capability} on item "
                f"{item.id if item else None} (requires {required})"
            )
        return allowed


_capability_service: Optional[CapabilityService] = None


def get_capability_service() -> CapabilityService:
    """Get the global capability service."""
    global _capability_service
    if _capability_service is None:
        _capability_service = CapabilityService()
    return _capability_service


__all__ = [
    "DO_NOT_ALLOW",
    "DEFAULT_ROLES",
    "capabilities_for_role",
    "map_item_capability",
    "CapabilityService",
    "get_capability_service",
]
