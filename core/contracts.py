# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums shared by routes, services and repositories
# PURPOSE: Name the managed SEO fields, per-field outcomes and capabilities
# EXPORTS: MetaField, FieldOutcome, ContentKind, ContentStatus, Capability
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the SEO meta service.

These define the identifiers that cross boundaries:
- HTTP (request parameter names, response values)
- SQL (meta_key column values, content kinds)
- Python (service logic)
"""

from enum import Enum
from typing import Tuple


# ============================================================================
# META FIELDS
# ============================================================================

class MetaField(str, Enum):
    """
    The three SEO fields managed by this service.

    The value is both the request parameter name and the stored meta key.
    Declaration order is the processing and response order.
    """
    TITLE = "rank_math_title"
    DESCRIPTION = "rank_math_description"
    CANONICAL_URL = "rank_math_canonical_url"

    @classmethod
    def ordered(cls) -> Tuple["MetaField", ...]:
        """All fields in processing order."""
        return tuple(cls)

    @property
    def attr_name(self) -> str:
        """Attribute name on MetaUpdateRequest (title, description, canonical_url)."""
        return self.value[len("rank_math_"):]


class FieldOutcome(str, Enum):
    """
    Per-field result of an update request.

    UNCHANGED: submitted value equals the stored value, nothing written
    UPDATED:   value differed and the store accepted the write
    FAILED:    value differed and the store rejected the write
    """
    UNCHANGED = "unchanged"
    UPDATED = "updated"
    FAILED = "failed"


# ============================================================================
# CONTENT ITEMS
# ============================================================================

class ContentKind(str, Enum):
    """Kinds of content items known to the host."""
    POST = "post"
    PRODUCT = "product"
    PAGE = "page"
    ATTACHMENT = "attachment"


class ContentStatus(str, Enum):
    """Publication state of a content item."""
    DRAFT = "draft"
    PENDING = "pending"
    FUTURE = "future"
    PUBLISH = "publish"
    PRIVATE = "private"
    TRASH = "trash"

    def is_published(self) -> bool:
        """Published and scheduled items need the *_published capability."""
        return self in (ContentStatus.PUBLISH, ContentStatus.FUTURE)


# ============================================================================
# CAPABILITIES
# ============================================================================

class Capability(str, Enum):
    """Capabilities checked by the update endpoint."""
    EDIT_POSTS = "edit_posts"   # coarse gate for the route
    EDIT_POST = "edit_post"     # per-item gate inside the handler
