# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export core contracts, errors and models
# ============================================================================

from core.contracts import MetaField, FieldOutcome, ContentKind, ContentStatus, Capability
from core.errors import (
    RestError,
    MissingParamError,
    InvalidParamError,
    ForbiddenError,
    NoFieldsProvidedError,
)
from core.models import ContentItem, Caller, MetaUpdateRequest, MetaUpdateResult

__all__ = [
    # Enums
    "MetaField",
    "FieldOutcome",
    "ContentKind",
    "ContentStatus",
    "Capability",
    # Errors
    "RestError",
    "MissingParamError",
    "InvalidParamError",
    "ForbiddenError",
    "NoFieldsProvidedError",
    # Models
    "ContentItem",
    "Caller",
    "MetaUpdateRequest",
    "MetaUpdateResult",
]
