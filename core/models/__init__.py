# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for all Pydantic models
# ============================================================================
"""
Models Module - Central Export Point

Pydantic models for the SEO meta service.
Table-backed models name their table via __sql_table__.
"""

from core.models.content_item import ContentItem
from core.models.caller import Caller
from core.models.meta_update import MetaUpdateRequest, MetaUpdateResult

__all__ = [
    "ContentItem",
    "Caller",
    "MetaUpdateRequest",
    "MetaUpdateResult",
]
