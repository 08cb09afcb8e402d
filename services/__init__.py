# ============================================================================
# SERVICES MODULE
# ============================================================================
# STATUS: Core - Business logic layer
# PURPOSE: SEO meta update rules
# ============================================================================
"""
Services Module

Business logic for the SEO meta service.
Services coordinate between repositories and capability checks.

Usage:
    from services import SeoMetaService

    meta_service = SeoMetaService(pool)
    result = await meta_service.update_meta(request, caller)
"""

from .meta_service import SeoMetaService

__all__ = [
    "SeoMetaService",
]
