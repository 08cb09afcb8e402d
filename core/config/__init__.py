# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the SEO meta service.
"""

from core.config.defaults import (
    ContentTypeDefaults,
    ApiDefaults,
    DatabaseDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
    is_companion_module_active,
    get_eligible_kinds,
)

__all__ = [
    "ContentTypeDefaults",
    "ApiDefaults",
    "DatabaseDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
    "is_companion_module_active",
    "get_eligible_kinds",
]
