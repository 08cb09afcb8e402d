# ============================================================================
# API MODULE
# ============================================================================
# STATUS: Core - FastAPI routes
# PURPOSE: HTTP API for SEO meta updates
# ============================================================================
"""
API Module

FastAPI routes for the SEO meta service.
"""

from .routes import router, set_meta_services, rest_error_handler
from .params import collect_params, parse_urlencoded, validate_params
from .schemas import UpdateMetaParams

__all__ = [
    "router",
    "set_meta_services",
    "rest_error_handler",
    "collect_params",
    "parse_urlencoded",
    "validate_params",
    "UpdateMetaParams",
]
