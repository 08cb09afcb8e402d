# ============================================================================
# VERSION - SEO META API
# ============================================================================
"""
Version information for the SEO Meta API.

This is the single source of truth for the application version.
Updated manually for each release.
"""
# Version format: major.minor.patch
# 1.4 - products become eligible when the commerce module is active
__version__ = "1.4.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-19"

API_NAMESPACE = "rank-math-api/v1"
CODENAME = "SEO Meta API"
