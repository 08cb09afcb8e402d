# ============================================================================
# APPLICATION HEALTH CHECKS
# ============================================================================
# STATUS: Infrastructure - Application wiring checks
# PURPOSE: Verify the update endpoint has its services
# ============================================================================
"""
Application Health Checks (priority 40):
- MetaServiceCheck: meta and identity services injected into the routes
"""

from api.routes import services_initialized
from health.core import HealthCheckPlugin, HealthCheckResult
from health.registry import register_check


@register_check(category="application")
class MetaServiceCheck(HealthCheckPlugin):
    """Update endpoint services are wired."""

    name = "meta_service"
    timeout_seconds = 1.0

    async def check(self) -> HealthCheckResult:
        if services_initialized():
            return HealthCheckResult.healthy(message="Meta service ready")
        return HealthCheckResult.unhealthy(message="Meta service not initialized")


__all__ = [
    "MetaServiceCheck",
]
