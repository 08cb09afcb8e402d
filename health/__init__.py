# ============================================================================
# HEALTH CHECK MODULE
# ============================================================================
# STATUS: Infrastructure - Health check plugin system
# PURPOSE: Kubernetes probes and health monitoring
# ============================================================================
"""
Health Check Module

Plugin-based health checks for the SEO meta service:
- /livez: Process alive (instant, for liveness probes)
- /readyz: Ready to accept requests (required checks pass)
- /health: Status of every registered check

Usage:
    from health import health_router, register_check

    @register_check(category="database")
    class MyCheck(HealthCheckPlugin):
        name = "my_check"

        async def check(self) -> HealthCheckResult:
            return HealthCheckResult.healthy()

    app.include_router(health_router)
"""

from health.core import (
    HealthStatus,
    HealthCheckResult,
    HealthCheckPlugin,
    HealthCheckCategory,
)
from health.registry import (
    HealthCheckRegistry,
    register_check,
    get_registry,
)
from health.executor import HealthCheckExecutor
from health.router import health_router

__all__ = [
    "HealthStatus",
    "HealthCheckResult",
    "HealthCheckPlugin",
    "HealthCheckCategory",
    "HealthCheckRegistry",
    "register_check",
    "get_registry",
    "HealthCheckExecutor",
    "health_router",
]
