# ============================================================================
# STARTUP HEALTH CHECKS
# ============================================================================
# STATUS: Infrastructure - Startup health checks
# PURPOSE: Basic process and configuration checks
# ============================================================================
"""
Startup Health Checks

Basic checks that run first (priority 10):
- ProcessCheck: Always healthy if process is running
- ConfigCheck: Database connection configured, content kinds resolved
"""

import os
import platform
import sys
import logging

from core.config import get_eligible_kinds, is_companion_module_active
from health.core import HealthCheckPlugin, HealthCheckResult
from health.registry import register_check

logger = logging.getLogger(__name__)


@register_check(category="startup")
class ProcessCheck(HealthCheckPlugin):
    """Always healthy if the check runs (proves process is alive)."""

    name = "process"
    timeout_seconds = 1.0

    async def check(self) -> HealthCheckResult:
        return HealthCheckResult.healthy(
            message="Process running",
            python_version=sys.version,
            platform=platform.platform(),
            pid=os.getpid(),
        )


@register_check(category="startup")
class ConfigCheck(HealthCheckPlugin):
    """
    Configuration health check.

    Verifies a database connection is configured (DATABASE_URL or
    POSTGRES_HOST + POSTGRES_DB) and reports the eligible content kinds.
    """

    name = "config"
    timeout_seconds = 1.0

    async def check(self) -> HealthCheckResult:
        details = {
            "eligible_kinds": list(get_eligible_kinds()),
            "commerce_module_active": is_companion_module_active(),
        }

        if os.environ.get("DATABASE_URL"):
            return HealthCheckResult.healthy(message="DATABASE_URL configured", **details)

        missing = [var for var in ("POSTGRES_HOST", "POSTGRES_DB") if not os.environ.get(var)]
        if missing:
            return HealthCheckResult.unhealthy(
                message=f"Missing required config: {', '.join(missing)}",
                missing=missing,
                **details,
            )

        return HealthCheckResult.healthy(message="All required config present", **details)


__all__ = [
    "ProcessCheck",
    "ConfigCheck",
]
