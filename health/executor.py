# ============================================================================
# HEALTH CHECK EXECUTOR
# ============================================================================
# STATUS: Infrastructure - Health check execution
# PURPOSE: Run checks with per-check timeouts and aggregate the results
# ============================================================================
"""
Health Check Executor

Runs checks one after another in priority order. A check that raises or
exceeds its timeout is reported unhealthy; the probe request itself never
fails because of a check.
"""

import asyncio
import logging
import time
from typing import List, Optional

from health.core import AggregatedHealthResult, HealthCheckPlugin, HealthCheckResult
from health.registry import HealthCheckRegistry, get_registry

logger = logging.getLogger(__name__)


class HealthCheckExecutor:
    """Executes registered health checks."""

    def __init__(self, registry: Optional[HealthCheckRegistry] = None):
        self.registry = registry or get_registry()

    async def execute_all(self) -> AggregatedHealthResult:
        return await self._execute_many(self.registry.get_checks_by_priority())

    async def execute_required(self) -> AggregatedHealthResult:
        """Only the checks that gate /readyz."""
        return await self._execute_many(self.registry.get_checks_by_priority(required_only=True))

    async def execute_single(self, name: str) -> Optional[HealthCheckResult]:
        """Run one check by name, None if no such check is registered."""
        check = self.registry.get(name)
        return await self._execute_check(check) if check else None

    async def _execute_many(self, checks: List[HealthCheckPlugin]) -> AggregatedHealthResult:
        started = time.monotonic()
        results = {check.name: await self._execute_check(check) for check in checks}
        return AggregatedHealthResult(
            checks=results,
            total_duration_ms=(time.monotonic() - started) * 1000,
        )

    async def _execute_check(self, check: HealthCheckPlugin) -> HealthCheckResult:
        started = time.monotonic()
        try:
            result = await asyncio.wait_for(check.check(), timeout=check.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(f"Health check {check.name} timed out after {check.timeout_seconds}s")
            result = HealthCheckResult.unhealthy(f"Timeout after {check.timeout_seconds}s")
        except Exception as e:
            logger.error(f"Health check {check.name} raised: {e}")
            result = HealthCheckResult.from_exception(e)

        result.duration_ms = (time.monotonic() - started) * 1000
        return result


__all__ = [
    "HealthCheckExecutor",
]
