# ============================================================================
# HEALTH CHECK REGISTRY
# ============================================================================
# STATUS: Infrastructure - Health check plugin registration
# PURPOSE: Collect check instances at import time
# ============================================================================
"""
Health Check Registry

Checks register themselves when their module is imported:

    @register_check(category="database")
    class PostgresCheck(HealthCheckPlugin):
        name = "postgres"
        ...

main.py imports health.checks once at startup.
"""

import logging
from typing import Dict, List, Optional, Type

from health.core import HealthCheckCategory, HealthCheckPlugin

logger = logging.getLogger(__name__)


class HealthCheckRegistry:
    """Check instances by name; re-registering a name replaces the old check."""

    def __init__(self):
        self._checks: Dict[str, HealthCheckPlugin] = {}

    def register(self, check: HealthCheckPlugin) -> None:
        replaced = check.name in self._checks
        self._checks[check.name] = check
        logger.debug(f"{'Replaced' if replaced else 'Registered'} health check {check.name} ({check.category.value})")

    def get(self, name: str) -> Optional[HealthCheckPlugin]:
        return self._checks.get(name)

    def get_checks_by_priority(self, required_only: bool = False) -> List[HealthCheckPlugin]:
        """Checks in execution order, optionally only those gating /readyz."""
        checks = sorted(self._checks.values(), key=lambda c: (c.priority, c.name))
        if required_only:
            checks = [c for c in checks if c.required_for_ready]
        return checks

    def clear(self) -> None:
        self._checks.clear()

    def __len__(self) -> int:
        return len(self._checks)

    def __contains__(self, name: str) -> bool:
        return name in self._checks


_registry = HealthCheckRegistry()


def get_registry() -> HealthCheckRegistry:
    """Process-wide registry used by the decorator and the router."""
    return _registry


def register_check(
    category: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
    required_for_ready: Optional[bool] = None,
):
    """
    Class decorator: instantiate the check and add it to the registry.

    The check's priority is taken from its category.
    """
    def decorator(cls: Type[HealthCheckPlugin]) -> Type[HealthCheckPlugin]:
        if category is not None:
            cls.category = HealthCheckCategory(category)
        cls.priority = cls.category.default_priority
        if timeout_seconds is not None:
            cls.timeout_seconds = timeout_seconds
        if required_for_ready is not None:
            cls.required_for_ready = required_for_ready

        _registry.register(cls())
        return cls

    return decorator


__all__ = [
    "HealthCheckRegistry",
    "get_registry",
    "register_check",
]
