# ============================================================================
# HEALTH CHECK CORE TYPES
# ============================================================================
# STATUS: Infrastructure - Health check plugin interface and results
# PURPOSE: Statuses, categories, results and the plugin base class
# ============================================================================
"""
Health Check Core Types

A check reports healthy, degraded or unhealthy; an aggregate takes the
worst of its checks. Checks run grouped by category:

    startup (10)      process alive, configuration present
    database (30)     pool reachable, seoapp tables deployed
    application (40)  update endpoint wired
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Optional


class HealthStatus(str, Enum):
    """Outcome of a check, ordered from best to worst."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"

    @property
    def severity(self) -> int:
        return list(HealthStatus).index(self)

    @property
    def http_code(self) -> int:
        return _HTTP_CODES[self]

    @classmethod
    def aggregate(cls, statuses: Iterable["HealthStatus"]) -> "HealthStatus":
        """Worst status wins; no statuses means healthy."""
        return max(statuses, key=lambda s: s.severity, default=cls.HEALTHY)


_HTTP_CODES = {
    HealthStatus.HEALTHY: 200,
    HealthStatus.DEGRADED: 206,
    HealthStatus.UNHEALTHY: 503,
}


class HealthCheckCategory(str, Enum):
    """Check groups; lower priority runs first."""
    STARTUP = "startup"
    DATABASE = "database"
    APPLICATION = "application"

    @property
    def default_priority(self) -> int:
        return {"startup": 10, "database": 30, "application": 40}[self.value]


@dataclass
class HealthCheckResult:
    """What one check found, plus how long it took."""
    status: HealthStatus
    message: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    duration_ms: float = 0.0

    @classmethod
    def healthy(cls, message: Optional[str] = None, **details) -> "HealthCheckResult":
        return cls(HealthStatus.HEALTHY, message, details)

    @classmethod
    def degraded(cls, message: str, **details) -> "HealthCheckResult":
        return cls(HealthStatus.DEGRADED, message, details)

    @classmethod
    def unhealthy(cls, message: str, **details) -> "HealthCheckResult":
        return cls(HealthStatus.UNHEALTHY, message, details)

    @classmethod
    def from_exception(cls, e: Exception) -> "HealthCheckResult":
        return cls.unhealthy(str(e) or type(e).__name__, exception_type=type(e).__name__)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"status": self.status.value, "duration_ms": round(self.duration_ms, 2)}
        if self.message:
            body["message"] = self.message
        if self.details:
            body["details"] = self.details
        return body


@dataclass
class AggregatedHealthResult:
    """Results of several checks under one overall status."""
    checks: Dict[str, HealthCheckResult]
    total_duration_ms: float
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def status(self) -> HealthStatus:
        return HealthStatus.aggregate(r.status for r in self.checks.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "checks": {name: r.to_dict() for name, r in self.checks.items()},
            "total_duration_ms": round(self.total_duration_ms, 2),
            "checked_at": self.checked_at.isoformat(),
        }


class HealthCheckPlugin(ABC):
    """
    Base class for checks.

    Subclasses set name (unique), optionally category, timeout_seconds and
    required_for_ready (False keeps a failing check out of /readyz), and
    implement check(). Exceptions and timeouts are turned into unhealthy
    results by the executor.
    """

    name: str = "unnamed"
    category: HealthCheckCategory = HealthCheckCategory.APPLICATION
    priority: int = 50
    timeout_seconds: float = 5.0
    required_for_ready: bool = True

    @abstractmethod
    async def check(self) -> HealthCheckResult:
        """Run the check."""
