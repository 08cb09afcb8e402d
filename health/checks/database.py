# ============================================================================
# DATABASE HEALTH CHECKS
# ============================================================================
# STATUS: Infrastructure - PostgreSQL and schema checks
# PURPOSE: Database connectivity and schema availability
# ============================================================================
"""
Database Health Checks

PostgreSQL connectivity and schema checks (priority 30):
- PostgresCheck: The application pool can run a query
- SchemaCheck: seoapp tables exist
"""

import logging

from psycopg.rows import dict_row

from health.core import HealthCheckPlugin, HealthCheckResult
from health.registry import register_check
from infrastructure.database_initializer import DatabaseInitializer
from repositories.database import SCHEMA, get_current_pool

logger = logging.getLogger(__name__)


@register_check(category="database")
class PostgresCheck(HealthCheckPlugin):
    """PostgreSQL connectivity through the application pool."""

    name = "postgres"
    timeout_seconds = 5.0

    async def check(self) -> HealthCheckResult:
        pool = get_current_pool()
        if pool is None:
            return HealthCheckResult.unhealthy(message="Connection pool not initialized")

        async with pool.connection() as conn:
            conn.row_factory = dict_row
            result = await conn.execute("SELECT 1 AS ok")
            row = await result.fetchone()

        if row and row["ok"] == 1:
            stats = pool.get_stats()
            return HealthCheckResult.healthy(
                message="PostgreSQL connected",
                pool_size=stats.get("pool_size"),
                pool_available=stats.get("pool_available"),
            )
        return HealthCheckResult.unhealthy(message="PostgreSQL query returned unexpected result")


@register_check(category="database")
class SchemaCheck(HealthCheckPlugin):
    """Expected seoapp tables are present."""

    name = "seoapp_schema"
    timeout_seconds = 5.0

    async def check(self) -> HealthCheckResult:
        pool = get_current_pool()
        if pool is None:
            return HealthCheckResult.unhealthy(message="Connection pool not initialized")

        async with pool.connection() as conn:
            conn.row_factory = dict_row
            result = await conn.execute(
                """
                SELECT table_name FROM information_schema.tables
                WHERE table_schema = %s
                """,
                (SCHEMA,),
            )
            rows = await result.fetchall()

        present = {row["table_name"] for row in rows}
        missing = [t for t in DatabaseInitializer.EXPECTED_TABLES if t not in present]
        if missing:
            return HealthCheckResult.unhealthy(
                message=f"Missing tables in {SCHEMA}: {', '.join(missing)}",
                missing=missing,
                hint="Run scripts/deploy_schema.py",
            )

        return HealthCheckResult.healthy(message=f"{SCHEMA} schema present", tables=sorted(present))


__all__ = [
    "PostgresCheck",
    "SchemaCheck",
]
