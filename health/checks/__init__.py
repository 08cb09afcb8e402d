# ============================================================================
# HEALTH CHECK PLUGINS
# ============================================================================
# STATUS: Infrastructure - Health check implementations
# PURPOSE: Specific health checks for the SEO meta service
# ============================================================================
"""
Health Check Plugins

Startup Checks (priority 10):
- process: Basic process health (always healthy if running)
- config: Database connection configured

Database Checks (priority 30):
- postgres: Connection pool can run a query
- seoapp_schema: Expected tables exist

Application Checks (priority 40):
- meta_service: Update endpoint services wired

Import this module to register all checks:
    import health.checks
"""

from health.checks.startup import ProcessCheck, ConfigCheck
from health.checks.database import PostgresCheck, SchemaCheck
from health.checks.application import MetaServiceCheck

__all__ = [
    "ProcessCheck",
    "ConfigCheck",
    "PostgresCheck",
    "SchemaCheck",
    "MetaServiceCheck",
]
