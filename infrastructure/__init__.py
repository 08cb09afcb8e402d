# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - Schema deployment and caller authentication
# PURPOSE: Database bootstrap plus identity and capability resolution
# ============================================================================
"""
Infrastructure module for the SEO meta service.

Provides:
- DatabaseInitializer: Bootstrap the seoapp schema
- initialize_database: Convenience function for deployment
- auth: Bearer-token identity and capability checks (see infrastructure.auth)
"""

from infrastructure.database_initializer import (
    DatabaseInitializer,
    InitializationResult,
    StepResult,
    initialize_database,
)

__all__ = [
    'DatabaseInitializer',
    'InitializationResult',
    'StepResult',
    'initialize_database',
]
