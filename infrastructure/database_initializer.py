# ============================================================================
# DATABASE INITIALIZER - INFRASTRUCTURE AS CODE
# ============================================================================
# STATUS: Infrastructure - Database initialization
# PURPOSE: Bootstrap the seoapp schema (users, tokens, content, meta)
# ============================================================================
"""
DatabaseInitializer - Infrastructure as Code for the SEO meta service.

Initializes the seoapp schema:
1. Schema creation (seoapp)
2. Table creation (users, api_tokens, content_items, content_meta)
3. Index creation

All statements are idempotent (safe to run multiple times).

Usage:
    from infrastructure import DatabaseInitializer

    initializer = DatabaseInitializer()
    result = initializer.initialize_all()

    # Dry run (show SQL without executing)
    result = initializer.initialize_all(dry_run=True)

    # Verify installation
    status = initializer.verify_installation()
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import psycopg
from psycopg import sql

from repositories.database import SCHEMA, get_connection_string, mask_conninfo

logger = logging.getLogger(__name__)


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class StepResult:
    """Result of a single initialization step."""
    name: str
    status: str  # 'success', 'failed', 'skipped'
    message: str = ""
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class InitializationResult:
    """Complete result of database initialization."""
    target: str
    timestamp: str
    success: bool
    steps: List[StepResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "target": self.target,
            "timestamp": self.timestamp,
            "success": self.success,
            "steps": [
                {
                    "name": s.name,
                    "status": s.status,
                    "message": s.message,
                    "error": s.error,
                    "details": s.details,
                }
                for s in self.steps
            ],
            "errors": self.errors,
        }


# ============================================================================
# DATABASE INITIALIZER
# ============================================================================

class DatabaseInitializer:
    """Database initialization for the seoapp schema."""

    SCHEMA_NAME = SCHEMA
    EXPECTED_TABLES = ["users", "api_tokens", "content_items", "content_meta"]

    def __init__(self, connection_string: Optional[str] = None):
        self.conninfo = connection_string or get_connection_string()
        self.target = mask_conninfo(self.conninfo)

    # ========================================================================
    # DDL
    # ========================================================================

    def generate_ddl_statements(self) -> List[sql.Composed]:
        """DDL statements for the seoapp schema, in dependency order."""
        schema = sql.Identifier(self.SCHEMA_NAME)

        def table(name: str) -> sql.Identifier:
            return sql.Identifier(self.SCHEMA_NAME, name)

        return [
            sql.SQL("CREATE SCHEMA IF NOT EXISTS {}").format(schema),
            sql.SQL("""
                CREATE TABLE IF NOT EXISTS {} (
                    id BIGSERIAL PRIMARY KEY,
                    login VARCHAR(60) NOT NULL UNIQUE,
                    role VARCHAR(40) NOT NULL DEFAULT 'subscriber',
                    extra_caps TEXT[] NOT NULL DEFAULT '{{}}',
                    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                )
            """).format(table("users")),
            sql.SQL("""
                CREATE TABLE IF NOT EXISTS {} (
                    token_hash CHAR(64) PRIMARY KEY,
                    user_id BIGINT NOT NULL REFERENCES {} (id) ON DELETE CASCADE,
                    label VARCHAR(100),
                    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                    expires_at TIMESTAMPTZ,
                    revoked_at TIMESTAMPTZ
                )
            """).format(table("api_tokens"), table("users")),
            sql.SQL("""
                CREATE TABLE IF NOT EXISTS {} (
                    id BIGSERIAL PRIMARY KEY,
                    kind VARCHAR(20) NOT NULL,
                    status VARCHAR(20) NOT NULL DEFAULT 'draft',
                    author_id BIGINT REFERENCES {} (id) ON DELETE SET NULL,
                    title TEXT NOT NULL DEFAULT '',
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                )
            """).format(table("content_items"), table("users")),
            sql.SQL("""
                CREATE TABLE IF NOT EXISTS {} (
                    item_id BIGINT NOT NULL REFERENCES {} (id) ON DELETE CASCADE,
                    meta_key VARCHAR(255) NOT NULL,
                    meta_value TEXT,
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                    PRIMARY KEY (item_id, meta_key)
                )
            """).format(table("content_meta"), table("content_items")),
            sql.SQL("CREATE INDEX IF NOT EXISTS idx_content_items_kind ON {} (kind)").format(
                table("content_items")
            ),
            sql.SQL("CREATE INDEX IF NOT EXISTS idx_api_tokens_user ON {} (user_id)").format(
                table("api_tokens")
            ),
        ]

    # ========================================================================
    # OPERATIONS
    # ========================================================================

    def initialize_all(self, dry_run: bool = False) -> InitializationResult:
        """
        Create schema, tables and indexes.

        Args:
            dry_run: If True, log SQL but don't execute
        """
        result = InitializationResult(
            target=self.target,
            timestamp=datetime.now(timezone.utc).isoformat(),
            success=False,
        )
        statements = self.generate_ddl_statements()

        logger.info(f"Initializing {self.SCHEMA_NAME} on {self.target} ({'DRY RUN' if dry_run else 'EXECUTE'})")

        if dry_run:
            rendered = [stmt.as_string() for stmt in statements]
            for i, text in enumerate(rendered, 1):
                logger.info(f"   [{i}] {' '.join(text.split())}")
            result.steps.append(StepResult(
                name="deploy_schema",
                status="skipped",
                message=f"[DRY RUN] Would execute {len(statements)} statements",
                details={"statements": rendered},
            ))
            result.success = True
            return result

        step = StepResult(name="deploy_schema", status="pending")
        try:
            with psycopg.connect(self.conninfo) as conn:
                for stmt in statements:
                    conn.execute(stmt)
            step.status = "success"
            step.message = f"Executed {len(statements)} statements"
        except psycopg.Error as e:
            step.status = "failed"
            step.error = str(e)
            step.message = f"Schema deployment failed: {e}"
            result.errors.append(step.message)
            logger.error(step.message)
        result.steps.append(step)

        if step.status == "success":
            verify = self.verify_installation()
            missing = [t for t in self.EXPECTED_TABLES if t not in verify["tables"]]
            result.steps.append(StepResult(
                name="verify_tables",
                status="failed" if missing else "success",
                message=f"Missing tables: {missing}" if missing else "All tables present",
                details=verify,
            ))
            if missing:
                result.errors.append(f"Missing tables after deployment: {missing}")

        result.success = not result.errors
        logger.info(f"Initialization {'complete' if result.success else 'FAILED'}")
        return result

    def verify_installation(self) -> Dict[str, Any]:
        """Schema presence and per-table column counts."""
        with psycopg.connect(self.conninfo) as conn:
            schema_exists = conn.execute(
                "SELECT 1 FROM information_schema.schemata WHERE schema_name = %s",
                (self.SCHEMA_NAME,),
            ).fetchone() is not None

            rows = conn.execute(
                """
                SELECT table_name, COUNT(*) FROM information_schema.columns
                WHERE table_schema = %s
                GROUP BY table_name
                """,
                (self.SCHEMA_NAME,),
            ).fetchall()

        return {
            "schema_exists": schema_exists,
            "tables": {name: {"columns": count} for name, count in rows},
        }


def initialize_database(dry_run: bool = False) -> InitializationResult:
    """Convenience wrapper: initialize the schema from environment settings."""
    return DatabaseInitializer().initialize_all(dry_run=dry_run)
