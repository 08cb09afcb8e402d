#!/usr/bin/env python
# ============================================================================
# SCHEMA DEPLOYMENT SCRIPT
# ============================================================================
# PURPOSE: Deploy the seoapp schema to PostgreSQL
# USAGE:
#   python scripts/deploy_schema.py --dry-run    # Preview SQL
#   python scripts/deploy_schema.py              # Execute deployment
#   python scripts/deploy_schema.py --status     # Check current status
# ============================================================================

import argparse
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from infrastructure import DatabaseInitializer


def main():
    parser = argparse.ArgumentParser(
        description="Deploy seoapp schema to PostgreSQL",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/deploy_schema.py --dry-run     # Preview DDL without executing
  python scripts/deploy_schema.py               # Deploy schema
  python scripts/deploy_schema.py --status      # Check current installation

Environment Variables:
  DATABASE_URL          Full PostgreSQL connection string
  POSTGRES_HOST         Database host (default: localhost)
  POSTGRES_DB           Database name (default: postgres)
  POSTGRES_USER         Database user (default: postgres)
  POSTGRES_PASSWORD     Database password
  POSTGRES_PORT         Database port (default: 5432)
  POSTGRES_SSLMODE      SSL mode (default: prefer)
        """
    )
    parser.add_argument("--dry-run", action="store_true", help="Print DDL without executing")
    parser.add_argument("--status", action="store_true", help="Check current installation status")
    parser.add_argument("--connection", type=str, help="PostgreSQL connection string (overrides environment)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    initializer = DatabaseInitializer(connection_string=args.connection)

    print("=" * 70)
    print("SEO META API - Schema Deployment")
    print("=" * 70)
    print(f"Target: {initializer.target}")
    print(f"Schema: {initializer.SCHEMA_NAME}")
    print("=" * 70)

    if args.status:
        print("\n[STATUS CHECK]\n")
        status = initializer.verify_installation()
        print(f"Schema exists: {status['schema_exists']}")

        tables = status["tables"]
        print(f"\nTables ({len(tables)}):")
        for table, info in tables.items():
            print(f"  - {initializer.SCHEMA_NAME}.{table} ({info['columns']} columns)")

        missing = [t for t in initializer.EXPECTED_TABLES if t not in tables]
        if missing:
            print(f"\nMissing: {', '.join(missing)}")
            sys.exit(1)
        print("\n" + "=" * 70)
        return

    print(f"\nMode: {'DRY RUN' if args.dry_run else 'EXECUTE'}\n")
    result = initializer.initialize_all(dry_run=args.dry_run)

    print("\n[RESULTS]\n")
    for step in result.steps:
        marker = {"success": "[OK]", "failed": "[FAIL]", "skipped": "[SKIP]"}.get(step.status, "[?]")
        print(f"{marker} {step.name}: {step.message}")
        if step.error:
            print(f"   Error: {step.error}")
        if args.verbose and step.name == "deploy_schema":
            for stmt in step.details.get("statements", []):
                print(f"   {stmt.strip()}")

    print("\n" + "=" * 70)
    if not result.success:
        print("Deployment failed!")
        for error in result.errors:
            print(f"   - {error}")
        sys.exit(1)
    print("Deployment completed successfully!")
    print("=" * 70)


if __name__ == "__main__":
    main()
