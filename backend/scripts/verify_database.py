#!/usr/bin/env python3
"""
Verify database health: row counts, orphans, duplicates and unversioned
meal analyses.

Usage:
    python scripts/verify_database.py

Exits with status 1 when anything needs cleaning up.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from diabfit.core.database import get_db_context
from diabfit.services.maintenance_service import MaintenanceService


def main() -> int:
    with get_db_context() as db:
        report = MaintenanceService(db).verify()

    print("\n" + "=" * 60)
    print("📊 DATABASE VERIFICATION")
    print("=" * 60)

    print("\n📁 Record Counts:")
    for table, count in report.table_counts.items():
        print(f"  {table:<32} {count}")

    print("\n🔗 Orphaned Rows:")
    for table, count in report.orphan_counts.items():
        marker = "⚠️ " if count else "  "
        print(f"{marker}{table:<32} {count}")

    print(f"\n👥 Duplicate emails: {report.duplicate_emails}")
    print(f"🍽  Meal analyses without version: {report.meal_analyses_missing_version}")

    print(f"\n{'='*60}")
    if report.healthy:
        print("✅ Database is healthy")
        return 0
    print("⚠️  Issues found. Run scripts/cleanup_database.py to fix them.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
