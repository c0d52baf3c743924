#!/usr/bin/env python3
"""
Clean up the Diabfit database.

This script:
1. Removes duplicate user profiles (keeps the newest per email)
2. Deletes orphaned rows whose user (or medication) no longer exists
3. Backfills missing meal_analyses columns with their defaults

Usage:
    python scripts/cleanup_database.py [--dry-run] [--yes]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.exc import SQLAlchemyError

from diabfit.core.database import SessionLocal
from diabfit.services.maintenance_service import MaintenanceService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def confirm_cleanup(duplicates: dict, orphans: dict) -> bool:
    """Show what will be removed and ask for confirmation."""
    print("\n" + "=" * 70)
    print("⚠️  DATABASE CLEANUP")
    print("=" * 70)
    print(f"\nDuplicate emails: {len(duplicates)}")
    for email, ids in duplicates.items():
        print(f"  - {email}: keeping {ids[0]}, removing {len(ids) - 1}")
    print("\nOrphaned rows:")
    for table, count in orphans.items():
        print(f"  - {table:<32} {count}")
    print("\n" + "=" * 70)

    response = input("\nType 'YES' to proceed: ")
    if response != "YES":
        print("\n❌ Cleanup cancelled.")
        return False
    return True


def print_report(report) -> None:
    title = "DRY RUN REPORT" if report.dry_run else "CLEANUP COMPLETE"
    print("\n" + "=" * 70)
    print(f"✅ {title}")
    print("=" * 70)
    print(f"\n  Duplicate emails:          {report.duplicate_emails}")
    print(f"  Duplicate users removed:   {report.duplicate_users_removed}")
    print(f"  Orphaned rows removed:     {report.total_orphans}")
    for table, count in report.orphans_removed.items():
        if count:
            print(f"    - {table}: {count}")
    print(f"  Meal analyses backfilled:  {report.meal_analyses_backfilled}")
    if report.dry_run:
        print("\nNothing was changed. Re-run without --dry-run to apply.")
    print()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Clean up the Diabfit database")
    parser.add_argument(
        "--dry-run", action="store_true", help="Report what would change without deleting"
    )
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        service = MaintenanceService(db)
        if not args.dry_run and not args.yes:
            if not confirm_cleanup(service.find_duplicate_users(), service.find_orphans()):
                return 1

        print("\n🧹 Running database cleanup...")
        report = service.run_all(dry_run=args.dry_run)
        print_report(report)
        return 0
    except SQLAlchemyError as e:
        logger.error(f"❌ Cleanup failed, no changes were committed: {e}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
