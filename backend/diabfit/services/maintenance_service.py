"""
Database maintenance: duplicate profiles, orphan rows and meal analysis
backfills.

Deletes use bulk ``DELETE ... WHERE user_id NOT IN (SELECT id FROM users)``
so the cleanup also works on databases that do not enforce foreign keys.
"""

import logging
from typing import Dict, List

from sqlalchemy import desc, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..models import USER_OWNED_MODELS, AuthUser, MealAnalysis, Medication, MedicationDose, User
from ..models.meal_analysis import ENRICHMENT_DEFAULTS
from ..schemas.account import MaintenanceReport, VerificationReport

logger = logging.getLogger(__name__)

DOSE_MEDICATION_KEY = "medication_doses.medication_id"


class MaintenanceService:
    """Cleanup and verification routines run by operators and the admin API."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db
        self.settings = get_settings()

    # ------------------------------------------------------------------
    # Duplicate users
    # ------------------------------------------------------------------

    def find_duplicate_users(self) -> Dict[str, List[str]]:
        """Email -> profile ids, newest first, for emails with several profiles."""
        emails = [
            row[0]
            for row in self.db.query(User.email)
            .group_by(User.email)
            .having(func.count(User.id) > 1)
            .all()
        ]
        duplicates: Dict[str, List[str]] = {}
        for email in emails:
            ids = [
                row[0]
                for row in self.db.query(User.id)
                .filter(User.email == email)
                .order_by(desc(User.created_at), desc(User.id))
                .all()
            ]
            duplicates[email] = ids
        return duplicates

    def deduplicate_users(self, dry_run: bool = False) -> int:
        """
        Keep the most recently created profile per email and delete the rest.

        Rows owned by a deleted profile go with it. If the kept profile has no
        auth link it inherits one from a removed duplicate.
        """
        removed = 0
        for email, ids in self.find_duplicate_users().items():
            keep_id, drop_ids = ids[0], ids[1:]
            removed += len(drop_ids)
            if dry_run:
                continue

            keep = self.db.get(User, keep_id)
            for drop_id in drop_ids:
                duplicate = self.db.get(User, drop_id)
                if keep.auth_user_id is None and duplicate.auth_user_id is not None:
                    keep.auth_user_id = duplicate.auth_user_id
                    duplicate.auth_user_id = None
                self.db.delete(duplicate)
            logger.info(f"Removed {len(drop_ids)} duplicate profiles for {email}")

        if not dry_run:
            self.db.flush()
        return removed

    # ------------------------------------------------------------------
    # Orphans
    # ------------------------------------------------------------------

    @staticmethod
    def _orphan_condition(model):
        return or_(model.user_id.is_(None), model.user_id.notin_(select(User.id)))

    @staticmethod
    def _dose_without_medication():
        return or_(
            MedicationDose.medication_id.is_(None),
            MedicationDose.medication_id.notin_(select(Medication.id)),
        )

    def find_orphans(self) -> Dict[str, int]:
        """Orphan counts per table (plus doses whose medication is gone)."""
        counts = {
            model.__tablename__: self.db.query(model)
            .filter(self._orphan_condition(model))
            .count()
            for model in USER_OWNED_MODELS
        }
        counts[DOSE_MEDICATION_KEY] = (
            self.db.query(MedicationDose).filter(self._dose_without_medication()).count()
        )
        return counts

    def delete_orphans(self, dry_run: bool = False) -> Dict[str, int]:
        if dry_run:
            return self.find_orphans()

        removed: Dict[str, int] = {}
        for model in USER_OWNED_MODELS:
            removed[model.__tablename__] = (
                self.db.query(model)
                .filter(self._orphan_condition(model))
                .delete(synchronize_session=False)
            )
        # After medications are cleaned, doses may point at nothing.
        removed[DOSE_MEDICATION_KEY] = (
            self.db.query(MedicationDose)
            .filter(self._dose_without_medication())
            .delete(synchronize_session=False)
        )
        self.db.expire_all()

        for table, count in removed.items():
            if count:
                logger.info(f"Deleted {count} orphan rows from {table}")
        return removed

    # ------------------------------------------------------------------
    # Meal analyses
    # ------------------------------------------------------------------

    def _backfill_conditions(self):
        conditions = [getattr(MealAnalysis, column).is_(None) for column in ENRICHMENT_DEFAULTS]
        conditions.append(MealAnalysis.meal_name.is_(None))
        conditions.append(MealAnalysis.meal_name == "")
        conditions.append(MealAnalysis.analysis_version.is_(None))
        conditions.append(MealAnalysis.analysis_version == "")
        return or_(*conditions)

    def count_missing_analysis_version(self) -> int:
        return (
            self.db.query(MealAnalysis)
            .filter(
                or_(MealAnalysis.analysis_version.is_(None), MealAnalysis.analysis_version == "")
            )
            .count()
        )

    def backfill_meal_analyses(self, dry_run: bool = False) -> int:
        """Fill NULL/empty enrichment columns with their defaults; returns rows touched."""
        touched = self.db.query(MealAnalysis).filter(self._backfill_conditions()).count()
        if dry_run or not touched:
            return touched

        for column, default in ENRICHMENT_DEFAULTS.items():
            attr = getattr(MealAnalysis, column)
            self.db.query(MealAnalysis).filter(attr.is_(None)).update(
                {attr: default}, synchronize_session=False
            )
        self.db.query(MealAnalysis).filter(
            or_(MealAnalysis.meal_name.is_(None), MealAnalysis.meal_name == "")
        ).update({MealAnalysis.meal_name: self.settings.default_meal_name}, synchronize_session=False)
        self.db.query(MealAnalysis).filter(
            or_(MealAnalysis.analysis_version.is_(None), MealAnalysis.analysis_version == "")
        ).update(
            {MealAnalysis.analysis_version: self.settings.default_analysis_version},
            synchronize_session=False,
        )
        self.db.expire_all()
        logger.info(f"Backfilled {touched} meal analyses")
        return touched

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def run_all(self, dry_run: bool = False) -> MaintenanceReport:
        """Deduplicate users, remove orphans and backfill, in one transaction."""
        try:
            duplicates = self.find_duplicate_users()
            report = MaintenanceReport(
                dry_run=dry_run,
                duplicate_emails=len(duplicates),
                duplicate_users_removed=self.deduplicate_users(dry_run=dry_run),
            )
            report.orphans_removed = self.delete_orphans(dry_run=dry_run)
            report.meal_analyses_backfilled = self.backfill_meal_analyses(dry_run=dry_run)

            if dry_run:
                self.db.rollback()
            else:
                self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Maintenance failed, rolled back: {e}")
            raise

        logger.info(
            f"Maintenance {'dry run' if dry_run else 'run'}: "
            f"{report.duplicate_users_removed} duplicate users, "
            f"{report.total_orphans} orphans, "
            f"{report.meal_analyses_backfilled} analyses backfilled"
        )
        return report

    def table_counts(self) -> Dict[str, int]:
        counts = {
            AuthUser.__tablename__: self.db.query(AuthUser).count(),
            User.__tablename__: self.db.query(User).count(),
        }
        for model in USER_OWNED_MODELS:
            counts[model.__tablename__] = self.db.query(model).count()
        return counts

    def verify(self) -> VerificationReport:
        orphans = self.find_orphans()
        duplicate_emails = len(self.find_duplicate_users())
        missing_version = self.count_missing_analysis_version()
        return VerificationReport(
            table_counts=self.table_counts(),
            orphan_counts=orphans,
            duplicate_emails=duplicate_emails,
            meal_analyses_missing_version=missing_version,
            healthy=(
                sum(orphans.values()) == 0 and duplicate_emails == 0 and missing_version == 0
            ),
        )
