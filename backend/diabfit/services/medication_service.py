"""Medication doses and adherence reporting."""

import logging
from datetime import datetime, time, timedelta
from typing import List, Optional, Tuple

from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError, ValidationFailedError
from ..models import Medication, MedicationDose
from ..schemas.insights import (
    AdherencePeriod,
    AdherenceReport,
    DoseStatus,
    OverallAdherence,
)
from ..utils.time_utils import (
    normalize_reminder_times,
    parse_reminder_time,
    to_naive_utc,
    utcnow,
)
from .record_service import OwnedRecordService

logger = logging.getLogger(__name__)

# Reminder times used when a medication has none of its own.
DEFAULT_REMINDER_TIMES = {
    "once_daily": ["08:00"],
    "twice_daily": ["08:00", "20:00"],
    "three_times_daily": ["08:00", "14:00", "20:00"],
    "four_times_daily": ["08:00", "12:00", "16:00", "20:00"],
    "every_other_day": ["08:00"],
    "weekly": ["08:00"],
}

# Days between generated dose days; anything else is daily.
DOSE_DAY_STEP = {"every_other_day": 2, "weekly": 7}


def period_bounds(period: AdherencePeriod, now: datetime) -> Tuple[datetime, datetime]:
    """
    Start (inclusive) and end (exclusive) of a reporting period around ``now``.

    week is the current ISO week, month and year are calendar periods,
    three_months is the trailing 90 days.
    """
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period is AdherencePeriod.WEEK:
        start = midnight - timedelta(days=midnight.weekday())
        return start, start + timedelta(days=7)
    if period is AdherencePeriod.MONTH:
        start = midnight.replace(day=1)
        return start, start + relativedelta(months=1)
    if period is AdherencePeriod.THREE_MONTHS:
        return now - timedelta(days=90), now
    start = midnight.replace(month=1, day=1)
    return start, start + relativedelta(years=1)


def streaks(statuses_newest_first: List[str]) -> Tuple[int, int]:
    """Current run of taken doses from the most recent one, and the longest run."""
    current = 0
    for status in statuses_newest_first:
        if status != DoseStatus.TAKEN.value:
            break
        current += 1

    longest = run = 0
    for status in statuses_newest_first:
        if status == DoseStatus.TAKEN.value:
            run += 1
            longest = max(longest, run)
        else:
            run = 0
    return current, longest


class MedicationService:
    """Dose scheduling and adherence for a user's medications."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db
        self.medications = OwnedRecordService(db, Medication, order_by="created_at")

    def _dose_query(self, user_id: str):
        return self.db.query(MedicationDose).filter(
            MedicationDose.user_id == user_id,
            MedicationDose.is_deleted.is_(False),
        )

    def get_dose(self, user_id: str, dose_id: str) -> MedicationDose:
        dose = self._dose_query(user_id).filter(MedicationDose.id == dose_id).first()
        if dose is None:
            raise NotFoundError("Medication dose not found")
        return dose

    def list_doses(
        self,
        user_id: str,
        medication_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[MedicationDose]:
        self.medications.get(user_id, medication_id)
        start, end = to_naive_utc(start), to_naive_utc(end)
        query = self._dose_query(user_id).filter(
            MedicationDose.medication_id == medication_id
        )
        if start is not None:
            query = query.filter(MedicationDose.scheduled_time >= start)
        if end is not None:
            query = query.filter(MedicationDose.scheduled_time < end)
        return query.order_by(MedicationDose.scheduled_time.asc()).all()

    def schedule_dose(
        self,
        user_id: str,
        medication_id: str,
        scheduled_time: datetime,
        notes: Optional[str] = None,
    ) -> MedicationDose:
        medication = self.medications.get(user_id, medication_id)
        if not medication.is_active:
            raise ValidationFailedError("Cannot schedule doses for an inactive medication")

        dose = MedicationDose(
            user_id=user_id,
            medication_id=medication.id,
            scheduled_time=scheduled_time,
            status=DoseStatus.SCHEDULED.value,
            notes=notes,
        )
        self.db.add(dose)
        self.db.commit()
        self.db.refresh(dose)
        return dose

    def reminder_times_for(self, medication: Medication) -> List[time]:
        """The medication's own reminder times, else its frequency's defaults."""
        values = medication.reminder_times or DEFAULT_REMINDER_TIMES.get(medication.frequency, [])
        return [parse_reminder_time(value) for value in normalize_reminder_times(values)]

    def generate_doses(
        self,
        user_id: str,
        medication_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[MedicationDose]:
        """
        Create scheduled doses from the medication's reminder times.

        The window defaults to the medication's start date (or today) through
        its end date, or one year after the start when it has none, and is
        always clipped to the medication's own dates. A dose already stored for
        the same minute is never created twice, so repeated calls only fill
        gaps.

        Returns:
            The newly created doses, oldest first
        """
        medication = self.medications.get(user_id, medication_id)
        if not medication.is_active:
            raise ValidationFailedError("Cannot schedule doses for an inactive medication")

        start, end = to_naive_utc(start), to_naive_utc(end)
        first_day = (
            datetime.combine(medication.start_date, time.min)
            if medication.start_date
            else None
        )
        last_day = (
            datetime.combine(medication.end_date, time.max)
            if medication.end_date
            else None
        )
        if start is None:
            start = first_day or utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
        elif first_day is not None:
            start = max(start, first_day)
        if end is None:
            end = last_day or start + relativedelta(years=1)
        elif last_day is not None:
            end = min(end, last_day)
        if end < start:
            return []

        existing = {
            dose.scheduled_time.replace(second=0, microsecond=0)
            for dose in self.db.query(MedicationDose).filter(
                MedicationDose.user_id == user_id,
                MedicationDose.medication_id == medication.id,
                MedicationDose.scheduled_time >= start.replace(second=0, microsecond=0),
                MedicationDose.scheduled_time <= end,
            )
        }

        times = self.reminder_times_for(medication)
        step = timedelta(days=DOSE_DAY_STEP.get(medication.frequency, 1))
        created: List[MedicationDose] = []
        day = start.date()
        while day <= end.date():
            for reminder in times:
                scheduled = datetime.combine(day, reminder)
                if scheduled < start or scheduled > end or scheduled in existing:
                    continue
                dose = MedicationDose(
                    user_id=user_id,
                    medication_id=medication.id,
                    scheduled_time=scheduled,
                    status=DoseStatus.SCHEDULED.value,
                )
                self.db.add(dose)
                created.append(dose)
                existing.add(scheduled)
            day += step

        self.db.commit()
        if created:
            logger.info(
                f"Generated {len(created)} doses for medication {medication.id} "
                f"between {start:%Y-%m-%d} and {end:%Y-%m-%d}"
            )
        return created

    def record_dose(
        self,
        user_id: str,
        dose_id: str,
        status: DoseStatus,
        taken_time: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> MedicationDose:
        dose = self.get_dose(user_id, dose_id)
        dose.status = status.value
        if status is DoseStatus.TAKEN:
            dose.taken_time = taken_time or utcnow()
        else:
            dose.taken_time = None
        if notes is not None:
            dose.notes = notes
        dose.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(dose)
        return dose

    def mark_missed_doses(self, user_id: str, now: Optional[datetime] = None) -> int:
        """Flip overdue scheduled doses to missed; returns how many changed."""
        now = now or utcnow()
        changed = (
            self._dose_query(user_id)
            .filter(
                MedicationDose.status == DoseStatus.SCHEDULED.value,
                MedicationDose.scheduled_time < now,
            )
            .update(
                {MedicationDose.status: DoseStatus.MISSED.value, MedicationDose.updated_at: now},
                synchronize_session=False,
            )
        )
        self.db.commit()
        if changed:
            logger.info(f"Marked {changed} overdue doses as missed for user {user_id}")
        return changed

    def adherence_report(
        self,
        user_id: str,
        medication_id: str,
        period: AdherencePeriod,
        now: Optional[datetime] = None,
    ) -> AdherenceReport:
        """
        Adherence over the doses already due within the period.

        Doses scheduled after ``now`` are not counted yet.
        """
        now = now or utcnow()
        start, end = period_bounds(period, now)
        due_until = min(end, now)
        doses = [
            dose
            for dose in self.list_doses(user_id, medication_id, start, end)
            if dose.scheduled_time <= due_until
        ]

        total = len(doses)
        taken = sum(1 for d in doses if d.status == DoseStatus.TAKEN.value)
        skipped = sum(1 for d in doses if d.status == DoseStatus.SKIPPED.value)
        missed = total - taken - skipped

        newest_first = [d.status for d in sorted(doses, key=lambda d: d.scheduled_time, reverse=True)]
        current, longest = streaks(newest_first)

        return AdherenceReport(
            medication_id=medication_id,
            period=period,
            start_date=start,
            end_date=end,
            total_doses=total,
            taken_doses=taken,
            skipped_doses=skipped,
            missed_doses=missed,
            adherence_percentage=round(taken / total * 100, 2) if total else 0.0,
            streak=current,
            longest_streak=longest,
        )

    def overall_adherence(
        self, user_id: str, period: AdherencePeriod, now: Optional[datetime] = None
    ) -> OverallAdherence:
        """Mean adherence across active medications that had doses due."""
        active = (
            self.db.query(Medication)
            .filter(
                Medication.user_id == user_id,
                Medication.is_deleted.is_(False),
                Medication.is_active.is_(True),
            )
            .all()
        )
        reports = [
            self.adherence_report(user_id, medication.id, period, now)
            for medication in active
        ]
        reports = [report for report in reports if report.total_doses > 0]
        if not reports:
            return OverallAdherence(period=period, adherence_percentage=0.0)

        mean = sum(r.adherence_percentage for r in reports) / len(reports)
        return OverallAdherence(
            period=period, adherence_percentage=round(mean, 2), reports=reports
        )
