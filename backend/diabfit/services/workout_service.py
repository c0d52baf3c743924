"""Workout programs: catalog reads, enrollment, logged sessions and achievements."""

import logging
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..core.exceptions import ConflictError, NotFoundError, ValidationFailedError
from ..models import (
    ExerciseLibraryItem,
    UserAchievement,
    UserExercisePerformance,
    UserWorkoutPlan,
    UserWorkoutSession,
    WorkoutAchievement,
    WorkoutPlan,
    WorkoutSession,
)
from ..schemas.workouts import (
    EnrollmentStatus,
    WorkoutLogCreate,
    WorkoutProgress,
    WorkoutSessionStatus,
)
from ..utils.time_utils import utcnow
from .record_service import OwnedRecordService

logger = logging.getLogger(__name__)

FITNESS_LEVELS = ["beginner", "intermediate", "advanced", "athlete"]

# Enrollments in these states can no longer change status.
FINAL_STATUSES = {EnrollmentStatus.COMPLETED.value, EnrollmentStatus.CANCELLED.value}


def longest_daily_streak(days: Iterable[date]) -> int:
    """Longest run of consecutive calendar days."""
    longest = run = 0
    previous = None
    for day in sorted(set(days)):
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        longest = max(longest, run)
        previous = day
    return longest


class WorkoutService:
    """
    Workout programs for a user.

    Catalog rows are shared and only active plans and achievements are
    visible. Enrollments and logged sessions are owner-scoped through
    OwnedRecordService.
    """

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db
        self.settings = get_settings()
        self.enrollments = OwnedRecordService(db, UserWorkoutPlan, order_by="created_at")
        self.logs = OwnedRecordService(db, UserWorkoutSession, order_by="completed_at")

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def list_plans(
        self, target_condition: Optional[str] = None, fitness_level: Optional[str] = None
    ) -> List[WorkoutPlan]:
        query = self.db.query(WorkoutPlan).filter(WorkoutPlan.is_active.is_(True))
        if target_condition:
            query = query.filter(WorkoutPlan.target_condition == target_condition)
        if fitness_level:
            query = query.filter(WorkoutPlan.fitness_level == fitness_level)

        def level_rank(plan: WorkoutPlan) -> int:
            if plan.fitness_level in FITNESS_LEVELS:
                return FITNESS_LEVELS.index(plan.fitness_level)
            return len(FITNESS_LEVELS)

        return sorted(query.all(), key=lambda p: (p.target_condition, level_rank(p), p.name))

    def get_plan(self, plan_id: str) -> WorkoutPlan:
        plan = (
            self.db.query(WorkoutPlan)
            .filter(WorkoutPlan.id == plan_id, WorkoutPlan.is_active.is_(True))
            .first()
        )
        if plan is None:
            raise NotFoundError("Workout plan not found")
        return plan

    def list_exercises(
        self, category: Optional[str] = None, difficulty_level: Optional[str] = None
    ) -> List[ExerciseLibraryItem]:
        query = self.db.query(ExerciseLibraryItem)
        if category:
            query = query.filter(ExerciseLibraryItem.category == category)
        if difficulty_level:
            query = query.filter(ExerciseLibraryItem.difficulty_level == difficulty_level)
        return query.order_by(ExerciseLibraryItem.name.asc()).all()

    def get_exercise(self, exercise_id: str) -> ExerciseLibraryItem:
        exercise = self.db.get(ExerciseLibraryItem, exercise_id)
        if exercise is None:
            raise NotFoundError("Exercise not found")
        return exercise

    def list_achievements(self) -> List[WorkoutAchievement]:
        return (
            self.db.query(WorkoutAchievement)
            .filter(WorkoutAchievement.is_active.is_(True))
            .order_by(WorkoutAchievement.reward_points.asc(), WorkoutAchievement.name.asc())
            .all()
        )

    # ------------------------------------------------------------------
    # Enrollment
    # ------------------------------------------------------------------

    def enroll(
        self,
        user_id: str,
        plan_id: str,
        start_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> UserWorkoutPlan:
        """Start a plan; a user can only have one open enrollment per plan."""
        plan = self.get_plan(plan_id)
        open_statuses = [EnrollmentStatus.ACTIVE.value, EnrollmentStatus.PAUSED.value]
        existing = (
            self.enrollments.query(user_id)
            .filter(
                UserWorkoutPlan.workout_plan_id == plan.id,
                UserWorkoutPlan.status.in_(open_statuses),
            )
            .first()
        )
        if existing is not None:
            raise ConflictError("Already enrolled in this workout plan")

        start_date = start_date or utcnow().date()
        enrollment = self.enrollments.create(
            user_id,
            {
                "workout_plan_id": plan.id,
                "start_date": start_date,
                "target_end_date": start_date + timedelta(weeks=plan.duration_weeks),
                "status": EnrollmentStatus.ACTIVE.value,
                "notes": notes,
            },
        )
        logger.info(f"User {user_id} enrolled in workout plan {plan.name}")
        return enrollment

    def list_enrollments(
        self, user_id: str, status: Optional[EnrollmentStatus] = None
    ) -> List[UserWorkoutPlan]:
        query = self.enrollments.query(user_id)
        if status is not None:
            query = query.filter(UserWorkoutPlan.status == status.value)
        return query.order_by(UserWorkoutPlan.created_at.desc()).all()

    def update_enrollment(
        self, user_id: str, enrollment_id: str, data: Dict[str, Any]
    ) -> UserWorkoutPlan:
        """Pause, resume or cancel an enrollment, or edit its notes."""
        enrollment = self.enrollments.get(user_id, enrollment_id)
        status = data.get("status")
        if status is not None:
            status = EnrollmentStatus(status).value
            if enrollment.status in FINAL_STATUSES and status != enrollment.status:
                raise ValidationFailedError(f"Enrollment is already {enrollment.status}")
            data = {**data, "status": status}
        return self.enrollments.update(user_id, enrollment_id, data)

    # ------------------------------------------------------------------
    # Logged sessions
    # ------------------------------------------------------------------

    def _completed_logs(self, user_id: str, enrollment_id: Optional[str] = None):
        query = self.logs.query(user_id).filter(
            UserWorkoutSession.status == WorkoutSessionStatus.COMPLETED.value
        )
        if enrollment_id is not None:
            query = query.filter(UserWorkoutSession.user_workout_plan_id == enrollment_id)
        return query

    def log_workout(
        self, user_id: str, payload: WorkoutLogCreate, enrollment_id: Optional[str] = None
    ) -> Tuple[UserWorkoutSession, Optional[UserWorkoutPlan], List[UserAchievement]]:
        """
        Record a workout, advance the enrollment and award achievements.

        Returns:
            The logged session, the enrollment (if any) and newly earned achievements
        """
        enrollment = None
        if enrollment_id is not None:
            enrollment = self.enrollments.get(user_id, enrollment_id)
            if enrollment.status != EnrollmentStatus.ACTIVE.value:
                raise ValidationFailedError(f"Enrollment is {enrollment.status}, not active")

        if payload.workout_session_id is not None:
            planned = self.db.get(WorkoutSession, payload.workout_session_id)
            if planned is None or (
                enrollment is not None and planned.workout_plan_id != enrollment.workout_plan_id
            ):
                raise NotFoundError("Workout session not found in this plan")

        for performance in payload.performances:
            self.get_exercise(performance.exercise_id)

        completed = payload.status is WorkoutSessionStatus.COMPLETED
        log = UserWorkoutSession(
            user_id=user_id,
            user_workout_plan_id=enrollment.id if enrollment is not None else None,
            workout_session_id=payload.workout_session_id,
            status=payload.status.value,
            completed_at=payload.completed_at or (utcnow() if completed else None),
            **payload.model_dump(
                exclude={"workout_session_id", "status", "completed_at", "performances"}
            ),
        )
        log.performances = [
            UserExercisePerformance(user_id=user_id, **performance.model_dump())
            for performance in payload.performances
        ]
        self.db.add(log)
        self.db.flush()

        if enrollment is not None and completed:
            self._advance(enrollment)
        self.db.commit()

        new_achievements = self.evaluate_achievements(user_id) if completed else []
        self.db.refresh(log)
        if enrollment is not None:
            self.db.refresh(enrollment)
        return log, enrollment, new_achievements

    def _advance(self, enrollment: UserWorkoutPlan) -> None:
        plan = enrollment.plan
        done = self._completed_logs(enrollment.user_id, enrollment.id).count()
        total = plan.total_sessions

        enrollment.progress_percentage = round(min(100.0, done / total * 100), 1) if total else 100.0
        enrollment.current_session = min(done + 1, total) if total else 1
        enrollment.current_week = min(done // plan.sessions_per_week + 1, plan.duration_weeks)
        if total and done >= total:
            enrollment.status = EnrollmentStatus.COMPLETED.value
            logger.info(f"Enrollment {enrollment.id} completed {plan.name}")
        enrollment.updated_at = utcnow()

    def list_logs(self, user_id: str, **filters) -> List[UserWorkoutSession]:
        return self.logs.list(user_id, **filters)

    # ------------------------------------------------------------------
    # Achievements and progress
    # ------------------------------------------------------------------

    def achievement_metrics(self, user_id: str) -> Dict[str, int]:
        low, high = self.settings.glucose_low_threshold, self.settings.glucose_high_threshold
        logs = self._completed_logs(user_id).all()
        monitored = [
            log for log in logs if log.glucose_before is not None and log.glucose_after is not None
        ]
        return {
            "sessions_completed": len(logs),
            "glucose_monitored_sessions": len(monitored),
            "successful_glucose_management": sum(
                1
                for log in monitored
                if low <= log.glucose_before <= high and low <= log.glucose_after <= high
            ),
            "consecutive_days": longest_daily_streak(
                log.completed_at.date() for log in logs if log.completed_at is not None
            ),
        }

    def evaluate_achievements(self, user_id: str) -> List[UserAchievement]:
        """
        Award every active achievement whose criteria are all met.

        ``general`` achievements apply to everyone; condition-specific ones
        only to users enrolled in a plan for that condition.
        """
        metrics = self.achievement_metrics(user_id)
        conditions = {"general"} | {
            enrollment.plan.target_condition for enrollment in self.list_enrollments(user_id)
        }
        earned = {
            row[0]
            for row in self.db.query(UserAchievement.achievement_id)
            .filter(UserAchievement.user_id == user_id)
            .all()
        }

        awarded = []
        for achievement in self.list_achievements():
            if achievement.id in earned or achievement.condition_type not in conditions:
                continue
            criteria = achievement.criteria or {}
            if not criteria or any(metrics.get(key, 0) < target for key, target in criteria.items()):
                continue
            row = UserAchievement(
                user_id=user_id,
                achievement_id=achievement.id,
                progress_data={key: metrics.get(key, 0) for key in criteria},
            )
            self.db.add(row)
            awarded.append(row)

        if awarded:
            self.db.commit()
            logger.info(
                f"User {user_id} earned {', '.join(a.achievement.name for a in awarded)}"
            )
        return awarded

    def list_user_achievements(self, user_id: str) -> List[UserAchievement]:
        return (
            self.db.query(UserAchievement)
            .filter(UserAchievement.user_id == user_id)
            .order_by(UserAchievement.earned_at.asc())
            .all()
        )

    def progress(self, user_id: str) -> WorkoutProgress:
        logs = self._completed_logs(user_id).all()
        changes = [
            log.glucose_after - log.glucose_before
            for log in logs
            if log.glucose_before is not None and log.glucose_after is not None
        ]
        return WorkoutProgress(
            sessions_completed=len(logs),
            total_minutes=sum(log.duration_minutes or 0 for log in logs),
            total_calories=sum(log.calories_burned or 0 for log in logs),
            average_glucose_change=round(sum(changes) / len(changes), 1) if changes else None,
            active_enrollments=len(self.list_enrollments(user_id, EnrollmentStatus.ACTIVE)),
            achievement_points=sum(
                row.achievement.reward_points for row in self.list_user_achievements(user_id)
            ),
        )
