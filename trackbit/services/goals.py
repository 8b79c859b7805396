import logging
from datetime import date, timedelta
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from trackbit import crud
from trackbit.config import settings
from trackbit.core.dates import DateLike, date_range, parse_date
from trackbit.errors import NetworkError, ValidationError
from trackbit.models import GoalCheckin, HabitGoal
from trackbit.services.habits import HabitService

log = logging.getLogger(__name__)

HIGHLY_EFFECTIVE = "Highly Effective"
MODERATELY_EFFECTIVE = "Moderately Effective"
NEEDS_IMPROVEMENT = "Needs Improvement"
CHECKIN_STATUSES = ("hit", "miss")


def effectiveness_label(ratio: float) -> str:
    if ratio >= settings.GOAL_EFFECTIVE_THRESHOLD:
        return HIGHLY_EFFECTIVE
    if ratio >= settings.GOAL_MODERATE_THRESHOLD:
        return MODERATELY_EFFECTIVE
    return NEEDS_IMPROVEMENT


class GoalService:
    def __init__(self, habits: HabitService):
        self.habits = habits
        self.db = habits.db
        self.user_id = habits.user_id

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.warning("Rolled back goal write for user=%s: %s", self.user_id, exc)
            raise NetworkError("Could not save changes") from exc

    def create_goal(self, habit_id: int, target_days: int, notes: Optional[str] = None, start: Optional[DateLike] = None) -> HabitGoal:
        if self.habits.get_habit(habit_id) is None:
            raise ValidationError("Please select a habit")
        try:
            target_days = int(target_days)
        except (TypeError, ValueError):
            raise ValidationError("Target days must be a whole number")
        if target_days < 1:
            raise ValidationError("Target days must be at least 1")

        start_date = parse_date(start) if start is not None else date.today()
        goal = HabitGoal(
            user_id=self.user_id,
            habit_id=habit_id,
            target_days=target_days,
            start_date=start_date,
            end_date=start_date + timedelta(days=target_days),
            notes=(notes or "").strip() or None,
        )
        self.db.add(goal)
        self._commit()
        log.info("Goal created id=%s habit=%s window=%s..%s", goal.id, habit_id, goal.start_date, goal.end_date)
        return goal

    def get_goal(self, goal_id: int) -> Optional[HabitGoal]:
        return crud.get_goal(self.db, self.user_id, goal_id)

    def list_goals(self, habit_id: Optional[int] = None) -> list[HabitGoal]:
        return crud.list_goals(self.db, self.user_id, habit_id)

    def delete_goal(self, goal_id: int) -> bool:
        goal = self.get_goal(goal_id)
        if goal is None:
            return False
        try:
            crud.delete_goal_rows(self.db, goal)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise NetworkError("Could not delete goal") from exc
        self._commit()
        log.info("Goal deleted id=%s user=%s", goal_id, self.user_id)
        return True

    def assess_goal(self, goal: HabitGoal, today: Optional[DateLike] = None) -> dict[str, Any]:
        """Score the goal window against completed logs. Read-only."""
        window = date_range(goal.start_date, goal.end_date)
        done = set(self.habits.get_completed_dates(goal.habit_id))
        completed_days = sum(1 for d in window if d in done)
        total_days = len(window)
        ratio = completed_days / total_days if total_days else 0.0

        checkins = crud.list_checkins(self.db, goal.id)
        today_d = parse_date(today) if today is not None else date.today()
        return {
            "goal_id": goal.id,
            "habit_id": goal.habit_id,
            "completed_days": completed_days,
            "total_days": total_days,
            "progress": ratio * 100,
            "is_effective": ratio >= settings.GOAL_EFFECTIVE_THRESHOLD,
            "label": effectiveness_label(ratio),
            "days_remaining": max((goal.end_date - today_d).days, 0),
            "hits": sum(1 for c in checkins if c.status == "hit"),
            "misses": sum(1 for c in checkins if c.status == "miss"),
        }

    def add_checkin(self, goal_id: int, check_date: DateLike, status: str, notes: Optional[str] = None) -> Optional[GoalCheckin]:
        goal = self.get_goal(goal_id)
        if goal is None:
            return None
        status = (status or "").strip().lower()
        if status not in CHECKIN_STATUSES:
            raise ValidationError("Status must be 'hit' or 'miss'")

        checkin = GoalCheckin(goal_id=goal.id, check_date=parse_date(check_date), status=status, notes=(notes or "").strip() or None)
        self.db.add(checkin)
        self._commit()
        return checkin

    def list_checkins(self, goal_id: int) -> list[GoalCheckin]:
        if self.get_goal(goal_id) is None:
            return []
        return crud.list_checkins(self.db, goal_id)
