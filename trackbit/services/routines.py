import logging
import re
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from trackbit import crud
from trackbit.core.dates import DateLike, parse_date, trailing_window
from trackbit.core.streaks import StreakStats, compute_streak
from trackbit.core.templates import get_template_by_id
from trackbit.errors import NetworkError, ValidationError
from trackbit.models import Routine, RoutineLog
from trackbit.services.habits import HabitService

log = logging.getLogger(__name__)

ROUTINE_FIELDS = ("name", "description", "habit_ids", "reminder_time", "color", "icon")
REMINDER_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class RoutineService:
    """Routines over a HabitService.

    A routine has no completion state of its own. Progress, completion and
    streaks are read from the member habits' logs on every call; RoutineLog
    rows are an audit trail only.
    """

    def __init__(self, habits: HabitService):
        self.habits = habits
        self.db = habits.db
        self.user_id = habits.user_id

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.warning("Rolled back routine write for user=%s: %s", self.user_id, exc)
            raise NetworkError("Could not save changes") from exc

    def _validate(self, data: dict[str, Any]) -> dict[str, Any]:
        name = (data.get("name") or "").strip()
        if not name:
            raise ValidationError("Routine name is required")
        data["name"] = name

        habit_ids: list[int] = []
        for raw in data.get("habit_ids") or []:
            habit_id = int(raw)
            if habit_id not in habit_ids:
                habit_ids.append(habit_id)
        if not habit_ids:
            raise ValidationError("Select at least one habit for this routine")
        unknown = [hid for hid in habit_ids if self.habits.get_habit(hid) is None]
        if unknown:
            raise ValidationError(f"Unknown habit ids: {unknown}")
        data["habit_ids"] = habit_ids

        reminder = (data.get("reminder_time") or "").strip() or None
        if reminder is not None and not REMINDER_RE.match(reminder):
            raise ValidationError("Reminder time must be HH:MM")
        data["reminder_time"] = reminder

        if not data.get("color"):
            data["color"] = "#0D9488"
        if not data.get("icon"):
            data["icon"] = "Sun"
        return data

    # CRUD

    def add_routine(self, **fields) -> Routine:
        data = self._validate({k: v for k, v in fields.items() if k in ROUTINE_FIELDS})
        habit_ids = data.pop("habit_ids")
        try:
            routine = crud.create_routine(self.db, self.user_id, habit_ids, **data)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise NetworkError("Could not save routine") from exc
        self._commit()
        log.info("Routine created id=%s user=%s habits=%s", routine.id, self.user_id, habit_ids)
        return routine

    def update_routine(self, routine_id: int, **changes) -> Optional[Routine]:
        routine = self.get_routine(routine_id)
        if routine is None:
            return None

        merged = {key: getattr(routine, key) for key in ROUTINE_FIELDS}
        merged.update({k: v for k, v in changes.items() if k in ROUTINE_FIELDS})
        data = self._validate(merged)
        for key, value in data.items():
            setattr(routine, key, value)
        self.db.add(routine)
        self._commit()
        return routine

    def archive_routine(self, routine_id: int) -> Optional[Routine]:
        routine = self.get_routine(routine_id)
        if routine is None:
            return None
        if routine.archived_at is None:
            routine.archived_at = datetime.utcnow()
            self.db.add(routine)
            self._commit()
            log.info("Routine archived id=%s user=%s", routine.id, self.user_id)
        return routine

    def delete_routine(self, routine_id: int) -> bool:
        routine = self.get_routine(routine_id)
        if routine is None:
            return False
        try:
            crud.delete_routine_rows(self.db, routine)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise NetworkError("Could not delete routine") from exc
        self._commit()
        log.info("Routine deleted id=%s user=%s", routine_id, self.user_id)
        return True

    def create_from_template(self, template_id: str) -> Optional[Routine]:
        """Build a routine from a catalog template.

        Habits whose name matches an existing active habit are reused, the
        rest are created with the template's color. New habits and the
        routine are committed together.
        """
        template = get_template_by_id(template_id)
        if template is None:
            return None

        habit_ids: list[int] = []
        for item in template["habits"]:
            habit = self.habits.find_habit_by_name(item["name"])
            if habit is None:
                habit = self.habits.add_habit(commit=False, color=template["color"], **item)
            habit_ids.append(habit.id)

        try:
            return self.add_routine(
                name=template["name"],
                description=template["description"],
                habit_ids=habit_ids,
                color=template["color"],
                icon=template["icon"],
            )
        except ValidationError:
            self.db.rollback()
            raise

    def get_routine(self, routine_id: int) -> Optional[Routine]:
        return crud.get_routine(self.db, self.user_id, routine_id)

    def get_active_routines(self) -> list[Routine]:
        return crud.list_routines(self.db, self.user_id, archived=False)

    def get_archived_routines(self) -> list[Routine]:
        return crud.list_routines(self.db, self.user_id, archived=True)

    def get_routine_logs(self, routine_id: int) -> list[RoutineLog]:
        if self.get_routine(routine_id) is None:
            return []
        return crud.list_routine_logs(self.db, routine_id)

    # Live aggregation

    def _member_ids(self, routine: Routine) -> list[int]:
        return [hid for hid in routine.habit_ids if self.habits.get_habit(hid) is not None]

    def _completed_members(self, member_ids: list[int], day: date) -> list[int]:
        done = {entry.habit_id for entry in self.habits.get_logs_for_date(day) if entry.completed}
        return [hid for hid in member_ids if hid in done]

    def get_progress(self, routine_id: int, day: DateLike) -> dict[str, Any]:
        routine = self.get_routine(routine_id)
        if routine is None:
            return {"completed": 0, "total": 0, "percentage": 0}

        members = self._member_ids(routine)
        if not members:
            return {"completed": 0, "total": 0, "percentage": 0}

        completed = len(self._completed_members(members, parse_date(day)))
        return {"completed": completed, "total": len(members), "percentage": completed / len(members) * 100}

    def is_completed_on(self, routine: Routine, day: DateLike) -> bool:
        members = self._member_ids(routine)
        if not members:
            return False
        return len(self._completed_members(members, parse_date(day))) == len(members)

    def completed_dates(self, routine_id: int) -> list[date]:
        """Dates on which every existing member habit has a completed log."""
        routine = self.get_routine(routine_id)
        if routine is None:
            return []
        members = self._member_ids(routine)
        if not members:
            return []

        per_habit = [set(self.habits.get_completed_dates(hid)) for hid in members]
        return sorted(set.intersection(*per_habit))

    def record_snapshot(self, routine_id: int, day: DateLike, commit: bool = True) -> Optional[RoutineLog]:
        routine = self.get_routine(routine_id)
        if routine is None:
            return None

        log_date = parse_date(day)
        members = self._member_ids(routine)
        done = self._completed_members(members, log_date)
        try:
            row = crud.upsert_routine_log(self.db, routine, log_date, bool(members) and len(done) == len(members), done)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise NetworkError("Could not save routine log") from exc
        if commit:
            self._commit()
        return row

    def toggle_routine_completion(self, routine_id: int, day: DateLike) -> Optional[dict[str, Any]]:
        """Complete every member habit, or clear them all if already complete.

        Member writes and the snapshot commit together or not at all.
        """
        routine = self.get_routine(routine_id)
        if routine is None:
            return None

        log_date = parse_date(day)
        target_state = not self.is_completed_on(routine, log_date)
        for habit_id in self._member_ids(routine):
            self.habits.set_completion(habit_id, log_date, target_state, commit=False)

        self.record_snapshot(routine.id, log_date, commit=False)
        self._commit()
        log.info("Routine toggled id=%s date=%s completed=%s", routine.id, log_date, target_state)
        return self.get_progress(routine.id, log_date)

    def update_routine_progress(self, routine_id: int, day: DateLike, completed_habit_ids: list[int]) -> Optional[dict[str, Any]]:
        routine = self.get_routine(routine_id)
        if routine is None:
            return None

        log_date = parse_date(day)
        wanted = {int(hid) for hid in completed_habit_ids}
        for habit_id in self._member_ids(routine):
            self.habits.set_completion(habit_id, log_date, habit_id in wanted, commit=False)

        self.record_snapshot(routine.id, log_date, commit=False)
        self._commit()
        return self.get_progress(routine.id, log_date)

    def get_routine_streak(self, routine_id: int) -> StreakStats:
        return compute_streak(self.completed_dates(routine_id))

    def routine_completion_rate(self, routine_id: int, days: int = 30, today: Optional[DateLike] = None) -> float:
        window = trailing_window(days, today or date.today())
        if not window:
            return 0.0
        done = set(self.completed_dates(routine_id))
        return sum(1 for d in window if d in done) / len(window) * 100

    def routine_completion_rate_for_date(self, day: DateLike) -> float:
        routines = self.get_active_routines()
        if not routines:
            return 0.0
        completed = sum(1 for r in routines if self.is_completed_on(r, day))
        return completed / len(routines) * 100
