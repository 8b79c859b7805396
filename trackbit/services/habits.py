import logging
from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from trackbit import crud
from trackbit.core.dates import DateLike, is_due_on, parse_date
from trackbit.core.streaks import completion_rate, completion_rate_for_date, completion_rate_for_range, compute_streak
from trackbit.errors import NetworkError, ValidationError
from trackbit.models import Habit, HabitLog, Streak
from trackbit.models.habit import ALL_DAYS, FREQUENCIES

log = logging.getLogger(__name__)

HABIT_FIELDS = ("name", "description", "icon", "color", "frequency", "target_days", "target_value", "unit")
# An explicit None on update keeps the stored value for these.
REQUIRED_FIELDS = ("name", "color", "frequency", "target_days")
DEFAULT_COLOR = "#0D9488"


def normalize_habit_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Validate habit attributes and return the cleaned copy.

    Daily habits always get every weekday. Weekly and custom habits need at
    least one day in 0..6 (Sunday=0).
    """
    data = dict(fields)
    name = (data.get("name") or "").strip()
    if not name:
        raise ValidationError("Habit name is required")
    data["name"] = name

    frequency = (data.get("frequency") or "daily").strip().lower()
    if frequency not in FREQUENCIES:
        raise ValidationError(f"Unknown frequency: {frequency}")
    data["frequency"] = frequency

    if frequency == "daily":
        data["target_days"] = list(ALL_DAYS)
    else:
        raw_days = data.get("target_days") or []
        try:
            days = sorted({int(d) for d in raw_days})
        except (TypeError, ValueError):
            raise ValidationError("Target days must be weekday numbers")
        if not days:
            raise ValidationError("Select at least one day for this habit")
        if any(d < 0 or d > 6 for d in days):
            raise ValidationError("Target days must be between 0 (Sunday) and 6 (Saturday)")
        data["target_days"] = days

    target_value = data.get("target_value")
    if target_value is not None:
        if float(target_value) <= 0:
            raise ValidationError("Target value must be positive")
        data["target_value"] = float(target_value)

    data["color"] = data.get("color") or DEFAULT_COLOR
    for key in ("description", "icon", "unit"):
        if isinstance(data.get(key), str):
            data[key] = data[key].strip() or None
    return data


class HabitService:
    """Habit and log repository for a single user.

    Every mutating call commits once. Storage failures roll the session back
    and surface as NetworkError. Calls on a missing habit return None.

    Writers that take ``commit=False`` only flush, so a caller composing
    several writes (a routine toggle, a template import) commits them as one
    transaction.
    """

    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.warning("Rolled back habit write for user=%s: %s", self.user_id, exc)
            raise NetworkError("Could not save changes") from exc

    # Habits

    def add_habit(self, commit: bool = True, **fields) -> Habit:
        data = normalize_habit_fields({k: v for k, v in fields.items() if k in HABIT_FIELDS})
        try:
            habit = crud.create_habit(self.db, self.user_id, **data)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise NetworkError("Could not save habit") from exc
        if commit:
            self._commit()
        log.info("Habit created id=%s user=%s name=%r", habit.id, self.user_id, habit.name)
        return habit

    def update_habit(self, habit_id: int, **changes) -> Optional[Habit]:
        habit = self.get_habit(habit_id)
        if habit is None:
            return None

        merged = {key: getattr(habit, key) for key in HABIT_FIELDS}
        merged.update(
            {k: v for k, v in changes.items() if k in HABIT_FIELDS and not (v is None and k in REQUIRED_FIELDS)}
        )
        data = normalize_habit_fields(merged)
        for key, value in data.items():
            setattr(habit, key, value)
        self.db.add(habit)
        self._commit()
        log.info("Habit updated id=%s user=%s", habit.id, self.user_id)
        return habit

    def archive_habit(self, habit_id: int) -> Optional[Habit]:
        habit = self.get_habit(habit_id)
        if habit is None:
            return None
        if habit.archived_at is None:
            habit.archived_at = datetime.utcnow()
            self.db.add(habit)
            self._commit()
            log.info("Habit archived id=%s user=%s", habit.id, self.user_id)
        return habit

    def unarchive_habit(self, habit_id: int) -> Optional[Habit]:
        habit = self.get_habit(habit_id)
        if habit is None:
            return None
        if habit.archived_at is not None:
            habit.archived_at = None
            self.db.add(habit)
            self._commit()
            log.info("Habit unarchived id=%s user=%s", habit.id, self.user_id)
        return habit

    def delete_habit(self, habit_id: int) -> bool:
        habit = self.get_habit(habit_id)
        if habit is None:
            return False
        try:
            crud.delete_habit_rows(self.db, habit)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise NetworkError("Could not delete habit") from exc
        self._commit()
        log.info("Habit deleted id=%s user=%s", habit_id, self.user_id)
        return True

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        return crud.get_habit(self.db, self.user_id, habit_id)

    def get_habits(self) -> list[Habit]:
        return crud.list_habits(self.db, self.user_id, archived=None)

    def get_active_habits(self) -> list[Habit]:
        return crud.list_habits(self.db, self.user_id, archived=False)

    def get_archived_habits(self) -> list[Habit]:
        return crud.list_habits(self.db, self.user_id, archived=True)

    def find_habit_by_name(self, name: str) -> Optional[Habit]:
        return crud.find_habit_by_name(self.db, self.user_id, name)

    # Logs

    def toggle_completion(self, habit_id: int, day: DateLike, value: Optional[float] = None) -> Optional[HabitLog]:
        """Flip the day's completion, creating a completed log on first touch.

        A new log takes the explicit ``value`` or falls back to the habit's
        target value.
        """
        habit = self.get_habit(habit_id)
        if habit is None:
            return None

        def flip(entry: HabitLog) -> None:
            entry.completed = not entry.completed

        initial_value = value if value is not None else habit.target_value
        entry = self._write_log(habit, day, flip, completed=True, value=initial_value)
        log.info("Toggled habit=%s date=%s completed=%s", habit.id, entry.log_date, entry.completed)
        return entry

    def update_value(self, habit_id: int, day: DateLike, value: float) -> Optional[HabitLog]:
        habit = self.get_habit(habit_id)
        if habit is None:
            return None

        value = float(value)

        def assign(entry: HabitLog) -> None:
            entry.value = value
            entry.completed = value > 0

        entry = self._write_log(habit, day, assign, completed=value > 0, value=value)
        log.info("Value set habit=%s date=%s value=%s", habit.id, entry.log_date, value)
        return entry

    def set_completion(self, habit_id: int, day: DateLike, completed: bool, commit: bool = True) -> Optional[HabitLog]:
        habit = self.get_habit(habit_id)
        if habit is None:
            return None

        completed = bool(completed)

        def assign(entry: HabitLog) -> None:
            entry.completed = completed
            if completed and entry.value is None:
                entry.value = habit.target_value

        return self._write_log(
            habit, day, assign, commit=commit, completed=completed, value=habit.target_value if completed else None
        )

    def update_note(self, habit_id: int, day: DateLike, notes: Optional[str]) -> Optional[HabitLog]:
        habit = self.get_habit(habit_id)
        if habit is None:
            return None

        text = (notes or "").strip() or None

        def assign(entry: HabitLog) -> None:
            entry.notes = text

        return self._write_log(habit, day, assign, recompute=False, completed=False, notes=text)

    def _write_log(
        self,
        habit: Habit,
        day: DateLike,
        mutate: Callable[[HabitLog], None],
        recompute: bool = True,
        commit: bool = True,
        **defaults,
    ) -> HabitLog:
        """Find-or-create the (habit, day) log and mutate an existing row.

        Any storage error rolls back the whole open transaction, including
        earlier uncommitted writes of the caller.
        """
        habit_id, log_date = habit.id, parse_date(day)
        try:
            entry, created = crud.get_or_create_log(self.db, habit, log_date, **defaults)
            if not created:
                mutate(entry)
                self.db.add(entry)
                self.db.flush()
            if recompute:
                self._recompute_streak(habit)
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.warning("Rolled back log write habit=%s date=%s: %s", habit_id, log_date, exc)
            raise NetworkError("Could not save log") from exc
        if commit:
            self._commit()
        return entry

    def _recompute_streak(self, habit: Habit) -> Streak:
        previous = crud.get_streak(self.db, habit.id)
        stats = compute_streak(crud.get_completed_dates(self.db, habit.id), previous.longest if previous else 0)
        return crud.upsert_streak(self.db, habit, stats.current, stats.longest, stats.last_completed_date)

    def get_log(self, habit_id: int, day: DateLike) -> Optional[HabitLog]:
        if self.get_habit(habit_id) is None:
            return None
        return crud.get_log(self.db, habit_id, parse_date(day))

    def get_logs_for_date(self, day: DateLike) -> list[HabitLog]:
        return crud.list_logs_for_date(self.db, self.user_id, parse_date(day))

    def get_logs_for_range(self, start: DateLike, end: DateLike) -> list[HabitLog]:
        return crud.list_logs_for_range(self.db, self.user_id, parse_date(start), parse_date(end))

    def get_logs_for_habit(self, habit_id: int) -> list[HabitLog]:
        if self.get_habit(habit_id) is None:
            return []
        return crud.list_logs_for_habit(self.db, habit_id)

    def get_all_logs(self) -> list[HabitLog]:
        return crud.list_logs_for_user(self.db, self.user_id)

    def get_completed_dates(self, habit_id: int) -> list[date]:
        return crud.get_completed_dates(self.db, habit_id)

    # Streaks and rates

    def get_streak(self, habit_id: int) -> Optional[Streak]:
        habit = self.get_habit(habit_id)
        if habit is None:
            return None
        streak = crud.get_streak(self.db, habit.id)
        if streak is None:
            streak = self._recompute_streak(habit)
            self._commit()
        return streak

    def completion_rate(self, habit_id: int, days: int = 30, today: Optional[DateLike] = None) -> Optional[float]:
        habit = self.get_habit(habit_id)
        if habit is None:
            return None
        return completion_rate(habit, self.get_completed_dates(habit.id), days=days, today=today or date.today())

    def _completed_pairs(self, logs: Iterable[HabitLog]) -> set[tuple]:
        return {(entry.habit_id, entry.log_date) for entry in logs if entry.completed}

    def completion_rate_for_date(self, day: DateLike) -> float:
        pairs = self._completed_pairs(self.get_logs_for_date(day))
        return completion_rate_for_date(self.get_active_habits(), pairs, day)

    def completion_rate_for_range(self, start: DateLike, end: DateLike) -> float:
        pairs = self._completed_pairs(self.get_logs_for_range(start, end))
        return completion_rate_for_range(self.get_active_habits(), pairs, start, end)

    def dashboard_summary(self, day: DateLike) -> dict[str, Any]:
        """Habits due on ``day`` against how many of them are done."""
        d = parse_date(day)
        due = [h for h in self.get_active_habits() if is_due_on(h, d)]
        pairs = self._completed_pairs(self.get_logs_for_date(d))
        completed = sum(1 for h in due if (h.id, d) in pairs)
        percentage = round(completed / len(due) * 100) if due else 0
        return {"date": d, "total_habits": len(due), "completed_habits": completed, "percentage": percentage}
