from datetime import date
from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from trackbit.models import Habit, HabitLog, Streak


def get_log(db: Session, habit_id: int, log_date: date) -> Optional[HabitLog]:
    return db.scalar(select(HabitLog).where(and_(HabitLog.habit_id == habit_id, HabitLog.log_date == log_date)))


def get_or_create_log(db: Session, habit: Habit, log_date: date, **defaults) -> tuple[HabitLog, bool]:
    """Find the (habit, date) log or insert it.

    The insert runs in a SAVEPOINT. If another writer inserted the same key
    first, the unique constraint fires and the existing row is returned.
    """
    log = get_log(db, habit.id, log_date)
    if log is not None:
        return log, False

    try:
        with db.begin_nested():
            log = HabitLog(user_id=habit.user_id, habit_id=habit.id, log_date=log_date, **defaults)
            db.add(log)
            db.flush()
    except IntegrityError:
        log = get_log(db, habit.id, log_date)
        if log is None:
            raise
        return log, False
    return log, True


def list_logs_for_date(db: Session, user_id: str, log_date: date) -> list[HabitLog]:
    return list(
        db.scalars(
            select(HabitLog)
            .where(and_(HabitLog.user_id == user_id, HabitLog.log_date == log_date))
            .order_by(HabitLog.habit_id)
        )
    )


def list_logs_for_range(db: Session, user_id: str, start: date, end: date) -> list[HabitLog]:
    return list(
        db.scalars(
            select(HabitLog)
            .where(and_(HabitLog.user_id == user_id, HabitLog.log_date >= start, HabitLog.log_date <= end))
            .order_by(HabitLog.log_date, HabitLog.habit_id)
        )
    )


def list_logs_for_habit(db: Session, habit_id: int) -> list[HabitLog]:
    return list(db.scalars(select(HabitLog).where(HabitLog.habit_id == habit_id).order_by(HabitLog.log_date)))


def list_logs_for_user(db: Session, user_id: str) -> list[HabitLog]:
    return list(db.scalars(select(HabitLog).where(HabitLog.user_id == user_id).order_by(HabitLog.log_date, HabitLog.habit_id)))


def get_completed_dates(db: Session, habit_id: int) -> list[date]:
    return list(
        db.scalars(
            select(HabitLog.log_date)
            .where(and_(HabitLog.habit_id == habit_id, HabitLog.completed.is_(True)))
            .order_by(HabitLog.log_date)
        )
    )


def get_streak(db: Session, habit_id: int) -> Optional[Streak]:
    return db.scalar(select(Streak).where(Streak.habit_id == habit_id))


def upsert_streak(db: Session, habit: Habit, current: int, longest: int, last_completed_date: Optional[date]) -> Streak:
    streak = get_streak(db, habit.id)
    if streak is None:
        streak = Streak(user_id=habit.user_id, habit_id=habit.id)
    streak.current = current
    streak.longest = longest
    streak.last_completed_date = last_completed_date
    db.add(streak)
    db.flush()
    return streak
