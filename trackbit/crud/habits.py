from typing import Optional

from sqlalchemy import and_, delete, select
from sqlalchemy.orm import Session

from trackbit.models import GoalCheckin, Habit, HabitGoal, HabitLog, Routine, Streak


def get_habit(db: Session, user_id: str, habit_id: int) -> Optional[Habit]:
    return db.scalar(select(Habit).where(and_(Habit.id == habit_id, Habit.user_id == user_id)))


def list_habits(db: Session, user_id: str, archived: Optional[bool] = False) -> list[Habit]:
    stmt = select(Habit).where(Habit.user_id == user_id)
    if archived is True:
        stmt = stmt.where(Habit.archived_at.is_not(None))
    elif archived is False:
        stmt = stmt.where(Habit.archived_at.is_(None))
    return list(db.scalars(stmt.order_by(Habit.created_at, Habit.id)))


def find_habit_by_name(db: Session, user_id: str, name: str) -> Optional[Habit]:
    wanted = name.strip().lower()
    for habit in list_habits(db, user_id):
        if habit.name.strip().lower() == wanted:
            return habit
    return None


def create_habit(db: Session, user_id: str, **fields) -> Habit:
    target_days = fields.pop("target_days", None)
    habit = Habit(user_id=user_id, **fields)
    if target_days is not None:
        habit.target_days = target_days
    db.add(habit)
    db.flush()

    db.add(Streak(user_id=user_id, habit_id=habit.id, current=0, longest=0))
    db.flush()
    return habit


def delete_habit_rows(db: Session, habit: Habit) -> None:
    """Remove the habit with its logs, streak and goals, and detach it from routines."""
    goal_ids = select(HabitGoal.id).where(HabitGoal.habit_id == habit.id)
    db.execute(delete(GoalCheckin).where(GoalCheckin.goal_id.in_(goal_ids)))
    db.execute(delete(HabitGoal).where(HabitGoal.habit_id == habit.id))
    db.execute(delete(HabitLog).where(HabitLog.habit_id == habit.id))
    db.execute(delete(Streak).where(Streak.habit_id == habit.id))

    for routine in db.scalars(select(Routine).where(Routine.user_id == habit.user_id)):
        if habit.id in routine.habit_ids:
            routine.habit_ids = [hid for hid in routine.habit_ids if hid != habit.id]
            db.add(routine)

    db.delete(habit)
    db.flush()
