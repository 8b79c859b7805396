from typing import Optional

from sqlalchemy import and_, delete, select
from sqlalchemy.orm import Session

from trackbit.models import GoalCheckin, HabitGoal


def get_goal(db: Session, user_id: str, goal_id: int) -> Optional[HabitGoal]:
    return db.scalar(select(HabitGoal).where(and_(HabitGoal.id == goal_id, HabitGoal.user_id == user_id)))


def list_goals(db: Session, user_id: str, habit_id: Optional[int] = None) -> list[HabitGoal]:
    stmt = select(HabitGoal).where(HabitGoal.user_id == user_id)
    if habit_id is not None:
        stmt = stmt.where(HabitGoal.habit_id == habit_id)
    return list(db.scalars(stmt.order_by(HabitGoal.start_date.desc(), HabitGoal.id.desc())))


def delete_goal_rows(db: Session, goal: HabitGoal) -> None:
    db.execute(delete(GoalCheckin).where(GoalCheckin.goal_id == goal.id))
    db.delete(goal)
    db.flush()


def list_checkins(db: Session, goal_id: int) -> list[GoalCheckin]:
    return list(db.scalars(select(GoalCheckin).where(GoalCheckin.goal_id == goal_id).order_by(GoalCheckin.check_date)))
