from datetime import date
from typing import Optional

from sqlalchemy import and_, delete, select
from sqlalchemy.orm import Session

from trackbit.models import Routine, RoutineLog


def get_routine(db: Session, user_id: str, routine_id: int) -> Optional[Routine]:
    return db.scalar(select(Routine).where(and_(Routine.id == routine_id, Routine.user_id == user_id)))


def list_routines(db: Session, user_id: str, archived: Optional[bool] = False) -> list[Routine]:
    stmt = select(Routine).where(Routine.user_id == user_id)
    if archived is True:
        stmt = stmt.where(Routine.archived_at.is_not(None))
    elif archived is False:
        stmt = stmt.where(Routine.archived_at.is_(None))
    return list(db.scalars(stmt.order_by(Routine.created_at, Routine.id)))


def create_routine(db: Session, user_id: str, habit_ids: list[int], **fields) -> Routine:
    routine = Routine(user_id=user_id, **fields)
    routine.habit_ids = habit_ids
    db.add(routine)
    db.flush()
    return routine


def delete_routine_rows(db: Session, routine: Routine) -> None:
    db.execute(delete(RoutineLog).where(RoutineLog.routine_id == routine.id))
    db.delete(routine)
    db.flush()


def get_routine_log(db: Session, routine_id: int, log_date: date) -> Optional[RoutineLog]:
    return db.scalar(select(RoutineLog).where(and_(RoutineLog.routine_id == routine_id, RoutineLog.log_date == log_date)))


def list_routine_logs(db: Session, routine_id: int) -> list[RoutineLog]:
    return list(db.scalars(select(RoutineLog).where(RoutineLog.routine_id == routine_id).order_by(RoutineLog.log_date)))


def upsert_routine_log(db: Session, routine: Routine, log_date: date, completed: bool, completed_habits: list[int]) -> RoutineLog:
    row = get_routine_log(db, routine.id, log_date)
    if row is None:
        row = RoutineLog(user_id=routine.user_id, routine_id=routine.id, log_date=log_date)
    row.completed = completed
    row.completed_habits = completed_habits
    db.add(row)
    db.flush()
    return row
