from typing import Generator

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from trackbit.db import SessionLocal
from trackbit.services import GoalService, HabitService, ProfileService, RoutineService


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user_id(x_user_id: str = Header(default="")) -> str:
    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    if len(user_id) > 64:
        raise HTTPException(status_code=400, detail="X-User-Id is too long")
    return user_id


def get_habit_service(db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)) -> HabitService:
    return HabitService(db, user_id)


def get_routine_service(habits: HabitService = Depends(get_habit_service)) -> RoutineService:
    return RoutineService(habits)


def get_goal_service(habits: HabitService = Depends(get_habit_service)) -> GoalService:
    return GoalService(habits)


def get_profile_service(habits: HabitService = Depends(get_habit_service)) -> ProfileService:
    return ProfileService(habits)
