from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class GoalIn(BaseModel):
    habit_id: int
    target_days: int = 30
    notes: Optional[str] = None
    start_date: Optional[date] = None


class GoalOut(BaseModel):
    id: int
    habit_id: int
    target_days: int
    start_date: date
    end_date: date
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class GoalAssessmentOut(BaseModel):
    goal_id: int
    habit_id: int
    completed_days: int
    total_days: int
    progress: float
    is_effective: bool
    label: str
    days_remaining: int
    hits: int
    misses: int


class CheckinIn(BaseModel):
    check_date: date
    status: str
    notes: Optional[str] = None


class CheckinOut(BaseModel):
    id: int
    goal_id: int
    check_date: date
    status: str
    notes: Optional[str] = None

    class Config:
        from_attributes = True
