from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class ToggleIn(BaseModel):
    date: date
    value: Optional[float] = None


class ValueIn(BaseModel):
    date: date
    value: float


class NoteIn(BaseModel):
    date: date
    notes: Optional[str] = None


class HabitLogOut(BaseModel):
    id: int
    habit_id: int
    log_date: date
    completed: bool
    value: Optional[float] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DaySummaryOut(BaseModel):
    date: date
    total_habits: int
    completed_habits: int
    percentage: int
    completion_rate: float


class RangeStatsOut(BaseModel):
    start: date
    end: date
    average_rate: float
