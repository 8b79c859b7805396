from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class RoutineIn(BaseModel):
    name: str
    description: Optional[str] = None
    habit_ids: list[int]
    reminder_time: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None


class RoutineUpdateIn(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    habit_ids: Optional[list[int]] = None
    reminder_time: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None


class RoutineFromTemplateIn(BaseModel):
    template_id: str


class RoutineOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    habit_ids: list[int]
    reminder_time: Optional[str] = None
    color: str
    icon: str
    created_at: datetime
    archived_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RoutineProgressOut(BaseModel):
    completed: int
    total: int
    percentage: float


class RoutineProgressIn(BaseModel):
    date: date
    completed_habit_ids: list[int]


class RoutineToggleIn(BaseModel):
    date: date


class RoutineStreakOut(BaseModel):
    routine_id: int
    current: int
    longest: int
    last_completed_date: Optional[date] = None
