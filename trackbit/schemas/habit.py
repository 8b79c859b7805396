from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class HabitIn(BaseModel):
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    frequency: str = "daily"
    target_days: list[int] = []
    target_value: Optional[float] = None
    unit: Optional[str] = None


class HabitUpdateIn(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    frequency: Optional[str] = None
    target_days: Optional[list[int]] = None
    target_value: Optional[float] = None
    unit: Optional[str] = None


class HabitOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    color: str
    frequency: str
    target_days: list[int]
    target_value: Optional[float] = None
    unit: Optional[str] = None
    created_at: datetime
    archived_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StreakOut(BaseModel):
    habit_id: int
    current: int
    longest: int
    last_completed_date: Optional[date] = None

    class Config:
        from_attributes = True


class CompletionRateOut(BaseModel):
    habit_id: int
    days: int
    rate: float
