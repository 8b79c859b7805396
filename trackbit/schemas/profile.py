from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ProfileUpdateIn(BaseModel):
    name: Optional[str] = None
    display_name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    occupation_category: Optional[str] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    lifestyle_focus: Optional[list[str]] = None


class SurveyIn(BaseModel):
    display_name: str
    age: Optional[int] = None
    gender: Optional[str] = None
    occupation_category: Optional[str] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    lifestyle_focus: list[str]


class ProfileOut(BaseModel):
    user_id: str
    email: str
    name: Optional[str] = None
    display_name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    occupation_category: Optional[str] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    lifestyle_focus: list[str]
    survey_completed: bool
    survey_completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RecommendationOut(BaseModel):
    id: int
    category: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    color: str
    frequency: str
    target_days: list[int]
    target_value: Optional[float] = None
    unit: Optional[str] = None
    reasoning: str
    confidence_score: float
    tags: list[str]
    is_applied: bool

    class Config:
        from_attributes = True
