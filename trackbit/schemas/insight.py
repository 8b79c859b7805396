from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class SuggestionOut(BaseModel):
    id: str
    type: str
    title: str
    description: str
    reasoning: str
    confidence: float
    category: str
    action_data: dict[str, Any]
    created_at: datetime


class CorrelationOut(BaseModel):
    habit1: int
    habit2: int
    correlation: float


class PatternsOut(BaseModel):
    weekly_patterns: dict[int, list[float]]
    streak_patterns: dict[int, list[int]]
    seasonal_patterns: dict[int, dict[str, int]]
    correlations: list[CorrelationOut]
    last_analyzed: datetime


class TemplateHabitOut(BaseModel):
    name: str
    description: str
    icon: str
    frequency: str
    target_days: list[int]
    target_value: Optional[float] = None
    unit: Optional[str] = None


class TemplateOut(BaseModel):
    id: str
    name: str
    description: str
    category: str
    icon: str
    color: str
    estimated_duration: int
    difficulty: str
    habits: list[TemplateHabitOut]
    tags: list[str]
    popularity: int


class ChatMessageIn(BaseModel):
    type: str
    content: str


class CoachIn(BaseModel):
    goal: str
    current_habits: list[str] = []
    struggles: list[str] = []
    time_per_day: int = 15
    follow_up_message: Optional[str] = None
    conversation_history: list[ChatMessageIn] = []


class CoachOut(BaseModel):
    reply: str
    offline: bool
    notice: Optional[str] = None
