from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trackbit.models.base import Base, dumps_json, loads_json


class HabitRecommendation(Base):
    __tablename__ = "habit_recommendations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    category: Mapped[str] = mapped_column(String(64), index=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    color: Mapped[str] = mapped_column(String(32))
    frequency: Mapped[str] = mapped_column(String(16), default="daily")
    target_days_json: Mapped[str] = mapped_column(String(64), default="[0, 1, 2, 3, 4, 5, 6]")
    target_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    unit: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    reasoning: Mapped[str] = mapped_column(Text)
    confidence_score: Mapped[float] = mapped_column(Float)
    tags_json: Mapped[str] = mapped_column(Text, default="[]")
    is_applied: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    @property
    def target_days(self) -> list[int]:
        return [int(x) for x in loads_json(self.target_days_json, [])]

    @target_days.setter
    def target_days(self, value: list[int]) -> None:
        self.target_days_json = dumps_json([int(x) for x in value])

    @property
    def tags(self) -> list[str]:
        return [str(x) for x in loads_json(self.tags_json, [])]

    @tags.setter
    def tags(self, value: list[str]) -> None:
        self.tags_json = dumps_json(list(value))
