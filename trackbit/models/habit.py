from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trackbit.models.base import Base, dumps_json, loads_json

ALL_DAYS = [0, 1, 2, 3, 4, 5, 6]
FREQUENCIES = ("daily", "weekly", "custom")


class Habit(Base):
    __tablename__ = "habits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    color: Mapped[str] = mapped_column(String(32), default="#0D9488")
    frequency: Mapped[str] = mapped_column(String(16), default="daily")
    target_days_json: Mapped[str] = mapped_column(String(64), default=lambda: dumps_json(ALL_DAYS))
    target_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    unit: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    archived_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, index=True)

    @property
    def target_days(self) -> list[int]:
        return sorted({int(x) for x in loads_json(self.target_days_json, ALL_DAYS)})

    @target_days.setter
    def target_days(self, value: list[int]) -> None:
        self.target_days_json = dumps_json(sorted({int(x) for x in value}))

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None
