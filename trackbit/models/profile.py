from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trackbit.models.base import Base, dumps_json, loads_json


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), default="")
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    display_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    occupation_category: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    height_cm: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    weight_kg: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    lifestyle_focus_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    survey_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    survey_completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def lifestyle_focus(self) -> list[str]:
        return [str(x) for x in loads_json(self.lifestyle_focus_json, [])]

    @lifestyle_focus.setter
    def lifestyle_focus(self, value: list[str]) -> None:
        self.lifestyle_focus_json = dumps_json(list(value or []))
