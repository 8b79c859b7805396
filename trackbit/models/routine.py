from datetime import date, datetime
from typing import Optional

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from trackbit.models.base import Base, dumps_json, loads_json


class Routine(Base):
    __tablename__ = "routines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    habit_ids_json: Mapped[str] = mapped_column(Text, default="[]")
    reminder_time: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    color: Mapped[str] = mapped_column(String(32), default="#0D9488")
    icon: Mapped[str] = mapped_column(String(64), default="Sun")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    archived_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, index=True)

    @property
    def habit_ids(self) -> list[int]:
        return [int(x) for x in loads_json(self.habit_ids_json, [])]

    @habit_ids.setter
    def habit_ids(self, value: list[int]) -> None:
        ordered: list[int] = []
        for habit_id in value:
            if int(habit_id) not in ordered:
                ordered.append(int(habit_id))
        self.habit_ids_json = dumps_json(ordered)


class RoutineLog(Base):
    __tablename__ = "routine_logs"
    __table_args__ = (UniqueConstraint("routine_id", "log_date", name="uq_routine_log_per_day"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    routine_id: Mapped[int] = mapped_column(ForeignKey("routines.id", ondelete="CASCADE"), index=True)
    log_date: Mapped[date] = mapped_column(Date, index=True)
    completed: Mapped[bool] = mapped_column(Boolean, default=False)
    completed_habits_json: Mapped[str] = mapped_column(Text, default="[]")
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    @property
    def completed_habits(self) -> list[int]:
        return [int(x) for x in loads_json(self.completed_habits_json, [])]

    @completed_habits.setter
    def completed_habits(self, value: list[int]) -> None:
        self.completed_habits_json = dumps_json([int(x) for x in value])
