from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from trackbit.api.deps import get_habit_service
from trackbit.models import Habit
from trackbit.schemas import (
    CompletionRateOut,
    DaySummaryOut,
    HabitIn,
    HabitLogOut,
    HabitOut,
    HabitUpdateIn,
    NoteIn,
    RangeStatsOut,
    StreakOut,
    ToggleIn,
    ValueIn,
)
from trackbit.services import HabitService

router = APIRouter(prefix="/v1", tags=["habits"])


def _get_habit_or_404(habits: HabitService, habit_id: int) -> Habit:
    habit = habits.get_habit(habit_id)
    if not habit:
        raise HTTPException(status_code=404, detail="Habit not found")
    return habit


@router.get("/habits", response_model=list[HabitOut])
def list_habits(archived: bool = False, habits: HabitService = Depends(get_habit_service)):
    return habits.get_archived_habits() if archived else habits.get_active_habits()


@router.post("/habits", response_model=HabitOut, status_code=201)
def create_habit(payload: HabitIn, habits: HabitService = Depends(get_habit_service)):
    return habits.add_habit(**payload.model_dump())


@router.get("/habits/{habit_id}", response_model=HabitOut)
def get_habit(habit_id: int, habits: HabitService = Depends(get_habit_service)):
    return _get_habit_or_404(habits, habit_id)


@router.patch("/habits/{habit_id}", response_model=HabitOut)
def update_habit(habit_id: int, payload: HabitUpdateIn, habits: HabitService = Depends(get_habit_service)):
    _get_habit_or_404(habits, habit_id)
    return habits.update_habit(habit_id, **payload.model_dump(exclude_unset=True))


@router.delete("/habits/{habit_id}")
def delete_habit(habit_id: int, habits: HabitService = Depends(get_habit_service)) -> dict[str, bool]:
    _get_habit_or_404(habits, habit_id)
    return {"deleted": habits.delete_habit(habit_id)}


@router.post("/habits/{habit_id}/archive", response_model=HabitOut)
def archive_habit(habit_id: int, habits: HabitService = Depends(get_habit_service)):
    _get_habit_or_404(habits, habit_id)
    return habits.archive_habit(habit_id)


@router.post("/habits/{habit_id}/unarchive", response_model=HabitOut)
def unarchive_habit(habit_id: int, habits: HabitService = Depends(get_habit_service)):
    _get_habit_or_404(habits, habit_id)
    return habits.unarchive_habit(habit_id)


@router.post("/habits/{habit_id}/toggle", response_model=HabitLogOut)
def toggle_habit(habit_id: int, payload: ToggleIn, habits: HabitService = Depends(get_habit_service)):
    _get_habit_or_404(habits, habit_id)
    return habits.toggle_completion(habit_id, payload.date, payload.value)


@router.put("/habits/{habit_id}/value", response_model=HabitLogOut)
def set_habit_value(habit_id: int, payload: ValueIn, habits: HabitService = Depends(get_habit_service)):
    _get_habit_or_404(habits, habit_id)
    return habits.update_value(habit_id, payload.date, payload.value)


@router.put("/habits/{habit_id}/note", response_model=HabitLogOut)
def set_habit_note(habit_id: int, payload: NoteIn, habits: HabitService = Depends(get_habit_service)):
    _get_habit_or_404(habits, habit_id)
    return habits.update_note(habit_id, payload.date, payload.notes)


@router.get("/habits/{habit_id}/logs", response_model=list[HabitLogOut])
def habit_logs(habit_id: int, habits: HabitService = Depends(get_habit_service)):
    _get_habit_or_404(habits, habit_id)
    return habits.get_logs_for_habit(habit_id)


@router.get("/habits/{habit_id}/streak", response_model=StreakOut)
def habit_streak(habit_id: int, habits: HabitService = Depends(get_habit_service)):
    _get_habit_or_404(habits, habit_id)
    return habits.get_streak(habit_id)


@router.get("/habits/{habit_id}/completion-rate", response_model=CompletionRateOut)
def habit_completion_rate(
    habit_id: int,
    days: int = Query(default=30, ge=1, le=3650),
    today: Optional[date] = None,
    habits: HabitService = Depends(get_habit_service),
):
    _get_habit_or_404(habits, habit_id)
    return {"habit_id": habit_id, "days": days, "rate": habits.completion_rate(habit_id, days, today)}


@router.get("/logs", response_model=list[HabitLogOut])
def logs_for_range(start: date, end: date, habits: HabitService = Depends(get_habit_service)):
    if start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    return habits.get_logs_for_range(start, end)


@router.get("/logs/{log_date}", response_model=list[HabitLogOut])
def logs_for_date(log_date: date, habits: HabitService = Depends(get_habit_service)):
    return habits.get_logs_for_date(log_date)


@router.get("/stats/day/{log_date}", response_model=DaySummaryOut)
def day_stats(log_date: date, habits: HabitService = Depends(get_habit_service)):
    summary = habits.dashboard_summary(log_date)
    summary["completion_rate"] = habits.completion_rate_for_date(log_date)
    return summary


@router.get("/stats/range", response_model=RangeStatsOut)
def range_stats(start: date, end: date, habits: HabitService = Depends(get_habit_service)):
    if start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    return {"start": start, "end": end, "average_rate": habits.completion_rate_for_range(start, end)}
