from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from trackbit.api.deps import get_routine_service
from trackbit.models import Routine
from trackbit.schemas import (
    RoutineFromTemplateIn,
    RoutineIn,
    RoutineOut,
    RoutineProgressIn,
    RoutineProgressOut,
    RoutineStreakOut,
    RoutineToggleIn,
    RoutineUpdateIn,
)
from trackbit.services import RoutineService

router = APIRouter(prefix="/v1/routines", tags=["routines"])


def _get_routine_or_404(routines: RoutineService, routine_id: int) -> Routine:
    routine = routines.get_routine(routine_id)
    if not routine:
        raise HTTPException(status_code=404, detail="Routine not found")
    return routine


@router.get("", response_model=list[RoutineOut])
def list_routines(archived: bool = False, routines: RoutineService = Depends(get_routine_service)):
    return routines.get_archived_routines() if archived else routines.get_active_routines()


@router.post("", response_model=RoutineOut, status_code=201)
def create_routine(payload: RoutineIn, routines: RoutineService = Depends(get_routine_service)):
    return routines.add_routine(**payload.model_dump())


@router.post("/from-template", response_model=RoutineOut, status_code=201)
def create_routine_from_template(payload: RoutineFromTemplateIn, routines: RoutineService = Depends(get_routine_service)):
    routine = routines.create_from_template(payload.template_id)
    if not routine:
        raise HTTPException(status_code=404, detail="Template not found")
    return routine


@router.get("/{routine_id}", response_model=RoutineOut)
def get_routine(routine_id: int, routines: RoutineService = Depends(get_routine_service)):
    return _get_routine_or_404(routines, routine_id)


@router.patch("/{routine_id}", response_model=RoutineOut)
def update_routine(routine_id: int, payload: RoutineUpdateIn, routines: RoutineService = Depends(get_routine_service)):
    _get_routine_or_404(routines, routine_id)
    return routines.update_routine(routine_id, **payload.model_dump(exclude_unset=True))


@router.post("/{routine_id}/archive", response_model=RoutineOut)
def archive_routine(routine_id: int, routines: RoutineService = Depends(get_routine_service)):
    _get_routine_or_404(routines, routine_id)
    return routines.archive_routine(routine_id)


@router.delete("/{routine_id}")
def delete_routine(routine_id: int, routines: RoutineService = Depends(get_routine_service)) -> dict[str, bool]:
    _get_routine_or_404(routines, routine_id)
    return {"deleted": routines.delete_routine(routine_id)}


@router.get("/{routine_id}/progress/{log_date}", response_model=RoutineProgressOut)
def routine_progress(routine_id: int, log_date: date, routines: RoutineService = Depends(get_routine_service)):
    _get_routine_or_404(routines, routine_id)
    return routines.get_progress(routine_id, log_date)


@router.post("/{routine_id}/toggle", response_model=RoutineProgressOut)
def toggle_routine(routine_id: int, payload: RoutineToggleIn, routines: RoutineService = Depends(get_routine_service)):
    _get_routine_or_404(routines, routine_id)
    return routines.toggle_routine_completion(routine_id, payload.date)


@router.put("/{routine_id}/progress", response_model=RoutineProgressOut)
def update_routine_progress(routine_id: int, payload: RoutineProgressIn, routines: RoutineService = Depends(get_routine_service)):
    _get_routine_or_404(routines, routine_id)
    return routines.update_routine_progress(routine_id, payload.date, payload.completed_habit_ids)


@router.get("/{routine_id}/streak", response_model=RoutineStreakOut)
def routine_streak(routine_id: int, routines: RoutineService = Depends(get_routine_service)):
    _get_routine_or_404(routines, routine_id)
    stats = routines.get_routine_streak(routine_id)
    return {
        "routine_id": routine_id,
        "current": stats.current,
        "longest": stats.longest,
        "last_completed_date": stats.last_completed_date,
    }


@router.get("/{routine_id}/completion-rate")
def routine_completion_rate(
    routine_id: int,
    days: int = Query(default=30, ge=1, le=3650),
    today: Optional[date] = None,
    routines: RoutineService = Depends(get_routine_service),
):
    _get_routine_or_404(routines, routine_id)
    return {"routine_id": routine_id, "days": days, "rate": routines.routine_completion_rate(routine_id, days, today)}
