from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from trackbit.api.deps import get_goal_service
from trackbit.models import HabitGoal
from trackbit.schemas import CheckinIn, CheckinOut, GoalAssessmentOut, GoalIn, GoalOut
from trackbit.services import GoalService

router = APIRouter(prefix="/v1/goals", tags=["goals"])


def _get_goal_or_404(goals: GoalService, goal_id: int) -> HabitGoal:
    goal = goals.get_goal(goal_id)
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.get("", response_model=list[GoalOut])
def list_goals(habit_id: Optional[int] = None, goals: GoalService = Depends(get_goal_service)):
    return goals.list_goals(habit_id)


@router.post("", response_model=GoalOut, status_code=201)
def create_goal(payload: GoalIn, goals: GoalService = Depends(get_goal_service)):
    return goals.create_goal(payload.habit_id, payload.target_days, payload.notes, payload.start_date)


@router.get("/{goal_id}", response_model=GoalOut)
def get_goal(goal_id: int, goals: GoalService = Depends(get_goal_service)):
    return _get_goal_or_404(goals, goal_id)


@router.delete("/{goal_id}")
def delete_goal(goal_id: int, goals: GoalService = Depends(get_goal_service)) -> dict[str, bool]:
    _get_goal_or_404(goals, goal_id)
    return {"deleted": goals.delete_goal(goal_id)}


@router.get("/{goal_id}/assessment", response_model=GoalAssessmentOut)
def assess_goal(goal_id: int, today: Optional[date] = None, goals: GoalService = Depends(get_goal_service)):
    return goals.assess_goal(_get_goal_or_404(goals, goal_id), today)


@router.get("/{goal_id}/checkins", response_model=list[CheckinOut])
def list_checkins(goal_id: int, goals: GoalService = Depends(get_goal_service)):
    _get_goal_or_404(goals, goal_id)
    return goals.list_checkins(goal_id)


@router.post("/{goal_id}/checkins", response_model=CheckinOut, status_code=201)
def add_checkin(goal_id: int, payload: CheckinIn, goals: GoalService = Depends(get_goal_service)):
    _get_goal_or_404(goals, goal_id)
    return goals.add_checkin(goal_id, payload.check_date, payload.status, payload.notes)
