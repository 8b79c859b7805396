from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from trackbit.api.deps import get_habit_service, get_profile_service, get_routine_service
from trackbit.core.templates import get_popular_templates, get_template_by_id, get_templates_by_category, list_templates, search_templates
from trackbit.schemas import CoachIn, CoachOut, PatternsOut, SuggestionOut, TemplateOut
from trackbit.services import CoachClient, HabitService, ProfileService, RoutineService, SuggestionEngine, generate_ics

router = APIRouter(prefix="/v1", tags=["insights"])


def get_suggestion_engine() -> SuggestionEngine:
    return SuggestionEngine()


def get_coach_client() -> CoachClient:
    return CoachClient()


@router.get("/suggestions", response_model=list[SuggestionOut])
def suggestions(
    today: Optional[date] = None,
    routines: RoutineService = Depends(get_routine_service),
    engine: SuggestionEngine = Depends(get_suggestion_engine),
):
    habits = routines.habits
    return engine.generate_suggestions(habits.get_active_habits(), habits.get_all_logs(), routines.get_active_routines(), today)


@router.get("/patterns", response_model=PatternsOut)
def patterns(habits: HabitService = Depends(get_habit_service), engine: SuggestionEngine = Depends(get_suggestion_engine)):
    return engine.analyze_user_patterns(habits.get_active_habits(), habits.get_all_logs())


@router.get("/templates", response_model=list[TemplateOut])
def templates(category: Optional[str] = None, q: Optional[str] = None, popular: Optional[int] = None):
    if q:
        return search_templates(q)
    if category:
        return get_templates_by_category(category)
    if popular:
        return get_popular_templates(popular)
    return list_templates()


@router.get("/templates/{template_id}", response_model=TemplateOut)
def template_detail(template_id: str):
    template = get_template_by_id(template_id)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


@router.post("/coach", response_model=CoachOut)
def coach(
    payload: CoachIn,
    client: CoachClient = Depends(get_coach_client),
    profiles: ProfileService = Depends(get_profile_service),
):
    return client.reply(
        goal=payload.goal,
        current_habits=payload.current_habits,
        struggles=payload.struggles,
        time_per_day=payload.time_per_day,
        follow_up_message=payload.follow_up_message,
        conversation_history=[m.model_dump() for m in payload.conversation_history],
        profile=profiles.coach_context(),
    )


@router.get("/calendar.ics")
def calendar_export(tz: Optional[str] = None, routines: RoutineService = Depends(get_routine_service)) -> Response:
    body = generate_ics(datetime.utcnow(), tz, routines.get_active_routines())
    return Response(
        content=body,
        media_type="text/calendar",
        headers={"Content-Disposition": 'attachment; filename="trackbit-routines.ics"'},
    )
