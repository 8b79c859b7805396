from trackbit.schemas.goal import CheckinIn, CheckinOut, GoalAssessmentOut, GoalIn, GoalOut
from trackbit.schemas.habit import CompletionRateOut, HabitIn, HabitOut, HabitUpdateIn, StreakOut
from trackbit.schemas.insight import CoachIn, CoachOut, PatternsOut, SuggestionOut, TemplateOut
from trackbit.schemas.log import DaySummaryOut, HabitLogOut, NoteIn, RangeStatsOut, ToggleIn, ValueIn
from trackbit.schemas.profile import ProfileOut, ProfileUpdateIn, RecommendationOut, SurveyIn
from trackbit.schemas.routine import (
    RoutineFromTemplateIn,
    RoutineIn,
    RoutineOut,
    RoutineProgressIn,
    RoutineProgressOut,
    RoutineStreakOut,
    RoutineToggleIn,
    RoutineUpdateIn,
)

__all__ = [
    "HabitIn",
    "HabitUpdateIn",
    "HabitOut",
    "StreakOut",
    "CompletionRateOut",
    "ToggleIn",
    "ValueIn",
    "NoteIn",
    "HabitLogOut",
    "DaySummaryOut",
    "RangeStatsOut",
    "RoutineIn",
    "RoutineUpdateIn",
    "RoutineFromTemplateIn",
    "RoutineOut",
    "RoutineProgressIn",
    "RoutineProgressOut",
    "RoutineToggleIn",
    "RoutineStreakOut",
    "GoalIn",
    "GoalOut",
    "GoalAssessmentOut",
    "CheckinIn",
    "CheckinOut",
    "ProfileUpdateIn",
    "SurveyIn",
    "ProfileOut",
    "RecommendationOut",
    "SuggestionOut",
    "PatternsOut",
    "TemplateOut",
    "CoachIn",
    "CoachOut",
]
