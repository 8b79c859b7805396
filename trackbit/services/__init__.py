from trackbit.services.calendar_export import generate_ics
from trackbit.services.coach import CoachClient
from trackbit.services.goals import GoalService
from trackbit.services.habits import HabitService
from trackbit.services.profiles import ProfileService
from trackbit.services.recommendations import generate_habit_recommendations
from trackbit.services.routines import RoutineService
from trackbit.services.suggestions import SuggestionEngine

__all__ = [
    "HabitService",
    "RoutineService",
    "GoalService",
    "ProfileService",
    "SuggestionEngine",
    "CoachClient",
    "generate_habit_recommendations",
    "generate_ics",
]
