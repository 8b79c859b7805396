from trackbit.models.base import Base
from trackbit.models.habit import Habit
from trackbit.models.habit_goal import GoalCheckin, HabitGoal
from trackbit.models.habit_log import HabitLog
from trackbit.models.habit_recommendation import HabitRecommendation
from trackbit.models.profile import Profile
from trackbit.models.routine import Routine, RoutineLog
from trackbit.models.streak import Streak

__all__ = [
    "Base",
    "Habit",
    "HabitLog",
    "Streak",
    "Routine",
    "RoutineLog",
    "HabitGoal",
    "GoalCheckin",
    "Profile",
    "HabitRecommendation",
]
