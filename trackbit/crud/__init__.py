from trackbit.crud.goals import delete_goal_rows, get_goal, list_checkins, list_goals
from trackbit.crud.habits import create_habit, delete_habit_rows, find_habit_by_name, get_habit, list_habits
from trackbit.crud.logs import (
    get_completed_dates,
    get_log,
    get_or_create_log,
    get_streak,
    list_logs_for_date,
    list_logs_for_habit,
    list_logs_for_range,
    list_logs_for_user,
    upsert_streak,
)
from trackbit.crud.profiles import get_profile, get_recommendation, list_recommendations, replace_recommendations
from trackbit.crud.routines import (
    create_routine,
    delete_routine_rows,
    get_routine,
    get_routine_log,
    list_routine_logs,
    list_routines,
    upsert_routine_log,
)

__all__ = [
    "get_habit",
    "list_habits",
    "find_habit_by_name",
    "create_habit",
    "delete_habit_rows",
    "get_log",
    "get_or_create_log",
    "list_logs_for_date",
    "list_logs_for_range",
    "list_logs_for_habit",
    "list_logs_for_user",
    "get_completed_dates",
    "get_streak",
    "upsert_streak",
    "get_routine",
    "list_routines",
    "create_routine",
    "delete_routine_rows",
    "get_routine_log",
    "list_routine_logs",
    "upsert_routine_log",
    "get_goal",
    "list_goals",
    "delete_goal_rows",
    "list_checkins",
    "get_profile",
    "list_recommendations",
    "get_recommendation",
    "replace_recommendations",
]
