from datetime import date

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from trackbit.errors import NetworkError
from trackbit.models import Habit, Routine, RoutineLog

DAY = date(2024, 1, 10)


def _storage_down(*args, **kwargs):
    raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


@pytest.fixture
def failing_commit(db, monkeypatch):
    def enable():
        monkeypatch.setattr(db, "commit", _storage_down)

    return enable


def _count(db, model):
    return db.scalar(select(func.count()).select_from(model))


def test_failed_habit_insert_leaves_nothing(habits, db, failing_commit):
    failing_commit()
    with pytest.raises(NetworkError):
        habits.add_habit(name="Water")
    assert _count(db, Habit) == 0


def test_failed_toggle_keeps_previous_log_and_streak(habits, failing_commit):
    habit = habits.add_habit(name="Water")
    habits.toggle_completion(habit.id, DAY)

    failing_commit()
    with pytest.raises(NetworkError):
        habits.toggle_completion(habit.id, DAY)

    assert habits.get_log(habit.id, DAY).completed is True
    assert habits.get_streak(habit.id).current == 1


def test_failed_flush_rolls_back_log_write(habits, db, monkeypatch):
    habit = habits.add_habit(name="Water")
    habits.toggle_completion(habit.id, DAY)

    monkeypatch.setattr(db, "flush", _storage_down)
    with pytest.raises(NetworkError):
        habits.update_value(habit.id, DAY, 0)
    monkeypatch.undo()

    entry = habits.get_log(habit.id, DAY)
    assert entry.completed is True
    assert entry.value is None


def test_failed_routine_toggle_writes_no_member(habits, routines, db, failing_commit):
    members = [habits.add_habit(name=name) for name in ("Water", "Stretch", "Plan")]
    routine = routines.add_routine(name="Morning", habit_ids=[h.id for h in members])

    failing_commit()
    with pytest.raises(NetworkError):
        routines.toggle_routine_completion(routine.id, DAY)

    assert [h.name for h in members if habits.get_completed_dates(h.id)] == []
    assert _count(db, RoutineLog) == 0


def test_failed_routine_progress_update_keeps_old_state(habits, routines, failing_commit):
    water = habits.add_habit(name="Water")
    read = habits.add_habit(name="Read")
    routine = routines.add_routine(name="Morning", habit_ids=[water.id, read.id])
    habits.toggle_completion(water.id, DAY)

    failing_commit()
    with pytest.raises(NetworkError):
        routines.update_routine_progress(routine.id, DAY, [read.id])

    assert habits.get_completed_dates(water.id) == [DAY]
    assert habits.get_completed_dates(read.id) == []


def test_failed_template_import_creates_no_habits(routines, db, failing_commit):
    failing_commit()
    with pytest.raises(NetworkError):
        routines.create_from_template("mindful-living")

    assert _count(db, Habit) == 0
    assert _count(db, Routine) == 0


def test_failed_goal_insert_leaves_no_goal(habits, goals, failing_commit):
    habit = habits.add_habit(name="Meditate")

    failing_commit()
    with pytest.raises(NetworkError):
        goals.create_goal(habit.id, 10, start=DAY)
    assert goals.list_goals() == []


def test_failed_apply_keeps_recommendation_unapplied(profiles, db, failing_commit):
    profiles.complete_survey(display_name="Sam", lifestyle_focus=["health-wellness"])
    water = profiles.list_recommendations()[0]

    failing_commit()
    with pytest.raises(NetworkError):
        profiles.apply_recommendation(water.id)

    assert _count(db, Habit) == 0
    assert profiles.list_recommendations()[0].is_applied is False


def test_failed_profile_update_keeps_stored_values(profiles, failing_commit):
    profiles.update_profile(age=30)

    failing_commit()
    with pytest.raises(NetworkError):
        profiles.update_profile(age=31)
    assert profiles.get_or_create_profile().age == 30
