from datetime import date

import pytest

from trackbit import crud
from trackbit.errors import ValidationError

DAY = date(2024, 1, 10)


@pytest.fixture
def trio(habits):
    return [habits.add_habit(name=name) for name in ("Water", "Stretch", "Plan")]


def test_routine_without_habits_reports_zero_progress(routines, db):
    routine = crud.create_routine(db, "user-1", [], name="Empty")
    db.commit()

    assert routines.get_progress(routine.id, DAY) == {"completed": 0, "total": 0, "percentage": 0}
    assert routines.get_progress(999, DAY) == {"completed": 0, "total": 0, "percentage": 0}


def test_progress_is_derived_from_member_logs(habits, routines, trio):
    routine = routines.add_routine(name="Morning", habit_ids=[h.id for h in trio])
    habits.toggle_completion(trio[0].id, DAY)
    habits.toggle_completion(trio[1].id, DAY)

    progress = routines.get_progress(routine.id, DAY)
    assert progress["completed"] == 2
    assert progress["total"] == 3
    assert round(progress["percentage"], 2) == 66.67


def test_snapshot_does_not_override_live_progress(habits, routines, trio):
    routine = routines.add_routine(name="Morning", habit_ids=[h.id for h in trio])
    routines.toggle_routine_completion(routine.id, DAY)
    habits.toggle_completion(trio[2].id, DAY)

    snapshot = routines.get_routine_logs(routine.id)[0]
    assert snapshot.completed is True
    assert routines.get_progress(routine.id, DAY)["completed"] == 2
    assert routines.is_completed_on(routine, DAY) is False


def test_toggle_completes_then_clears_every_member(habits, routines, trio):
    routine = routines.add_routine(name="Morning", habit_ids=[h.id for h in trio])
    habits.toggle_completion(trio[0].id, DAY)

    progress = routines.toggle_routine_completion(routine.id, DAY)
    assert progress["completed"] == 3
    assert progress["percentage"] == 100

    progress = routines.toggle_routine_completion(routine.id, DAY)
    assert progress["completed"] == 0
    assert all(habits.get_completed_dates(h.id) == [] for h in trio)


def test_update_progress_sets_exact_subset(habits, routines, trio):
    routine = routines.add_routine(name="Morning", habit_ids=[h.id for h in trio])
    habits.toggle_completion(trio[2].id, DAY)

    progress = routines.update_routine_progress(routine.id, DAY, [trio[0].id])
    assert progress["completed"] == 1
    assert habits.get_completed_dates(trio[0].id) == [DAY]
    assert habits.get_completed_dates(trio[2].id) == []
    assert routines.get_routine_logs(routine.id)[0].completed_habits == [trio[0].id]


def test_routine_streak_and_rate_need_every_member(habits, routines, trio):
    routine = routines.add_routine(name="Morning", habit_ids=[trio[0].id, trio[1].id])
    for day in (date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)):
        routines.toggle_routine_completion(routine.id, day)
    habits.toggle_completion(trio[0].id, date(2024, 1, 4))

    streak = routines.get_routine_streak(routine.id)
    assert streak.current == 3
    assert streak.longest == 3
    assert streak.last_completed_date == date(2024, 1, 3)
    # Window 2024-01-01..2024-01-04 has three complete days out of four.
    assert routines.routine_completion_rate(routine.id, days=3, today=date(2024, 1, 4)) == 75.0


def test_deleted_member_drops_out_of_progress(habits, routines, trio):
    routine = routines.add_routine(name="Morning", habit_ids=[h.id for h in trio])
    habits.toggle_completion(trio[0].id, DAY)
    habits.delete_habit(trio[1].id)

    progress = routines.get_progress(routine.id, DAY)
    assert progress["total"] == 2
    assert progress["completed"] == 1


@pytest.mark.parametrize(
    "fields",
    [
        {"name": "", "habit_ids": [1]},
        {"name": "Morning", "habit_ids": []},
        {"name": "Morning", "habit_ids": [999]},
        {"name": "Morning", "habit_ids": [1], "reminder_time": "7am"},
    ],
)
def test_invalid_routines_are_rejected(routines, trio, fields):
    with pytest.raises(ValidationError):
        routines.add_routine(**fields)


def test_duplicate_habit_ids_are_collapsed(routines, trio):
    routine = routines.add_routine(name="Morning", habit_ids=[trio[0].id, trio[0].id, trio[1].id], reminder_time="07:30")
    assert routine.habit_ids == [trio[0].id, trio[1].id]
    assert routine.reminder_time == "07:30"
    assert routine.icon == "Sun"


def test_archive_and_delete(routines, trio):
    routine = routines.add_routine(name="Morning", habit_ids=[trio[0].id])
    routines.toggle_routine_completion(routine.id, DAY)

    routines.archive_routine(routine.id)
    assert routines.get_active_routines() == []
    assert [r.id for r in routines.get_archived_routines()] == [routine.id]

    assert routines.delete_routine(routine.id) is True
    assert routines.get_routine(routine.id) is None
    assert routines.delete_routine(routine.id) is False


def test_create_from_template_reuses_existing_habits(habits, routines):
    meditation = habits.add_habit(name="Meditation")

    routine = routines.create_from_template("mindful-living")

    assert routine.name == "Mindful Living"
    assert len(routine.habit_ids) == 3
    assert routine.habit_ids[0] == meditation.id
    assert len(habits.get_active_habits()) == 3
    assert routines.create_from_template("does-not-exist") is None
