from datetime import date, timedelta

import pytest

from trackbit.errors import ValidationError
from trackbit.services.goals import HIGHLY_EFFECTIVE, MODERATELY_EFFECTIVE, NEEDS_IMPROVEMENT, effectiveness_label

START = date(2024, 1, 1)


def _complete(habits, habit_id, count):
    for offset in range(count):
        habits.toggle_completion(habit_id, START + timedelta(days=offset))


def test_effectiveness_thresholds():
    assert effectiveness_label(0.8) == HIGHLY_EFFECTIVE
    assert effectiveness_label(0.79) == MODERATELY_EFFECTIVE
    assert effectiveness_label(0.5) == MODERATELY_EFFECTIVE
    assert effectiveness_label(0.49) == NEEDS_IMPROVEMENT


def test_goal_window_spans_target_days(habits, goals):
    habit = habits.add_habit(name="Meditate")
    goal = goals.create_goal(habit.id, 10, notes=" focus ", start=START)

    assert goal.start_date == START
    assert goal.end_date == date(2024, 1, 11)
    assert goal.notes == "focus"


def test_nine_of_ten_days_is_highly_effective(habits, goals):
    habit = habits.add_habit(name="Meditate")
    goal = goals.create_goal(habit.id, 10, start=START)
    _complete(habits, habit.id, 9)

    result = goals.assess_goal(goal, today=date(2024, 1, 5))
    assert result["completed_days"] == 9
    assert result["total_days"] == 11
    assert result["is_effective"] is True
    assert result["label"] == HIGHLY_EFFECTIVE
    assert result["days_remaining"] == 6


@pytest.mark.parametrize("done, label", [(6, MODERATELY_EFFECTIVE), (2, NEEDS_IMPROVEMENT)])
def test_lower_completion_labels(habits, goals, done, label):
    habit = habits.add_habit(name="Meditate")
    goal = goals.create_goal(habit.id, 10, start=START)
    _complete(habits, habit.id, done)

    result = goals.assess_goal(goal, today=date(2024, 2, 1))
    assert result["label"] == label
    assert result["is_effective"] is False
    assert result["days_remaining"] == 0


def test_completions_outside_the_window_do_not_count(habits, goals):
    habit = habits.add_habit(name="Meditate")
    goal = goals.create_goal(habit.id, 3, start=START)
    habits.toggle_completion(habit.id, START - timedelta(days=1))
    habits.toggle_completion(habit.id, START + timedelta(days=10))

    assert goals.assess_goal(goal)["completed_days"] == 0


def test_assessment_is_read_only(habits, goals):
    habit = habits.add_habit(name="Meditate")
    goal = goals.create_goal(habit.id, 5, start=START)
    _complete(habits, habit.id, 3)

    first = goals.assess_goal(goal, today=START)
    second = goals.assess_goal(goal, today=START)
    assert first == second
    assert goals.get_goal(goal.id).target_days == 5


def test_invalid_goals(habits, goals):
    habit = habits.add_habit(name="Meditate")
    with pytest.raises(ValidationError, match="select a habit"):
        goals.create_goal(999, 10)
    with pytest.raises(ValidationError):
        goals.create_goal(habit.id, 0)
    assert goals.list_goals() == []


def test_checkins_are_counted_and_deleted_with_goal(habits, goals):
    habit = habits.add_habit(name="Meditate")
    goal = goals.create_goal(habit.id, 10, start=START)
    goals.add_checkin(goal.id, START, "hit")
    goals.add_checkin(goal.id, START + timedelta(days=1), "MISS")
    with pytest.raises(ValidationError):
        goals.add_checkin(goal.id, START, "skipped")

    result = goals.assess_goal(goal, today=START)
    assert (result["hits"], result["misses"]) == (1, 1)

    assert goals.delete_goal(goal.id) is True
    assert goals.get_goal(goal.id) is None
    assert goals.list_checkins(goal.id) == []
    assert goals.add_checkin(goal.id, START, "hit") is None


def test_list_goals_filters_by_habit(habits, goals):
    water = habits.add_habit(name="Water")
    read = habits.add_habit(name="Read")
    goals.create_goal(water.id, 7, start=START)
    goals.create_goal(read.id, 7, start=START)

    assert [g.habit_id for g in goals.list_goals(habit_id=read.id)] == [read.id]
    assert len(goals.list_goals()) == 2
