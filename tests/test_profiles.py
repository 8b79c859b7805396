from types import SimpleNamespace

import pytest

from trackbit.errors import ValidationError
from trackbit.services.recommendations import LIFESTYLE_FOCUS_OPTIONS, generate_habit_recommendations


def _profile(**overrides):
    fields = dict(lifestyle_focus=[], age=None, gender=None, occupation_category=None, weight_kg=None)
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_health_focus_recommends_hydration_first():
    recs = generate_habit_recommendations(_profile(lifestyle_focus=["health-wellness"], weight_kg=70.0))

    assert [r["name"] for r in recs] == ["Drink Water", "Morning Exercise"]
    assert recs[0]["confidence_score"] == 0.95
    assert "70kg" in recs[0]["reasoning"]
    assert recs[0]["frequency"] == "daily"
    assert recs[1]["frequency"] == "custom"
    assert recs[1]["target_days"] == [1, 2, 3, 4, 5]


def test_student_deep_work_is_shorter():
    student = generate_habit_recommendations(_profile(lifestyle_focus=["work-career"], occupation_category="student"))
    professional = generate_habit_recommendations(_profile(lifestyle_focus=["work-career"], occupation_category="professional"))

    assert student[0]["target_value"] == 90
    assert professional[0]["target_value"] == 120
    assert "Study Session" in [r["name"] for r in student]


def test_age_and_gender_rules():
    young = generate_habit_recommendations(_profile(age=20))
    older = generate_habit_recommendations(_profile(age=60, gender="female"))

    assert [r["name"] for r in young] == ["Read Books"]
    assert [r["name"] for r in older] == ["Gentle Stretching", "Self-Care Time"]
    assert generate_habit_recommendations(_profile(age=35)) == []


def test_recommendations_are_capped():
    profile = _profile(lifestyle_focus=list(LIFESTYLE_FOCUS_OPTIONS), age=20, gender="female", occupation_category="student")
    assert len(generate_habit_recommendations(profile)) == 8
    assert len(generate_habit_recommendations(profile, limit=3)) == 3


def test_survey_requires_name_and_focus(profiles):
    with pytest.raises(ValidationError):
        profiles.complete_survey(display_name=" ", lifestyle_focus=["financial"])
    with pytest.raises(ValidationError):
        profiles.complete_survey(display_name="Sam", lifestyle_focus=[])
    with pytest.raises(ValidationError):
        profiles.complete_survey(display_name="Sam", lifestyle_focus=["astrology"])
    with pytest.raises(ValidationError):
        profiles.complete_survey(display_name="Sam", lifestyle_focus=["financial"], age=150)


def test_no_recommendations_before_survey(profiles):
    profiles.get_or_create_profile()
    assert profiles.generate_recommendations() == []
    assert profiles.list_recommendations() == []


def test_survey_generates_sorted_recommendations(profiles):
    profile = profiles.complete_survey(display_name="Sam", lifestyle_focus=["financial", "health-wellness"], age=40)

    assert profile.survey_completed is True
    assert profile.lifestyle_focus == ["financial", "health-wellness"]
    recs = profiles.list_recommendations()
    assert [r.name for r in recs] == ["Drink Water", "Morning Exercise", "Budget Review"]

    profiles.generate_recommendations()
    assert len(profiles.list_recommendations()) == 3


def test_apply_and_dismiss(profiles, habits):
    profiles.complete_survey(display_name="Sam", lifestyle_focus=["health-wellness"])
    water, exercise = profiles.list_recommendations()

    habit = profiles.apply_recommendation(water.id)
    assert habit.name == "Drink Water"
    assert habit.target_value == 8
    assert habit.unit == "glasses"
    assert profiles.list_recommendations()[0].is_applied is True

    assert profiles.dismiss_recommendation(exercise.id) is True
    assert [r.name for r in profiles.list_recommendations()] == ["Drink Water"]
    assert profiles.dismiss_recommendation(exercise.id) is False
    assert profiles.apply_recommendation(exercise.id) is None


def test_update_profile_validates_options(profiles):
    profile = profiles.update_profile(name="Sam Lee", gender="non-binary", height_cm=170)
    assert profile.gender == "non-binary"
    with pytest.raises(ValidationError):
        profiles.update_profile(occupation_category="astronaut")
    with pytest.raises(ValidationError):
        profiles.update_profile(weight_kg=-1)


def test_coach_context_requires_completed_survey(profiles):
    profiles.update_profile(age=28)
    assert profiles.coach_context() is None

    profiles.complete_survey(display_name="Sam", lifestyle_focus=["financial"], age=28, occupation_category="professional")
    assert profiles.coach_context() == {"age": 28, "occupation": "professional", "lifestyleFocus": ["financial"]}
