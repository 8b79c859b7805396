import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from trackbit import crud
from trackbit.errors import NetworkError, ValidationError
from trackbit.models import Habit, HabitRecommendation, Profile
from trackbit.services.habits import HabitService
from trackbit.services.recommendations import (
    GENDER_OPTIONS,
    LIFESTYLE_FOCUS_OPTIONS,
    OCCUPATION_OPTIONS,
    generate_habit_recommendations,
)

log = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "display_name", "age", "gender", "occupation_category", "height_cm", "weight_kg", "lifestyle_focus")


def _validate_profile_fields(data: dict[str, Any]) -> dict[str, Any]:
    age = data.get("age")
    if age is not None:
        age = int(age)
        if not 1 <= age <= 120:
            raise ValidationError("Age must be between 1 and 120")
        data["age"] = age

    gender = data.get("gender")
    if gender is not None and gender not in GENDER_OPTIONS:
        raise ValidationError(f"Unknown gender option: {gender}")

    occupation = data.get("occupation_category")
    if occupation is not None and occupation not in OCCUPATION_OPTIONS:
        raise ValidationError(f"Unknown occupation category: {occupation}")

    for key in ("height_cm", "weight_kg"):
        value = data.get(key)
        if value is not None and float(value) <= 0:
            raise ValidationError(f"{key} must be positive")

    if data.get("lifestyle_focus") is not None:
        focus: list[str] = []
        for item in data["lifestyle_focus"]:
            if item not in LIFESTYLE_FOCUS_OPTIONS:
                raise ValidationError(f"Unknown lifestyle focus: {item}")
            if item not in focus:
                focus.append(item)
        data["lifestyle_focus"] = focus
    return data


class ProfileService:
    """Survey profile and the recommendations generated from it."""

    def __init__(self, habits: HabitService):
        self.habits = habits
        self.db = habits.db
        self.user_id = habits.user_id

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.warning("Rolled back profile write for user=%s: %s", self.user_id, exc)
            raise NetworkError("Could not save changes") from exc

    def get_or_create_profile(self, email: str = "") -> Profile:
        profile = crud.get_profile(self.db, self.user_id)
        if profile is not None:
            return profile

        profile = Profile(user_id=self.user_id, email=email or "")
        self.db.add(profile)
        self._commit()
        log.info("Profile created user=%s", self.user_id)
        return profile

    def update_profile(self, **changes) -> Profile:
        profile = self.get_or_create_profile()
        data = _validate_profile_fields({k: v for k, v in changes.items() if k in PROFILE_FIELDS})
        for key, value in data.items():
            setattr(profile, key, value)
        profile.updated_at = datetime.utcnow()
        self.db.add(profile)
        self._commit()
        return profile

    def complete_survey(self, **survey) -> Profile:
        """Store the survey answers and regenerate recommendations."""
        display_name = (survey.get("display_name") or "").strip()
        if not display_name:
            raise ValidationError("Please enter your name")
        if not survey.get("lifestyle_focus"):
            raise ValidationError("Please select at least one lifestyle focus")

        data = _validate_profile_fields({k: v for k, v in survey.items() if k in PROFILE_FIELDS})
        data["display_name"] = display_name

        profile = self.get_or_create_profile()
        now = datetime.utcnow()
        for key, value in data.items():
            setattr(profile, key, value)
        profile.survey_completed = True
        profile.survey_completed_at = now
        profile.updated_at = now
        self.db.add(profile)
        self._commit()
        log.info("Survey completed user=%s focus=%s", self.user_id, profile.lifestyle_focus)

        self.generate_recommendations()
        return profile

    def generate_recommendations(self) -> list[HabitRecommendation]:
        profile = crud.get_profile(self.db, self.user_id)
        if profile is None or not profile.survey_completed:
            return []

        rows = []
        for item in generate_habit_recommendations(profile):
            target_days = item.pop("target_days")
            tags = item.pop("tags")
            row = HabitRecommendation(user_id=self.user_id, **item)
            row.target_days = target_days
            row.tags = tags
            rows.append(row)

        try:
            crud.replace_recommendations(self.db, self.user_id, rows)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise NetworkError("Could not save recommendations") from exc
        self._commit()
        log.info("Generated %d recommendations user=%s", len(rows), self.user_id)
        return self.list_recommendations()

    def list_recommendations(self) -> list[HabitRecommendation]:
        return crud.list_recommendations(self.db, self.user_id)

    def apply_recommendation(self, recommendation_id: int) -> Optional[Habit]:
        rec = crud.get_recommendation(self.db, self.user_id, recommendation_id)
        if rec is None:
            return None

        habit = self.habits.add_habit(
            commit=False,
            name=rec.name,
            description=rec.description,
            icon=rec.icon,
            color=rec.color,
            frequency=rec.frequency,
            target_days=rec.target_days,
            target_value=rec.target_value,
            unit=rec.unit,
        )
        rec.is_applied = True
        self.db.add(rec)
        self._commit()
        return habit

    def coach_context(self) -> Optional[dict[str, Any]]:
        """Survey answers forwarded to the coaching backend, once the survey is done."""
        profile = crud.get_profile(self.db, self.user_id)
        if profile is None or not profile.survey_completed:
            return None
        return {
            "age": profile.age,
            "occupation": profile.occupation_category,
            "lifestyleFocus": profile.lifestyle_focus,
        }

    def dismiss_recommendation(self, recommendation_id: int) -> bool:
        rec = crud.get_recommendation(self.db, self.user_id, recommendation_id)
        if rec is None:
            return False
        self.db.delete(rec)
        self._commit()
        return True
