from typing import Optional

from sqlalchemy import and_, delete, select
from sqlalchemy.orm import Session

from trackbit.models import HabitRecommendation, Profile


def get_profile(db: Session, user_id: str) -> Optional[Profile]:
    return db.scalar(select(Profile).where(Profile.user_id == user_id))


def list_recommendations(db: Session, user_id: str) -> list[HabitRecommendation]:
    return list(
        db.scalars(
            select(HabitRecommendation)
            .where(HabitRecommendation.user_id == user_id)
            .order_by(HabitRecommendation.confidence_score.desc(), HabitRecommendation.id)
        )
    )


def get_recommendation(db: Session, user_id: str, recommendation_id: int) -> Optional[HabitRecommendation]:
    return db.scalar(
        select(HabitRecommendation).where(
            and_(HabitRecommendation.id == recommendation_id, HabitRecommendation.user_id == user_id)
        )
    )


def replace_recommendations(db: Session, user_id: str, rows: list[HabitRecommendation]) -> list[HabitRecommendation]:
    db.execute(delete(HabitRecommendation).where(HabitRecommendation.user_id == user_id))
    for row in rows:
        db.add(row)
    db.flush()
    return rows
