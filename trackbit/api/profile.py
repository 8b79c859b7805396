from fastapi import APIRouter, Depends, HTTPException

from trackbit.api.deps import get_profile_service
from trackbit.schemas import HabitOut, ProfileOut, ProfileUpdateIn, RecommendationOut, SurveyIn
from trackbit.services import ProfileService

router = APIRouter(prefix="/v1", tags=["profile"])


@router.get("/profile", response_model=ProfileOut)
def get_profile(profiles: ProfileService = Depends(get_profile_service)):
    return profiles.get_or_create_profile()


@router.patch("/profile", response_model=ProfileOut)
def update_profile(payload: ProfileUpdateIn, profiles: ProfileService = Depends(get_profile_service)):
    return profiles.update_profile(**payload.model_dump(exclude_unset=True))


@router.post("/profile/survey", response_model=ProfileOut)
def complete_survey(payload: SurveyIn, profiles: ProfileService = Depends(get_profile_service)):
    return profiles.complete_survey(**payload.model_dump())


@router.get("/recommendations", response_model=list[RecommendationOut])
def list_recommendations(profiles: ProfileService = Depends(get_profile_service)):
    return profiles.list_recommendations()


@router.post("/recommendations/generate", response_model=list[RecommendationOut])
def generate_recommendations(profiles: ProfileService = Depends(get_profile_service)):
    return profiles.generate_recommendations()


@router.post("/recommendations/{recommendation_id}/apply", response_model=HabitOut)
def apply_recommendation(recommendation_id: int, profiles: ProfileService = Depends(get_profile_service)):
    habit = profiles.apply_recommendation(recommendation_id)
    if not habit:
        raise HTTPException(status_code=404, detail="Recommendation not found")
    return habit


@router.delete("/recommendations/{recommendation_id}")
def dismiss_recommendation(recommendation_id: int, profiles: ProfileService = Depends(get_profile_service)) -> dict[str, bool]:
    if not profiles.dismiss_recommendation(recommendation_id):
        raise HTTPException(status_code=404, detail="Recommendation not found")
    return {"dismissed": True}
