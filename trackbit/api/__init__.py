from fastapi import APIRouter

from trackbit.api.goals import router as goals_router
from trackbit.api.habits import router as habits_router
from trackbit.api.insights import router as insights_router
from trackbit.api.profile import router as profile_router
from trackbit.api.routines import router as routines_router

router = APIRouter()
router.include_router(habits_router)
router.include_router(routines_router)
router.include_router(goals_router)
router.include_router(profile_router)
router.include_router(insights_router)

__all__ = ["router"]
