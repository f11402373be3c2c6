from fastapi import APIRouter

from habitgrid.api.habits import router as habits_router
from habitgrid.api.logs import router as logs_router
from habitgrid.api.stats import router as stats_router
from habitgrid.api.timer import router as timer_router

router = APIRouter()
router.include_router(habits_router)
router.include_router(logs_router)
router.include_router(stats_router)
router.include_router(timer_router)

__all__ = ["router"]
