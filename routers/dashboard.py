"""
Dashboard router
"""
from fastapi import APIRouter, Depends

from routers.deps import get_current_user, get_dashboard_service
from schemas.auth import CurrentUser
from schemas.dashboard import DashboardStats
from services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def stats(_: CurrentUser = Depends(get_current_user),
          service: DashboardService = Depends(get_dashboard_service)):
    return service.get_stats()
