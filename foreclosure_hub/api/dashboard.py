from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from foreclosure_hub.api.auth import require_admin
from foreclosure_hub.core.database import get_db
from foreclosure_hub.models.user import User
from foreclosure_hub.services.dashboard_service import DashboardService, DATE_RANGES
from foreclosure_hub.schemas.dashboard import KpiResponse, SeriesResponse

router = APIRouter(prefix="/api/admin/dashboard", tags=["Dashboard Analytics"])


# 1. KPI Summary
@router.get("/kpis", response_model=KpiResponse)
def get_dashboard_kpis(
    dateRange: str = Query("7d", enum=DATE_RANGES),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return DashboardService(db).get_kpis(dateRange)


# 2. Daily series
@router.get("/series", response_model=SeriesResponse)
def get_dashboard_series(
    dateRange: str = Query("7d", enum=DATE_RANGES),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return DashboardService(db).get_series(dateRange)
