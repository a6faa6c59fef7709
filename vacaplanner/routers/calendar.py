from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from vacaplanner.database import get_db
from vacaplanner.models.user import User
from vacaplanner.routers.auth_deps import get_current_user
from vacaplanner.schemas.leave import AnalyticsSummary, HolidayResponse
from vacaplanner.services.analytics import AnalyticsService
from vacaplanner.services.holidays import italian_holidays

router = APIRouter(tags=["calendar"])


@router.get("/holidays", response_model=List[HolidayResponse])
def list_holidays(
    year: Optional[int] = Query(default=None, ge=1583, le=9999),
    current_user: User = Depends(get_current_user),
):
    year = year or date.today().year
    return [
        HolidayResponse(day=h.day, name=h.name, local_name=h.local_name)
        for h in italian_holidays(year)
    ]


@router.get("/analytics/summary", response_model=AnalyticsSummary)
def analytics_summary(
    year: Optional[int] = Query(default=None, ge=1583, le=9999),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return AnalyticsService(db).summary(year or date.today().year)
