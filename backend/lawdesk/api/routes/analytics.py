"""
Analytics routes.

Endpoints:
- GET /api/v1/analytics/cases?months=6 -> case analytics for the caller's firm
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from lawdesk.core.deps import get_analytics_service, get_current_user
from lawdesk.models.user import User
from lawdesk.schemas.analytics import CaseAnalytics
from lawdesk.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/api/v1/analytics", tags=["analytics"])


@router.get("/cases", response_model=CaseAnalytics)
def case_analytics(
    months: int = Query(6, ge=1, le=24, description="Months in the monthly trend"),
    user: User = Depends(get_current_user),
    service: AnalyticsService = Depends(get_analytics_service),
) -> CaseAnalytics:
    return CaseAnalytics.model_validate(service.case_analytics(user, months=months))
