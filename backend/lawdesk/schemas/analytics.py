"""Pydantic models for case analytics."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field


class MonthlyTrendPoint(BaseModel):
    month: str = Field(..., description="YYYY-MM")
    cases: int = Field(..., ge=0)
    revenue: float = Field(..., ge=0)
    success_rate: float = Field(..., ge=0, le=100)


class CaseAnalytics(BaseModel):
    total_cases: int = Field(..., ge=0)
    active_cases: int = Field(..., ge=0)
    closed_cases: int = Field(..., ge=0)
    success_rate: float = Field(..., ge=0, le=100)
    average_duration: float = Field(..., description="Mean days from start to actual end")
    revenue: float = Field(..., ge=0)
    cases_by_type: Dict[str, int]
    cases_by_status: Dict[str, int]
    monthly_trend: List[MonthlyTrendPoint]
