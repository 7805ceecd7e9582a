"""
Case analytics for a law firm.

All figures are computed from the firm's cases:
- success_rate: won / (won + lost) * 100, 0 when nothing has been decided
- average_duration: mean days between start_date and actual_end_date over
  cases that have an actual end date
- revenue: sum of actual_value over won and settled cases
- monthly_trend: one bucket per calendar month (by start_date), oldest first,
  ending with the current month
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from lawdesk.core.contracts import CaseRepo
from lawdesk.models.case import Case
from lawdesk.models.enums import ACTIVE_CASE_STATUSES, CLOSED_CASE_STATUSES, CaseStatus, CaseType
from lawdesk.models.user import User

__all__ = ["AnalyticsService", "compute_case_analytics", "success_rate", "month_keys"]

_REVENUE_STATUSES = frozenset({CaseStatus.WON.value, CaseStatus.SETTLED.value})


def success_rate(cases: Iterable[Case]) -> float:
    won = lost = 0
    for case in cases:
        if case.status == CaseStatus.WON.value:
            won += 1
        elif case.status == CaseStatus.LOST.value:
            lost += 1
    decided = won + lost
    if decided == 0:
        return 0.0
    return round(won / decided * 100, 2)


def _revenue(cases: Iterable[Case]) -> float:
    return round(
        sum(c.actual_value or 0.0 for c in cases if c.status in _REVENUE_STATUSES),
        2,
    )


def month_keys(months: int, today: date) -> List[str]:
    """The last `months` calendar months as YYYY-MM, oldest first."""
    keys: List[str] = []
    year, month = today.year, today.month
    for _ in range(months):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    keys.reverse()
    return keys


def compute_case_analytics(
    cases: Sequence[Case], *, months: int = 6, today: Optional[date] = None
) -> Dict[str, Any]:
    today = today or date.today()

    by_type = {t.value: 0 for t in CaseType}
    by_status = {s.value: 0 for s in CaseStatus}
    for case in cases:
        by_type[case.case_type] = by_type.get(case.case_type, 0) + 1
        by_status[case.status] = by_status.get(case.status, 0) + 1

    durations = [
        (c.actual_end_date - c.start_date).days
        for c in cases
        if c.actual_end_date is not None and c.start_date is not None
    ]
    average_duration = round(sum(durations) / len(durations), 2) if durations else 0.0

    buckets: Dict[str, List[Case]] = {key: [] for key in month_keys(months, today)}
    for case in cases:
        if case.start_date is None:
            continue
        key = f"{case.start_date.year:04d}-{case.start_date.month:02d}"
        if key in buckets:
            buckets[key].append(case)

    return {
        "total_cases": len(cases),
        "active_cases": sum(1 for c in cases if c.status in ACTIVE_CASE_STATUSES),
        "closed_cases": sum(1 for c in cases if c.status in CLOSED_CASE_STATUSES),
        "success_rate": success_rate(cases),
        "average_duration": average_duration,
        "revenue": _revenue(cases),
        "cases_by_type": by_type,
        "cases_by_status": by_status,
        "monthly_trend": [
            {
                "month": key,
                "cases": len(bucket),
                "revenue": _revenue(bucket),
                "success_rate": success_rate(bucket),
            }
            for key, bucket in buckets.items()
        ],
    }


class AnalyticsService:
    def __init__(self, case_repo: CaseRepo) -> None:
        self.case_repo = case_repo

    def case_analytics(self, actor: User, *, months: int = 6) -> Dict[str, Any]:
        return compute_case_analytics(self.case_repo.list_all(actor.law_firm_id), months=months)
