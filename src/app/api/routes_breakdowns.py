from __future__ import annotations

from fastapi import APIRouter, Depends

from app.aggregations import dependency_breakdown, income_stats, living_breakdown
from app.api.deps import get_optional_records
from app.dataset import ElderlyRecord
from app.schemas.responses import DependencyBreakdown, IncomeStats, LivingBreakdown

router = APIRouter(tags=["breakdowns"])


@router.get("/living", response_model=LivingBreakdown)
def get_living(records: list[ElderlyRecord] | None = Depends(get_optional_records)) -> LivingBreakdown:
    if records is None:
        return LivingBreakdown()
    return LivingBreakdown(**living_breakdown(records))


@router.get("/dependency", response_model=DependencyBreakdown)
def get_dependency(records: list[ElderlyRecord] | None = Depends(get_optional_records)) -> DependencyBreakdown:
    if records is None:
        return DependencyBreakdown()
    return DependencyBreakdown(**dependency_breakdown(records))


@router.get("/income", response_model=IncomeStats)
def get_income(records: list[ElderlyRecord] | None = Depends(get_optional_records)) -> IncomeStats:
    if records is None:
        return IncomeStats()
    return IncomeStats(**income_stats(records))
