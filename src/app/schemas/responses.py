from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

Number = int | float


class StateItem(BaseModel):
    sigla: str
    name: str


class SeriesPoint(BaseModel):
    elder_population: Number
    total_population: Number
    elder_percentage: float


class OverviewItem(BaseModel):
    sigla: str
    name: str
    elder_population: Number
    total_population: Number
    elder_percentage: float


class LivingBreakdown(BaseModel):
    alone: Number = 0
    withOthers: Number = 0
    withFamilyOrOther: Number = 0


class DependencyBreakdown(BaseModel):
    independentOrPartial: Number = 0
    total: Number = 0


class IncomeStats(BaseModel):
    averageIncome: Number | None = None
    averagePensionIncome: Number | None = None


class RecordsResponse(BaseModel):
    ok: bool = True
    count: int
    items: list[dict[str, Any]]


class StatsResponse(BaseModel):
    ok: bool = True
    year: int | None
    total: Number


class YearsResponse(BaseModel):
    years: list[int] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    dataset: bool
