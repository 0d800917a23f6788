from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.aggregations import filter_records, national_total
from app.api.deps import get_records
from app.api.state_codes import normalize_uf
from app.dataset import ElderlyRecord
from app.schemas.errors import ERROR_RESPONSES
from app.schemas.responses import RecordsResponse, StatsResponse

router = APIRouter(tags=["records"])


@router.get("/cities", response_model=RecordsResponse, responses=ERROR_RESPONSES)
def get_cities(
    uf: str | None = Query(default=None),
    cidade: str | None = Query(default=None),
    records: list[ElderlyRecord] = Depends(get_records),
) -> RecordsResponse:
    matched = filter_records(records, uf=normalize_uf(uf), cidade=cidade)
    items = [record.raw for record in matched]
    return RecordsResponse(count=len(items), items=items)


@router.get("/stats", response_model=StatsResponse, responses=ERROR_RESPONSES)
def get_stats(
    year: int | None = Query(default=None),
    records: list[ElderlyRecord] = Depends(get_records),
) -> StatsResponse:
    resolved_year, total = national_total(records, year)
    return StatsResponse(year=resolved_year, total=total)
