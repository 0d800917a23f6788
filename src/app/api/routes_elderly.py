from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from app.aggregations import state_series, year_overview
from app.api.deps import get_optional_records, get_records
from app.api.state_codes import normalize_uf, require_uf
from app.dataset import ElderlyRecord
from app.schemas.errors import ERROR_RESPONSES
from app.schemas.responses import OverviewItem, SeriesPoint

router = APIRouter(tags=["elderly"])


@router.get(
    "/elderly",
    response_model=dict[str, SeriesPoint] | list[OverviewItem],
    responses=ERROR_RESPONSES,
)
def get_elderly(
    state: str | None = Query(default=None, description="Two-letter state code, e.g. SP or BR."),
    year: int | None = Query(default=None, description="Reference year for the per-state overview."),
    records: list[ElderlyRecord] = Depends(get_records),
) -> dict[str, dict[str, Any]] | list[dict[str, Any]]:
    """Year series for one state (``?state=``) or the per-state overview of one year (``?year=``)."""
    uf = normalize_uf(state)
    if uf is not None:
        return state_series(records, uf)
    if year is not None:
        return year_overview(records, year)
    raise HTTPException(status_code=400, detail="Use ?state=UF or ?year=YYYY")


@router.get("/projections/{uf}", response_model=dict[str, SeriesPoint], responses=ERROR_RESPONSES)
def get_projections(
    uf: str,
    records: list[ElderlyRecord] | None = Depends(get_optional_records),
) -> dict[str, dict[str, Any]]:
    code = require_uf(uf)
    if records is None:
        return {}
    return state_series(records, code)
