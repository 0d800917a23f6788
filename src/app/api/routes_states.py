from __future__ import annotations

from fastapi import APIRouter, Depends

from app.aggregations import available_years, list_states
from app.api.deps import get_optional_records
from app.dataset import NATIONAL_CODE, NATIONAL_NAME, ElderlyRecord
from app.schemas.responses import StateItem, YearsResponse

router = APIRouter(tags=["states"])


@router.get("/states", response_model=list[StateItem])
def get_states(records: list[ElderlyRecord] | None = Depends(get_optional_records)) -> list[dict[str, str]]:
    if records is None:
        return [{"sigla": NATIONAL_CODE, "name": NATIONAL_NAME}]
    return list_states(records)


@router.get("/years", response_model=YearsResponse)
def get_years(records: list[ElderlyRecord] | None = Depends(get_optional_records)) -> YearsResponse:
    if records is None:
        return YearsResponse(years=[])
    return YearsResponse(years=available_years(records))
