"""In-memory filters and group-bys over the elderly-population records."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from app.dataset import NATIONAL_CODE, NATIONAL_NAME, ElderlyRecord, to_number

LIVING_KEYS = ("alone", "withOthers", "withFamilyOrOther")
DEPENDENCY_KEYS = ("independentOrPartial", "total")
INCOME_KEYS = ("averageIncome", "averagePensionIncome")


def elder_percentage(elder: Any, total: Any) -> float:
    elder_value = to_number(elder)
    total_value = to_number(total)
    if total_value <= 0:
        return 0.0
    return (elder_value / total_value) * 100


def _series_entry(elder: int | float, total: int | float) -> dict[str, Any]:
    return {
        "elder_population": elder,
        "total_population": total,
        "elder_percentage": elder_percentage(elder, total),
    }


def _state_level(records: Iterable[ElderlyRecord]) -> list[ElderlyRecord]:
    # City rows and explicit national rows never feed per-state aggregates.
    return [record for record in records if record.cidade is None and not record.is_national]


def _national_level(records: Iterable[ElderlyRecord]) -> list[ElderlyRecord]:
    return [record for record in records if record.cidade is None and record.is_national]


def _sorted_by_year(series: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
    return {year: series[year] for year in sorted(series, key=int)}


def _national_series(records: Sequence[ElderlyRecord]) -> dict[str, dict[str, Any]]:
    totals: dict[str, list[int | float]] = {}
    for record in _state_level(records):
        if record.year is None:
            continue
        elder_total = totals.setdefault(str(record.year), [0, 0])
        elder_total[0] += record.elder_population
        elder_total[1] += record.total_population
    return _sorted_by_year({year: _series_entry(elder, total) for year, (elder, total) in totals.items()})


def state_series(records: Sequence[ElderlyRecord], uf: str) -> dict[str, dict[str, Any]]:
    """Group one state's records by year.

    When a year appears more than once the last record wins. The national
    series sums every state per year; explicit national rows that carry
    population figures override the derived year.
    """
    code = uf.strip().upper()
    matched = [record for record in records if record.sigla == code and record.cidade is None]

    by_year: dict[str, dict[str, Any]] = {}
    if code == NATIONAL_CODE:
        by_year = _national_series(records)
        matched = [record for record in matched if record.total_population > 0]
    for record in matched:
        if record.year is None:
            continue
        by_year[str(record.year)] = _series_entry(record.elder_population, record.total_population)
    return _sorted_by_year(by_year)


def year_overview(records: Sequence[ElderlyRecord], year: int) -> list[dict[str, Any]]:
    """Per-state aggregates for one year, headed by a synthetic national row."""
    rows = [record for record in _state_level(records) if record.year == year]

    by_code: dict[str, dict[str, Any]] = {}
    national_elder: int | float = 0
    national_total: int | float = 0
    for record in rows:
        if record.sigla:
            by_code[record.sigla] = {
                "sigla": record.sigla,
                "name": record.name,
                **_series_entry(record.elder_population, record.total_population),
            }
        national_elder += record.elder_population
        national_total += record.total_population

    if not rows:
        explicit = [record for record in _national_level(records) if record.year == year]
        if explicit:
            national_elder = explicit[-1].elder_population
            national_total = explicit[-1].total_population

    national_row = {
        "sigla": NATIONAL_CODE,
        "name": NATIONAL_NAME,
        **_series_entry(national_elder, national_total),
    }
    return [national_row, *by_code.values()]


def list_states(records: Iterable[ElderlyRecord]) -> list[dict[str, str]]:
    names: dict[str, str] = {}
    # State rows name the state; city rows only fill in codes nothing else mentions.
    for record in sorted(records, key=lambda item: item.cidade is not None):
        if not record.sigla or record.is_national:
            continue
        names.setdefault(record.sigla, record.name or record.sigla)
    states = [{"sigla": code, "name": names[code]} for code in sorted(names)]
    return [{"sigla": NATIONAL_CODE, "name": NATIONAL_NAME}, *states]


def _latest_object(records: Sequence[ElderlyRecord], field: str) -> dict[str, Any] | None:
    newest_first = sorted(
        records,
        key=lambda record: record.year if record.year is not None else float("-inf"),
        reverse=True,
    )
    for record in newest_first:
        value = getattr(record, field)
        if isinstance(value, dict):
            return value
    return None


def living_breakdown(records: Sequence[ElderlyRecord]) -> dict[str, int | float]:
    living = _latest_object(records, "living") or {}
    return {key: to_number(living.get(key)) for key in LIVING_KEYS}


def dependency_breakdown(records: Sequence[ElderlyRecord]) -> dict[str, int | float]:
    dependency = _latest_object(records, "dependency") or {}
    return {key: to_number(dependency.get(key)) for key in DEPENDENCY_KEYS}


def income_stats(records: Sequence[ElderlyRecord]) -> dict[str, int | float | None]:
    income = _latest_object(records, "income") or {}
    return {key: to_number(income.get(key)) or None for key in INCOME_KEYS}


def filter_records(
    records: Iterable[ElderlyRecord],
    uf: str | None = None,
    cidade: str | None = None,
) -> list[ElderlyRecord]:
    result = list(records)
    if uf:
        code = uf.strip().upper()
        result = [record for record in result if record.sigla == code]
    if cidade:
        city = cidade.strip().lower()
        result = [record for record in result if (record.cidade or "").lower() == city]
    return result


def available_years(records: Iterable[ElderlyRecord]) -> list[int]:
    return sorted({record.year for record in records if record.year is not None})


def national_total(records: Sequence[ElderlyRecord], year: int | None = None) -> tuple[int | None, int | float]:
    """Sum the elderly count over state rows of ``year`` (latest year by default)."""
    rows = _state_level(records)
    if year is None:
        years = available_years(rows)
        if not years:
            return None, 0
        year = years[-1]
    total: int | float = 0
    for record in rows:
        if record.year == year:
            total += record.elder_count
    return year, total
