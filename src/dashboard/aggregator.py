"""Chart-ready series derived from the query endpoint payloads.

Everything here is a pure function over the JSON the API returns, so the
Streamlit page only wires selectors to figures.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import pandas as pd

from dashboard.formatting import MISSING, format_currency, format_number, format_percent

NATIONAL_CODE = "BR"

LIVING_LABELS = (
    ("alone", "Mora sozinho(a)"),
    ("withOthers", "Com outras pessoas"),
    ("withFamilyOrOther", "Com família/Instituições"),
)
DEPENDENCY_LABELS = (
    ("independentOrPartial", "Independentes/Parciais"),
    ("total", "Totalmente dependentes"),
)


@dataclass(frozen=True)
class SummaryCard:
    title: str
    value: str
    caption: str | None = None


def _year_key(key: Any) -> tuple[int, str]:
    text = str(key)
    return (int(text) if text.isdigit() else 0, text)


def _percentage(item: Mapping[str, Any]) -> float:
    return float(item.get("elder_percentage") or 0)


def top_states(overview: Sequence[Mapping[str, Any]], limit: int = 8) -> list[dict[str, Any]]:
    states = [dict(item) for item in overview if item.get("sigla") != NATIONAL_CODE]
    states.sort(key=_percentage, reverse=True)
    return states[:limit]


def series_points(series: Mapping[str, Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Turn ``{year: {...}}`` into points ordered by year."""
    points = []
    for year in sorted(series, key=_year_key):
        entry = series.get(year) or {}
        points.append(
            {
                "year": str(year),
                "elderly": entry.get("elder_population"),
                "total": entry.get("total_population"),
                "percentage": entry.get("elder_percentage"),
            }
        )
    return points


def _pie(payload: Mapping[str, Any] | None, labels: Sequence[tuple[str, str]]) -> list[dict[str, Any]]:
    data = payload or {}
    return [{"name": label, "value": data.get(key) or 0} for key, label in labels]


def living_pie(living: Mapping[str, Any] | None) -> list[dict[str, Any]]:
    return _pie(living, LIVING_LABELS)


def dependency_pie(dependency: Mapping[str, Any] | None) -> list[dict[str, Any]]:
    return _pie(dependency, DEPENDENCY_LABELS)


def years_from_series(series: Mapping[str, Any]) -> list[str]:
    return sorted((str(year) for year in series), key=_year_key)


def default_year(years: Sequence[str], fallback: str) -> str:
    return years[-1] if years else fallback


def find_entry(overview: Sequence[Mapping[str, Any]], sigla: str) -> Mapping[str, Any] | None:
    for item in overview:
        if item.get("sigla") == sigla:
            return item
    return None


def picked_state(candidate: str | None, selected: str, codes: Sequence[str]) -> str | None:
    """State to switch to after a map click or table pick, if any."""
    if not candidate or candidate == selected or candidate not in codes:
        return None
    return candidate


def summary_cards(
    overview: Sequence[Mapping[str, Any]],
    selected_state: str,
    income: Mapping[str, Any] | None,
) -> list[SummaryCard]:
    national = find_entry(overview, NATIONAL_CODE)
    selected = find_entry(overview, selected_state)
    income = income or {}
    return [
        SummaryCard(
            "Idosos (ano selecionado)",
            format_number(national["elder_population"]) if national else MISSING,
        ),
        SummaryCard(
            "Percentual de idosos",
            format_percent(national["elder_percentage"]) if national else MISSING,
        ),
        SummaryCard(
            f"Idosos em {selected_state}",
            format_percent(selected["elder_percentage"]) if selected else MISSING,
        ),
        SummaryCard(
            "Renda média (PNAD 2023)",
            format_currency(income.get("averageIncome")),
            caption=f"Pensão: {format_currency(income.get('averagePensionIncome'))}",
        ),
    ]


def overview_table(overview: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    """States of the selected year, highest elderly share first."""
    rows = top_states(overview, limit=len(overview))
    frame = pd.DataFrame(
        [
            {
                "sigla": row.get("sigla"),
                "Estado": f"{row.get('sigla')} - {row.get('name')}",
                "Idosos": format_number(row.get("elder_population")),
                "Total": format_number(row.get("total_population")),
                "% Idosos": format_percent(row.get("elder_percentage")),
            }
            for row in rows
        ],
        columns=["sigla", "Estado", "Idosos", "Total", "% Idosos"],
    )
    return frame


def marker_radius(percentage: float | None) -> float:
    return 4 + float(percentage or 0)


def bar_axis_max(top: Sequence[Mapping[str, Any]]) -> float:
    if not top:
        return 0.0
    return max(_percentage(item) for item in top) * 1.2


def line_tick_interval(points: Sequence[Any]) -> int:
    return 4 if len(points) > 20 else 0
