from __future__ import annotations

import folium
import pytest

from dashboard import charts
from dashboard.config import DashboardConfig, Palette
from dashboard.maps import build_state_map, clicked_state, popup_html


def _top() -> list[dict]:
    return [
        {"sigla": "RS", "name": "Rio Grande do Sul", "elder_percentage": 20.2},
        {"sigla": "RJ", "name": "Rio de Janeiro", "elder_percentage": 19.3},
        {"sigla": "MG", "name": "Minas Gerais", "elder_percentage": 17.5},
    ]


def test_top_states_bar_lists_highest_share_on_top() -> None:
    fig = charts.top_states_bar(_top())

    bar = fig.data[0]
    assert bar.orientation == "h"
    assert list(bar.y) == ["MG", "RJ", "RS"]
    assert fig.layout.xaxis.range[1] == pytest.approx(20.2 * 1.2)


def test_state_series_line_puts_percentage_on_secondary_axis() -> None:
    points = [
        {"year": str(year), "elderly": 10 + year - 2010, "total": 100, "percentage": 10.0 + year - 2010}
        for year in range(2010, 2041)
    ]

    fig = charts.state_series_line(points, "SP")

    assert [trace.name for trace in fig.data] == ["Idosos", "População total", "Percentual"]
    assert fig.data[2].yaxis == "y2"
    assert fig.layout.xaxis.dtick == 5
    assert tuple(fig.layout.yaxis2.range) == (0, 100)
    assert fig.layout.title.text == "Projeção de idosos em SP"


def test_pie_charts_use_palette_colors() -> None:
    slices = [{"name": "Independentes/Parciais", "value": 0.9}, {"name": "Totalmente dependentes", "value": 0.1}]

    fig = charts.dependency_pie_chart(slices, Palette(dependency=("#000001", "#000002")))

    pie = fig.data[0]
    assert list(pie.values) == [0.9, 0.1]
    assert list(pie.marker.colors) == ["#000001", "#000002"]
    assert pie.hole == 0.5


def test_state_map_has_one_marker_per_known_state() -> None:
    overview = [
        {"sigla": "BR", "name": "Brasil", "elder_population": 34_000_000, "elder_percentage": 16.0},
        {"sigla": "SP", "name": "São Paulo", "elder_population": 8_000_000, "elder_percentage": 17.4},
        {"sigla": "XX", "name": "Unknown", "elder_population": 1, "elder_percentage": 1.0},
    ]

    state_map = build_state_map(overview, DashboardConfig())

    markers = [child for child in state_map._children.values() if isinstance(child, folium.CircleMarker)]
    assert len(markers) == 2
    assert markers[1].options["radius"] == pytest.approx(21.4)


def test_popup_html_formats_share_and_count() -> None:
    html = popup_html({"name": "São Paulo", "elder_percentage": 17.44, "elder_population": 8_000_000})

    assert html == "<strong>São Paulo</strong><br/>17.4 % de idosos<br/>8,0 M idosos"


def test_clicked_state_reads_marker_tooltip() -> None:
    assert clicked_state({"last_object_clicked_tooltip": "sp"}) == "SP"
    assert clicked_state({"last_object_clicked_tooltip": None}) is None
    assert clicked_state({"last_object_clicked_tooltip": "São Paulo"}) is None
    assert clicked_state(None) is None
