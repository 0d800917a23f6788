from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import folium

from dashboard.aggregator import marker_radius
from dashboard.config import DashboardConfig
from dashboard.formatting import format_number, format_percent


def popup_html(item: Mapping[str, Any]) -> str:
    return (
        f"<strong>{item.get('name')}</strong><br/>"
        f"{format_percent(item.get('elder_percentage'))} de idosos<br/>"
        f"{format_number(item.get('elder_population'))} idosos"
    )


def build_state_map(overview: Sequence[Mapping[str, Any]], config: DashboardConfig | None = None) -> folium.Map:
    """One circle marker per overview row, sized by the elderly share.

    Rows whose code has no known coordinates are left off the map. The
    marker tooltip carries the state code so a click can select the state.
    """
    cfg = config or DashboardConfig()
    state_map = folium.Map(location=list(cfg.map.center), zoom_start=cfg.map.zoom, tiles=cfg.map.tiles)
    for item in overview:
        sigla = str(item.get("sigla", ""))
        coords = cfg.coordinates_for(sigla)
        if coords is None:
            continue
        folium.CircleMarker(
            location=list(coords),
            radius=marker_radius(item.get("elder_percentage")),
            color=cfg.map.marker_color,
            fill=True,
            fill_color=cfg.map.marker_color,
            fill_opacity=0.5,
            weight=1,
            popup=folium.Popup(popup_html(item), max_width=240),
            tooltip=sigla,
        ).add_to(state_map)
    return state_map


def clicked_state(map_state: Mapping[str, Any] | None) -> str | None:
    """State code of the last clicked marker in a ``st_folium`` return value."""
    if not map_state:
        return None
    tooltip = map_state.get("last_object_clicked_tooltip")
    if not tooltip:
        return None
    code = str(tooltip).strip().upper()
    return code if len(code) == 2 and code.isalpha() else None
