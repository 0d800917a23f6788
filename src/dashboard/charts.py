from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from dashboard.aggregator import bar_axis_max, line_tick_interval
from dashboard.config import Palette
from dashboard.formatting import format_number


def top_states_bar(top: Sequence[Mapping[str, Any]], palette: Palette | None = None) -> go.Figure:
    colors = palette or Palette()
    # Plotly draws horizontal bars bottom-up; reverse so the highest share sits on top.
    ordered = list(reversed(top))
    fig = go.Figure(
        go.Bar(
            x=[item["elder_percentage"] for item in ordered],
            y=[item["sigla"] for item in ordered],
            orientation="h",
            marker_color=colors.bar,
            hovertemplate="%{y}: %{x:.1f} %<extra></extra>",
        )
    )
    fig.update_layout(
        title="Top estados por proporção de idosos",
        xaxis={"range": [0, bar_axis_max(top)], "ticksuffix": "%"},
        yaxis={"type": "category"},
        margin={"l": 40, "r": 20, "t": 50, "b": 30},
    )
    return fig


def state_series_line(
    points: Sequence[Mapping[str, Any]],
    state: str,
    palette: Palette | None = None,
) -> go.Figure:
    """Elderly and total population on the left axis, elderly share on the right."""
    colors = palette or Palette()
    years = [point["year"] for point in points]
    fig = make_subplots(specs=[[{"secondary_y": True}]])
    fig.add_trace(
        go.Scatter(
            x=years,
            y=[point["elderly"] for point in points],
            name="Idosos",
            mode="lines",
            line={"color": colors.elderly, "shape": "spline"},
            customdata=[format_number(point["elderly"]) for point in points],
            hovertemplate="%{x}: %{customdata}<extra>Idosos</extra>",
        ),
        secondary_y=False,
    )
    fig.add_trace(
        go.Scatter(
            x=years,
            y=[point["total"] for point in points],
            name="População total",
            mode="lines",
            line={"color": colors.total, "shape": "spline"},
            customdata=[format_number(point["total"]) for point in points],
            hovertemplate="%{x}: %{customdata}<extra>Total</extra>",
        ),
        secondary_y=False,
    )
    fig.add_trace(
        go.Scatter(
            x=years,
            y=[point["percentage"] for point in points],
            name="Percentual",
            mode="lines",
            line={"color": colors.percentage, "shape": "spline"},
            hovertemplate="%{x}: %{y:.1f} %<extra>Percentual</extra>",
        ),
        secondary_y=True,
    )
    interval = line_tick_interval(points)
    fig.update_xaxes(type="category", dtick=interval + 1)
    fig.update_yaxes(secondary_y=False, tickformat="~s")
    fig.update_yaxes(secondary_y=True, range=[0, 100], ticksuffix="%")
    fig.update_layout(
        title=f"Projeção de idosos em {state}",
        legend={"orientation": "h", "y": -0.2},
        margin={"l": 40, "r": 40, "t": 50, "b": 30},
    )
    return fig


def breakdown_pie(slices: Sequence[Mapping[str, Any]], title: str, colors: Sequence[str]) -> go.Figure:
    fig = go.Figure(
        go.Pie(
            labels=[item["name"] for item in slices],
            values=[item["value"] for item in slices],
            hole=0.5,
            marker={"colors": [colors[index % len(colors)] for index in range(len(slices))]},
            texttemplate="%{percent:.1%}",
            sort=False,
        )
    )
    fig.update_layout(title=title, margin={"l": 20, "r": 20, "t": 50, "b": 20})
    return fig


def living_pie_chart(slices: Sequence[Mapping[str, Any]], palette: Palette | None = None) -> go.Figure:
    return breakdown_pie(slices, "Arranjos de moradia dos idosos", (palette or Palette()).living)


def dependency_pie_chart(slices: Sequence[Mapping[str, Any]], palette: Palette | None = None) -> go.Figure:
    return breakdown_pie(slices, "Dependência entre idosos", (palette or Palette()).dependency)
