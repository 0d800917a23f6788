"""Dashboard da População Idosa no Brasil.

Run with ``streamlit run src/dashboard/streamlit_app.py`` while the API is
serving on ``DASHBOARD_API_BASE_URL``.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import streamlit as st
from streamlit_folium import st_folium

from app.logging import configure_logging, get_logger
from app.settings import get_settings
from dashboard import aggregator, charts
from dashboard.client import DashboardApiClient, DashboardApiError
from dashboard.config import load_dashboard_config
from dashboard.maps import build_state_map, clicked_state

T = TypeVar("T")

SELECTED_STATE_KEY = "selected_state"
PENDING_STATE_KEY = "pending_state"
PICKER_GENERATION_KEY = "picker_generation"


def _fetch(label: str, loader: Callable[[], T], default: T) -> T:
    try:
        return loader()
    except DashboardApiError as exc:
        get_logger("dashboard.app").warning("dashboard_fetch_failed", endpoint=label, error=str(exc))
        st.warning(f"Não foi possível carregar {label}.")
        return default


def _reset_pickers() -> None:
    # Map and table keep their last click or row across reruns; new keys start them empty.
    st.session_state[PICKER_GENERATION_KEY] = st.session_state.get(PICKER_GENERATION_KEY, 0) + 1


def _select_state(sigla: str) -> None:
    _reset_pickers()
    st.session_state[PENDING_STATE_KEY] = sigla
    st.rerun()


def _render_cards(cards: list[aggregator.SummaryCard]) -> None:
    for column, card in zip(st.columns(len(cards)), cards):
        with column:
            st.metric(card.title, card.value)
            if card.caption:
                st.caption(card.caption)


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    config = load_dashboard_config(settings.state_coords_path)

    st.set_page_config(layout="wide", page_title="Dashboard da População Idosa no Brasil")
    st.title("Dashboard da População Idosa no Brasil")

    client = DashboardApiClient.from_settings(settings)
    try:
        states: list[dict[str, Any]] = _fetch("estados", client.states, [{"sigla": "BR", "name": "Brasil"}])
        living = _fetch("arranjos de moradia", client.living, {})
        dependency = _fetch("dependência", client.dependency, {})
        income = _fetch("renda", client.income, {})
        national_series = _fetch("série nacional", lambda: client.state_series("BR"), {})

        years = aggregator.years_from_series(national_series)
        codes = [state["sigla"] for state in states] or [settings.default_state]
        names = {state["sigla"]: state["name"] for state in states}

        pending = st.session_state.pop(PENDING_STATE_KEY, None)
        if pending in codes:
            st.session_state[SELECTED_STATE_KEY] = pending
        if st.session_state.get(SELECTED_STATE_KEY) not in codes:
            st.session_state[SELECTED_STATE_KEY] = (
                settings.default_state if settings.default_state in codes else codes[0]
            )

        year_column, state_column = st.columns(2)
        with year_column:
            year_options = years or [settings.default_year]
            year = st.selectbox(
                "Ano:",
                year_options,
                index=year_options.index(aggregator.default_year(year_options, settings.default_year)),
                on_change=_reset_pickers,
            )
        with state_column:
            selected_state = st.selectbox(
                "Estado:",
                codes,
                key=SELECTED_STATE_KEY,
                on_change=_reset_pickers,
                format_func=lambda code: f"{code} - {names.get(code, code)}",
            )

        overview = _fetch("visão geral", lambda: client.overview(year), [])
        series = _fetch("série do estado", lambda: client.state_series(selected_state), {})
    finally:
        client.close()

    _render_cards(aggregator.summary_cards(overview, selected_state, income))

    top = aggregator.top_states(overview, settings.top_states_limit)
    points = aggregator.series_points(series)

    left, right = st.columns(2)
    with left:
        st.plotly_chart(charts.top_states_bar(top, config.palette), use_container_width=True)
    with right:
        st.plotly_chart(charts.state_series_line(points, selected_state, config.palette), use_container_width=True)

    left, right = st.columns(2)
    with left:
        st.plotly_chart(
            charts.living_pie_chart(aggregator.living_pie(living), config.palette), use_container_width=True
        )
    with right:
        st.plotly_chart(
            charts.dependency_pie_chart(aggregator.dependency_pie(dependency), config.palette),
            use_container_width=True,
        )

    generation = st.session_state.get(PICKER_GENERATION_KEY, 0)

    st.subheader("Mapa dos estados (clique para selecionar)")
    map_state = st_folium(
        build_state_map(overview, config),
        height=400,
        key=f"state_map_{generation}",
        returned_objects=["last_object_clicked_tooltip"],
    )
    clicked = aggregator.picked_state(clicked_state(map_state), selected_state, codes)
    if clicked:
        _select_state(clicked)

    st.subheader(f"Resumo por estado ({year})")
    table = aggregator.overview_table(overview)
    event = st.dataframe(
        table.drop(columns=["sigla"]),
        key=f"state_table_{generation}",
        hide_index=True,
        use_container_width=True,
        on_select="rerun",
        selection_mode="single-row",
    )
    selected_rows = event.selection.rows if event else []
    if selected_rows:
        row_state = aggregator.picked_state(str(table.iloc[selected_rows[0]]["sigla"]), selected_state, codes)
        if row_state:
            _select_state(row_state)


if __name__ == "__main__":
    main()
