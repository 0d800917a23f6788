from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from dashboard.config import DashboardConfig, load_dashboard_config


@pytest.fixture(autouse=True)
def _clear_config_cache():
    load_dashboard_config.cache_clear()
    yield
    load_dashboard_config.cache_clear()


def test_missing_file_returns_defaults(tmp_path: Path) -> None:
    config = load_dashboard_config(tmp_path / "absent.yml")

    assert config == DashboardConfig()
    assert config.coordinates_for("sp") == (-23.55, -46.64)
    assert config.coordinates_for("XX") is None


def test_yaml_overrides_map_palette_and_coordinates(tmp_path: Path) -> None:
    path = tmp_path / "state_coords.yml"
    path.write_text(
        textwrap.dedent(
            """\
            map:
              center: [-10, -50]
              zoom: 5
              marker_color: "#000000"
            palette:
              bar: "#111111"
              dependency: ["#222222", "#333333"]
            coordinates:
              sp: [-23.0, -46.0]
              XX: [1, 2]
            """
        ),
        encoding="utf-8",
    )

    config = load_dashboard_config(path)

    assert config.map.center == (-10.0, -50.0)
    assert config.map.zoom == 5
    assert config.map.tiles == "OpenStreetMap"
    assert config.map.marker_color == "#000000"
    assert config.palette.bar == "#111111"
    assert config.palette.dependency == ("#222222", "#333333")
    assert config.palette.total == "#60a5fa"
    assert config.coordinates_for("SP") == (-23.0, -46.0)
    assert config.coordinates_for("XX") == (1.0, 2.0)
    assert config.coordinates_for("RS") == (-30.03, -51.23)


def test_bundled_config_covers_every_state() -> None:
    path = Path(__file__).resolve().parents[2] / "configs" / "state_coords.yml"

    config = load_dashboard_config(path)

    assert len(config.coordinates) == 28
    assert config.coordinates_for("BR") == (-15.78, -47.93)
