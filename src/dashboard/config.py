"""Map and chart configuration for the dashboard.

State-capital coordinates and the chart palette live in
``configs/state_coords.yml``; built-in defaults apply when the file is absent.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import yaml

_DEFAULT_COORDINATES: dict[str, tuple[float, float]] = {
    "BR": (-15.78, -47.93),
    "RO": (-8.76, -63.90),
    "AC": (-9.97, -67.80),
    "AM": (-3.12, -60.02),
    "RR": (2.82, -60.67),
    "PA": (-1.45, -48.50),
    "AP": (1.41, -51.77),
    "TO": (-10.25, -48.36),
    "MA": (-2.53, -44.30),
    "PI": (-5.09, -42.80),
    "CE": (-3.72, -38.54),
    "RN": (-5.81, -35.21),
    "PB": (-7.12, -34.88),
    "PE": (-8.05, -34.88),
    "AL": (-9.64, -35.73),
    "SE": (-10.95, -37.07),
    "BA": (-12.97, -38.50),
    "MG": (-19.92, -43.94),
    "ES": (-20.31, -40.31),
    "RJ": (-22.91, -43.17),
    "SP": (-23.55, -46.64),
    "PR": (-25.43, -49.27),
    "SC": (-27.59, -48.55),
    "RS": (-30.03, -51.23),
    "MS": (-20.47, -54.62),
    "MT": (-15.61, -56.10),
    "GO": (-16.68, -49.25),
    "DF": (-15.78, -47.93),
}


@dataclass(frozen=True)
class MapConfig:
    center: tuple[float, float] = (-15.8, -47.9)
    zoom: int = 4
    tiles: str = "OpenStreetMap"
    marker_color: str = "#4f46e5"


@dataclass(frozen=True)
class Palette:
    bar: str = "#6366f1"
    elderly: str = "#4f46e5"
    total: str = "#60a5fa"
    percentage: str = "#a855f7"
    living: tuple[str, ...] = ("#6366f1", "#60a5fa", "#a855f7")
    dependency: tuple[str, ...] = ("#34d399", "#f87171")


@dataclass(frozen=True)
class DashboardConfig:
    map: MapConfig = field(default_factory=MapConfig)
    palette: Palette = field(default_factory=Palette)
    coordinates: dict[str, tuple[float, float]] = field(default_factory=lambda: dict(_DEFAULT_COORDINATES))

    def coordinates_for(self, sigla: str) -> tuple[float, float] | None:
        return self.coordinates.get(sigla.upper())


def _pair(value: object, fallback: tuple[float, float]) -> tuple[float, float]:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return float(value[0]), float(value[1])
    return fallback


@lru_cache(maxsize=4)
def load_dashboard_config(path: Path | str = "configs/state_coords.yml") -> DashboardConfig:
    """Load the dashboard config from YAML (cached after first call)."""
    file_path = Path(path)
    if not file_path.exists():
        return DashboardConfig()

    payload = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}

    map_raw = payload.get("map", {}) or {}
    defaults = MapConfig()
    map_config = MapConfig(
        center=_pair(map_raw.get("center"), defaults.center),
        zoom=int(map_raw.get("zoom", defaults.zoom)),
        tiles=str(map_raw.get("tiles", defaults.tiles)),
        marker_color=str(map_raw.get("marker_color", defaults.marker_color)),
    )

    palette_raw = payload.get("palette", {}) or {}
    base = Palette()
    palette = Palette(
        bar=str(palette_raw.get("bar", base.bar)),
        elderly=str(palette_raw.get("elderly", base.elderly)),
        total=str(palette_raw.get("total", base.total)),
        percentage=str(palette_raw.get("percentage", base.percentage)),
        living=tuple(str(color) for color in palette_raw.get("living", base.living)),
        dependency=tuple(str(color) for color in palette_raw.get("dependency", base.dependency)),
    )

    coordinates = dict(_DEFAULT_COORDINATES)
    for sigla, pair in (payload.get("coordinates", {}) or {}).items():
        code = str(sigla).upper()
        coordinates[code] = _pair(pair, coordinates.get(code, defaults.center))

    return DashboardConfig(map=map_config, palette=palette, coordinates=coordinates)
