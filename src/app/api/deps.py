from __future__ import annotations

from app.dataset import DatasetUnavailableError, ElderlyRecord, load_default_records
from app.logging import get_logger
from app.settings import get_settings


def get_records() -> list[ElderlyRecord]:
    """Load the dataset fresh for the current request."""
    return load_default_records(get_settings())


def get_optional_records() -> list[ElderlyRecord] | None:
    """Like ``get_records`` but yields ``None`` when the dataset cannot be read."""
    try:
        return load_default_records(get_settings())
    except DatasetUnavailableError as exc:
        get_logger("app.api").warning("dataset_fallback", error=str(exc))
        return None
