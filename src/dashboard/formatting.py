from __future__ import annotations

from typing import Any

MISSING = "-"


def format_number(value: Any) -> str:
    """Compact population figures: ``34000000`` -> ``"34,0 M"``, ``512300`` -> ``"512 k"``."""
    if value is None or isinstance(value, bool):
        return MISSING
    number = float(value)
    if number >= 1e6:
        return f"{number / 1e6:.1f}".replace(".", ",") + " M"
    if number >= 1e3:
        return f"{number / 1e3:.0f} k"
    if number.is_integer():
        return str(int(number))
    return str(number)


def format_percent(value: Any, digits: int = 1) -> str:
    if value is None or isinstance(value, bool):
        return MISSING
    return f"{float(value):.{digits}f} %"


def format_currency(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return MISSING
    # pt-BR grouping: dot for thousands, comma for decimals.
    formatted = f"{float(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {formatted}"
