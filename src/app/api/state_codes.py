from __future__ import annotations

from fastapi import HTTPException

from app.dataset import NATIONAL_CODE


def normalize_uf(uf: str | None) -> str | None:
    if uf is None:
        return None
    value = uf.strip().upper()
    if not value:
        return None
    if len(value) != 2 or not value.isascii() or not value.isalpha():
        raise HTTPException(
            status_code=422,
            detail=f"Invalid state code '{uf}'. Expected a two-letter UF such as 'SP' or '{NATIONAL_CODE}'.",
        )
    return value


def require_uf(uf: str | None) -> str:
    value = normalize_uf(uf)
    if value is None:
        raise HTTPException(status_code=400, detail="Provide a state code (UF).")
    return value
