"""Static elderly-population dataset loader.

The dataset is a JSON array of per-state/per-year records. It is read from
disk on every call; nothing is cached between requests.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError, field_validator, model_validator

from app.logging import get_logger
from app.settings import Settings, get_settings

NATIONAL_CODE = "BR"
NATIONAL_NAME = "Brasil"


class DatasetUnavailableError(RuntimeError):
    """Raised when the dataset file is missing or cannot be parsed."""


def to_number(value: Any) -> int | float:
    """Coerce a raw JSON value to a number, using 0 for anything unusable."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    if number.is_integer():
        return int(number)
    return number


def _to_year(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number) or not number.is_integer():
        return None
    return int(number)


class ElderlyRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    sigla: str = ""
    name: str = ""
    year: int | None = None
    elder_population: int | float = 0
    total_population: int | float = 0
    cidade: str | None = None
    total_idosos: int | float | None = None
    living: dict[str, Any] | None = None
    dependency: dict[str, Any] | None = None
    income: dict[str, Any] | None = None

    _raw: dict[str, Any] | None = PrivateAttr(default=None)

    @classmethod
    def from_raw(cls, entry: dict[str, Any]) -> ElderlyRecord:
        """Validate a dataset row and remember the row exactly as it was read."""
        record = cls.model_validate(entry)
        record._raw = dict(entry)
        return record

    @model_validator(mode="before")
    @classmethod
    def _resolve_state_code(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        payload = dict(data)
        code = str(payload.get("sigla") or payload.get("uf") or "").strip().upper()
        payload["sigla"] = code
        payload["name"] = str(payload.get("name") or code)
        return payload

    @field_validator("year", mode="before")
    @classmethod
    def _coerce_year(cls, value: Any) -> int | None:
        return _to_year(value)

    @field_validator("elder_population", "total_population", mode="before")
    @classmethod
    def _coerce_population(cls, value: Any) -> int | float:
        return to_number(value)

    @field_validator("total_idosos", mode="before")
    @classmethod
    def _coerce_optional_count(cls, value: Any) -> int | float | None:
        if value is None:
            return None
        return to_number(value)

    @field_validator("cidade", mode="before")
    @classmethod
    def _coerce_city(cls, value: Any) -> str | None:
        if value is None:
            return None
        return str(value)

    @field_validator("living", "dependency", "income", mode="before")
    @classmethod
    def _keep_objects_only(cls, value: Any) -> dict[str, Any] | None:
        return value if isinstance(value, dict) else None

    @property
    def is_national(self) -> bool:
        return self.sigla == NATIONAL_CODE

    @property
    def elder_count(self) -> int | float:
        if self.total_idosos is not None:
            return self.total_idosos
        return self.elder_population

    @property
    def raw(self) -> dict[str, Any]:
        if self._raw is not None:
            return dict(self._raw)
        return self.model_dump(exclude_none=True)


def load_records(path: Path | str) -> list[ElderlyRecord]:
    logger = get_logger("app.dataset")
    file_path = Path(path)
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise DatasetUnavailableError(f"Dataset file not found: {file_path}") from exc
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DatasetUnavailableError(f"Dataset file could not be read: {file_path}") from exc

    if payload is None:
        payload = []
    if not isinstance(payload, list):
        raise DatasetUnavailableError(
            f"Dataset must be a JSON array, got {type(payload).__name__}: {file_path}"
        )

    records: list[ElderlyRecord] = []
    skipped = 0
    for entry in payload:
        if not isinstance(entry, dict):
            skipped += 1
            continue
        try:
            records.append(ElderlyRecord.from_raw(entry))
        except ValidationError:
            skipped += 1

    if skipped:
        logger.warning("dataset_entries_skipped", path=str(file_path), skipped=skipped)
    logger.debug("dataset_loaded", path=str(file_path), records=len(records))
    return records


def load_default_records(settings: Settings | None = None) -> list[ElderlyRecord]:
    resolved = settings or get_settings()
    return load_records(resolved.dataset_path)


def dataset_available(settings: Settings | None = None) -> bool:
    try:
        load_default_records(settings)
    except DatasetUnavailableError:
        return False
    return True
