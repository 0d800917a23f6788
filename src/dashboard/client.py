from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import httpx

from app.logging import get_logger
from app.settings import Settings


class DashboardApiError(RuntimeError):
    """Raised when an endpoint cannot be reached or answers with an error."""


@dataclass(frozen=True)
class ApiClientConfig:
    base_url: str
    timeout_seconds: int
    max_retries: int
    backoff_seconds: float


class DashboardApiClient:
    def __init__(self, config: ApiClientConfig, transport: httpx.BaseTransport | None = None):
        self.config = config
        self.client = httpx.Client(
            base_url=config.base_url.rstrip("/"),
            timeout=config.timeout_seconds,
            follow_redirects=True,
            trust_env=False,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        base_url: str | None = None,
        max_retries: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> "DashboardApiClient":
        config = ApiClientConfig(
            base_url=base_url or settings.dashboard_api_base_url,
            timeout_seconds=settings.request_timeout_seconds,
            max_retries=max_retries if max_retries is not None else settings.http_max_retries,
            backoff_seconds=settings.http_backoff_seconds,
        )
        return cls(config, transport=transport)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "DashboardApiClient":
        return self

    def __exit__(self, *_exc: Any) -> None:
        self.close()

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        logger = get_logger("dashboard.client")
        last_error: Exception | None = None
        for attempt in range(self.config.max_retries + 1):
            try:
                response = self.client.get(path, params=params)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as exc:
                last_error = exc
                # Client errors will not change on retry.
                if exc.response.status_code < 500:
                    break
            except (httpx.RequestError, ValueError) as exc:
                last_error = exc
            if attempt >= self.config.max_retries:
                break
            logger.warning("api_request_retry", path=path, attempt=attempt + 1, error=str(last_error))
            time.sleep(self.config.backoff_seconds * (2**attempt))
        raise DashboardApiError(f"Request failed for {path}") from last_error

    def states(self) -> list[dict[str, Any]]:
        return self.get_json("/states")

    def state_series(self, uf: str) -> dict[str, dict[str, Any]]:
        return self.get_json("/elderly", params={"state": uf})

    def overview(self, year: str | int) -> list[dict[str, Any]]:
        return self.get_json("/elderly", params={"year": year})

    def projections(self, uf: str) -> dict[str, dict[str, Any]]:
        return self.get_json(f"/projections/{uf}")

    def living(self) -> dict[str, Any]:
        return self.get_json("/living")

    def dependency(self) -> dict[str, Any]:
        return self.get_json("/dependency")

    def income(self) -> dict[str, Any]:
        return self.get_json("/income")
