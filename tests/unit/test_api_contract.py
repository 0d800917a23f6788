from __future__ import annotations

import json
from pathlib import Path

import structlog
from fastapi.testclient import TestClient

from app.api import error_handlers
from app.api import main as api_main
from app.api.deps import get_records
from app.api.main import app
from app.dataset import ElderlyRecord
from app.settings import get_settings


def test_health_reports_dataset_status(monkeypatch) -> None:
    monkeypatch.setattr(api_main, "dataset_available", lambda: False)
    client = TestClient(app)

    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "dataset": False}


def test_request_id_is_propagated() -> None:
    client = TestClient(app)

    response = client.get("/api/health", headers={"x-request-id": "req-abc"})

    assert response.headers["x-request-id"] == "req-abc"


def test_request_id_is_generated_when_missing() -> None:
    client = TestClient(app)

    response = client.get("/api/health")

    assert response.headers.get("x-request-id")


def test_unknown_route_returns_error_envelope() -> None:
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/unknown")

    assert response.status_code == 404
    payload = response.json()
    assert payload["ok"] is False
    assert payload["error"]["code"] == "http_error"


def test_unexpected_failure_returns_internal_error_envelope() -> None:
    def _explode() -> list[ElderlyRecord]:
        raise RuntimeError("forced-unexpected-error")

    app.dependency_overrides[get_records] = _explode
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/stats")

    assert response.status_code == 500
    payload = response.json()
    assert payload["error"]["code"] == "internal_error"
    assert payload["error"]["details"] == {"detail": "forced-unexpected-error"}
    app.dependency_overrides.clear()


class _RecordingLogger:
    def __init__(self, events: list[tuple[str, dict]]) -> None:
        self.events = events

    def _record(self, event: str, **_: object) -> None:
        self.events.append((event, structlog.contextvars.get_contextvars()))

    info = warning = error = exception = _record


def test_unexpected_failure_is_logged_with_request_context(monkeypatch) -> None:
    events: list[tuple[str, dict]] = []
    monkeypatch.setattr(api_main, "get_logger", lambda name: _RecordingLogger(events))
    monkeypatch.setattr(error_handlers, "get_logger", lambda name: _RecordingLogger(events))

    def _explode() -> list[ElderlyRecord]:
        raise RuntimeError("forced-unexpected-error")

    app.dependency_overrides[get_records] = _explode
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/stats", headers={"x-request-id": "req-500"})
    app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.headers["x-request-id"] == "req-500"
    assert [event for event, _ in events] == ["unhandled_exception", "request_completed"]
    for _, context in events:
        assert context["request_id"] == "req-500"
        assert context["path"] == "/api/stats"


def test_routes_read_dataset_fresh_on_every_request(monkeypatch, tmp_path: Path) -> None:
    dataset = tmp_path / "elderly_data.json"
    dataset.write_text(
        json.dumps([{"sigla": "SP", "year": 2024, "elder_population": 1, "total_population": 10}]),
        encoding="utf-8",
    )
    monkeypatch.setenv("DATA_ROOT", str(tmp_path))
    monkeypatch.setenv("DATASET_FILENAME", "elderly_data.json")
    get_settings.cache_clear()
    try:
        client = TestClient(app)
        first = client.get("/api/elderly?state=SP").json()

        dataset.write_text(
            json.dumps([{"sigla": "SP", "year": 2024, "elder_population": 5, "total_population": 10}]),
            encoding="utf-8",
        )
        second = client.get("/api/elderly?state=SP").json()
    finally:
        get_settings.cache_clear()

    assert first["2024"]["elder_percentage"] == 10.0
    assert second["2024"]["elder_percentage"] == 50.0
