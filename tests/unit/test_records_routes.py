from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_records
from app.api.main import app
from app.dataset import ElderlyRecord

CAMPINAS = {"uf": "SP", "cidade": "Campinas", "year": 2024, "total_idosos": 8, "total_population": 60, "source": "Censo"}


def _records() -> list[ElderlyRecord]:
    rows = [
        {"sigla": "SP", "name": "São Paulo", "year": 2024, "elder_population": 120, "total_population": 1000},
        {"sigla": "RJ", "name": "Rio de Janeiro", "year": 2024, "elder_population": 50, "total_population": 200},
        {"sigla": "RJ", "name": "Rio de Janeiro", "year": 2023, "elder_population": 40, "total_population": 200},
        {"uf": "SP", "cidade": "São Paulo", "year": 2024, "total_idosos": 30, "total_population": 100},
        CAMPINAS,
    ]
    return [ElderlyRecord.from_raw(row) for row in rows]


@pytest.fixture()
def client() -> Iterator[TestClient]:
    app.dependency_overrides[get_records] = _records
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def test_cities_without_filters_lists_every_record(client: TestClient) -> None:
    response = client.get("/api/cities")

    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is True
    assert payload["count"] == 5
    assert len(payload["items"]) == 5


def test_cities_filters_by_state_and_city(client: TestClient) -> None:
    response = client.get("/api/cities", params={"uf": "sp", "cidade": "campinas"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["count"] == 1
    assert payload["items"] == [CAMPINAS]


def test_cities_returns_rows_as_stored(client: TestClient) -> None:
    response = client.get("/api/cities", params={"cidade": "Campinas"})

    item = response.json()["items"][0]
    assert item == CAMPINAS
    assert "sigla" not in item
    assert "name" not in item
    assert "elder_population" not in item


def test_cities_rejects_invalid_state(client: TestClient) -> None:
    response = client.get("/api/cities?uf=123")

    assert response.status_code == 422


def test_stats_sums_state_rows_of_latest_year(client: TestClient) -> None:
    response = client.get("/api/stats")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "year": 2024, "total": 170}


def test_stats_accepts_explicit_year(client: TestClient) -> None:
    response = client.get("/api/stats?year=2023")

    assert response.json() == {"ok": True, "year": 2023, "total": 40}
