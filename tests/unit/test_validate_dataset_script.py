from __future__ import annotations

import json
from pathlib import Path

from scripts import validate_dataset


def test_main_returns_zero_for_clean_dataset(tmp_path: Path, capsys) -> None:
    path = tmp_path / "elderly.json"
    path.write_text(
        json.dumps(
            [
                {"sigla": "SP", "name": "São Paulo", "year": 2024, "elder_population": 8, "total_population": 46},
                {"sigla": "RJ", "name": "Rio de Janeiro", "year": 2023, "elder_population": 3, "total_population": 17},
            ]
        ),
        encoding="utf-8",
    )

    exit_code = validate_dataset.main(["--path", str(path), "--output-json"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Dataset validation: 2 records, 2 states, 2023-2024, 0 issues." in captured.out
    assert '"valid": true' in captured.out


def test_main_returns_one_when_rows_are_inconsistent(tmp_path: Path, capsys) -> None:
    path = tmp_path / "elderly.json"
    path.write_text(
        json.dumps(
            [
                {"sigla": "SP", "year": 2024, "elder_population": 80, "total_population": 46},
                {"name": "Sem sigla", "elder_population": 1, "total_population": 2},
            ]
        ),
        encoding="utf-8",
    )

    exit_code = validate_dataset.main(["--path", str(path), "--output-json"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "3 issues" in captured.out
    assert "elder_exceeds_total" in captured.out
    assert "missing_state_code" in captured.out


def test_main_reports_unreadable_dataset(tmp_path: Path, capsys) -> None:
    exit_code = validate_dataset.main(["--path", str(tmp_path / "missing.json")])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "Dataset validation failed" in captured.out
