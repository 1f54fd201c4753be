from __future__ import annotations

import json
import os
from collections.abc import Callable
from pathlib import Path

import pytest

PATIENT_SCHEMA: dict[str, object] = {
    "databaseName": "Staging",
    "tables": [
        {
            "tableName": "Patients",
            "csvType": "PatientStudy",
            "columns": [
                {"name": "PatientId", "dataType": "string", "isRequired": True, "maxLength": 20},
                {"name": "FirstName", "dataType": "string", "isRequired": True, "maxLength": 50},
                {"name": "LastName", "dataType": "string", "isRequired": True, "maxLength": 50},
                {"name": "BirthDate", "dataType": "datetime", "isRequired": False},
                {"name": "Gender", "dataType": "string", "isRequired": False, "maxLength": 1},
            ],
        },
        {
            "tableName": "Series",
            "csvType": "SeriesInstance",
            "columns": [
                {"name": "SeriesUid", "dataType": "string", "isRequired": True},
                {"name": "InstanceCount", "dataType": "int", "isRequired": False},
            ],
        },
    ],
}

PATIENT_CSV = (
    "patient_id,First Name,Last-Name,DOB,Gender\n"
    "P001,John,Smith,01/31/1980,Male\n"
    "P002,Jane,Doe,1975-06-15,female\n"
    "P003,Alex,Taylor,12/01/1990,F\n"
)


@pytest.fixture(autouse=True)
def _isolate_mapper_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CSV_MAPPER_* settings from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("CSV_MAPPER_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(text: str, name: str = "data.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def patient_csv(write_csv: Callable[[str, str], Path]) -> Path:
    return write_csv(PATIENT_CSV, "patients.csv")


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(PATIENT_SCHEMA, indent=2), encoding="utf-8")
    return path
