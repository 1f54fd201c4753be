"""Tests for the mapping session workflow."""

import asyncio
import json
from pathlib import Path

import pytest

from csv_mapper.domain.entities import ColumnMapping, MappingResult, MultiMappingResult
from csv_mapper.infrastructure.container import DependencyContainer
from csv_mapper.infrastructure.io.exceptions import (
    DataSourceNotFoundError,
    InvalidParametersError,
    MappingConfigError,
)
from csv_mapper.infrastructure.logging import NullLogger
from csv_mapper.transformations import TransformationKind
from csv_mapper.transformations import presets


class RecordingLogger(NullLogger):
    def __init__(self) -> None:
        self.warnings: list[str] = []

    def warning(self, message: str) -> None:
        self.warnings.append(message)


@pytest.fixture
def session():
    return DependencyContainer(use_null_logger=True).create_mapping_session()


@pytest.fixture
def loaded(session, schema_file: Path, patient_csv: Path):
    session.load_schema(schema_file)
    session.load_csv("PatientStudy", patient_csv)
    return session


class TestTableLifecycle:
    """Tests for opening and removing tables."""

    def test_open_table_requires_schema(self, session):
        with pytest.raises(MappingConfigError, match="No schema loaded"):
            session.open_table("PatientStudy")

    def test_open_table_unknown_csv_type(self, session, schema_file: Path):
        session.load_schema(schema_file)

        with pytest.raises(MappingConfigError, match="Schema has no table"):
            session.open_table("Nope")

    def test_open_table_creates_one_selection_per_column(self, session, schema_file: Path):
        session.load_schema(schema_file)

        table = session.open_table("PatientStudy")

        assert [s.db_column.name for s in table.selections] == [
            "PatientId",
            "FirstName",
            "LastName",
            "BirthDate",
            "Gender",
        ]
        assert session.open_table("PatientStudy") is table

    def test_table_not_open(self, session):
        with pytest.raises(MappingConfigError, match="No open table"):
            session.table("PatientStudy")

    def test_remove_table(self, loaded):
        assert loaded.remove_table("PatientStudy") is True
        assert loaded.remove_table("PatientStudy") is False

    def test_reloading_schema_drops_tables(self, loaded, schema_file: Path):
        loaded.load_schema(schema_file)

        assert loaded.tables == {}

    def test_missing_csv_propagates(self, session, schema_file: Path, tmp_path: Path):
        session.load_schema(schema_file)

        with pytest.raises(DataSourceNotFoundError):
            session.load_csv("PatientStudy", tmp_path / "missing.csv")

        assert session.tables == {}

    def test_unknown_csv_type_is_rejected_before_reading(
        self, session, schema_file: Path, tmp_path: Path
    ):
        session.load_schema(schema_file)

        with pytest.raises(MappingConfigError, match="Schema has no table"):
            session.load_csv("Nope", tmp_path / "missing.csv")
        assert session.tables == {}


class TestMatchingAndValidation:
    """Tests for the match, transform and validate steps."""

    def test_load_csv_samples_columns(self, loaded):
        table = loaded.table("PatientStudy")

        assert table.csv_column_names == ["patient_id", "First Name", "Last-Name", "DOB", "Gender"]
        assert table.csv_path is not None
        assert table.is_valid is False

    def test_auto_match(self, loaded):
        matches = loaded.auto_match("PatientStudy")

        assert matches == {
            "PatientId": "patient_id",
            "FirstName": "First Name",
            "LastName": "Last-Name",
            "Gender": "Gender",
        }
        table = loaded.table("PatientStudy")
        assert table.selection("BirthDate").selected_csv_column is None

    def test_suggest_ranks_csv_columns(self, loaded):
        loaded.auto_match("PatientStudy")

        suggestions = loaded.suggest("PatientStudy", "Gender")

        assert suggestions[0].csv_column == "Gender"
        assert suggestions[0].score == 1.0
        assert all(s.db_column == "Gender" for s in suggestions)

    def test_gender_too_long_without_transformation(self, loaded):
        loaded.auto_match("PatientStudy")

        report = loaded.validate("PatientStudy")

        assert report.errors == {"Gender": "Value length 4 exceeds the maximum length of 1."}
        assert loaded.table("PatientStudy").is_valid is False

    def test_category_mapping_fixes_gender(self, loaded):
        loaded.auto_match("PatientStudy")

        derived = loaded.attach_transformation(
            "PatientStudy",
            "Gender",
            TransformationKind.CATEGORY_MAPPING,
            presets.standard_gender(),
        )
        report = loaded.validate("PatientStudy")

        assert derived.sample_values == ("M", "F", "F")
        assert derived.source_column_name == "Gender"
        assert report.is_valid
        assert loaded.table("PatientStudy").is_valid is True
        assert loaded.table("PatientStudy").derived_columns["Gender"] is derived

    def test_select_unmapped_required_column(self, loaded):
        loaded.auto_match("PatientStudy")
        loaded.select("PatientStudy", "PatientId", None)

        report = loaded.validate("PatientStudy")

        assert report.errors["PatientId"] == "This database column must be mapped to a CSV column."

    def test_selecting_another_source_clears_transformation(self, loaded):
        loaded.auto_match("PatientStudy")
        loaded.attach_transformation(
            "PatientStudy", "Gender", TransformationKind.CATEGORY_MAPPING, presets.standard_gender()
        )

        selection = loaded.select("PatientStudy", "Gender", "First Name")

        assert selection.transformation_kind is None
        assert "Gender" not in loaded.table("PatientStudy").derived_columns

    def test_select_unknown_db_column(self, loaded):
        with pytest.raises(MappingConfigError, match="has no column 'Nope'"):
            loaded.select("PatientStudy", "Nope", "Gender")

    def test_attach_requires_source(self, loaded):
        with pytest.raises(MappingConfigError, match="Select a CSV column"):
            loaded.attach_transformation(
                "PatientStudy", "Gender", TransformationKind.CATEGORY_MAPPING, {}
            )

    def test_attach_rejects_bad_parameters(self, loaded):
        loaded.auto_match("PatientStudy")

        with pytest.raises(InvalidParametersError):
            loaded.attach_transformation(
                "PatientStudy", "Gender", TransformationKind.CATEGORY_MAPPING, {"Mappings": "nope"}
            )

    def test_clear_transformation(self, loaded):
        loaded.auto_match("PatientStudy")
        loaded.attach_transformation(
            "PatientStudy", "Gender", TransformationKind.CATEGORY_MAPPING, presets.standard_gender()
        )

        loaded.clear_transformation("PatientStudy", "Gender")

        selection = loaded.table("PatientStudy").selection("Gender")
        assert selection.has_transformation is False
        assert selection.selected_csv_column == "Gender"


class TestPersistence:
    """Tests for saving and re-applying mappings."""

    def _valid_patient_session(self, loaded):
        loaded.auto_match("PatientStudy")
        loaded.select("PatientStudy", "BirthDate", "DOB")
        loaded.attach_transformation(
            "PatientStudy", "Gender", TransformationKind.CATEGORY_MAPPING, presets.standard_gender()
        )
        return loaded

    def test_build_result(self, loaded):
        session = self._valid_patient_session(loaded)

        result = session.build_result()

        patients = result.for_csv_type("PatientStudy")
        assert patients.table_name == "Patients"
        assert [m.db_column for m in patients.column_mappings] == [
            "PatientId",
            "FirstName",
            "LastName",
            "BirthDate",
            "Gender",
        ]
        gender = patients.mapping_for("Gender")
        assert gender.is_derived_column is True
        assert gender.source_column_name == "Gender"
        assert gender.transformation_type is TransformationKind.CATEGORY_MAPPING

    def test_build_result_keeps_saved_tables_not_open(self, loaded):
        loaded.saved = MultiMappingResult(
            mappings=[
                MappingResult(table_name="Series", csv_type="SeriesInstance"),
                MappingResult(table_name="Old", csv_type="PatientStudy"),
            ]
        )

        result = loaded.build_result()

        assert sorted(result.csv_types) == ["PatientStudy", "SeriesInstance"]
        assert result.for_csv_type("PatientStudy").table_name == "Patients"

    def test_save_and_reapply(self, loaded, schema_file: Path, patient_csv: Path, tmp_path: Path):
        target = tmp_path / "out" / "mappings.json"
        self._valid_patient_session(loaded)

        assert loaded.save(target) is True
        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["mappings"][0]["csvType"] == "PatientStudy"

        fresh = DependencyContainer(use_null_logger=True).create_mapping_session()
        fresh.load_schema(schema_file)
        fresh.load_csv("PatientStudy", patient_csv)
        fresh.load_saved(target)

        assert fresh.apply_saved("PatientStudy") == 5
        gender = fresh.table("PatientStudy").selection("Gender")
        assert gender.transformation_kind is TransformationKind.CATEGORY_MAPPING
        assert gender.transformed_samples == ["M", "F", "F"]
        assert fresh.validate("PatientStudy").is_valid

    def test_save_defaults_to_configured_file(self, loaded, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert loaded.save() is True
        assert (tmp_path / "mappings.json").exists()

    def test_apply_saved_drops_stale_entries(self, loaded):
        loaded.saved = MultiMappingResult(
            mappings=[
                MappingResult(
                    table_name="Patients",
                    csv_type="PatientStudy",
                    column_mappings=[
                        ColumnMapping.direct("patient_id", "PatientId"),
                        ColumnMapping.direct("patient_id", "RemovedColumn"),
                        ColumnMapping.direct("gone", "FirstName"),
                    ],
                )
            ]
        )

        assert loaded.apply_saved("PatientStudy") == 1
        table = loaded.table("PatientStudy")
        assert table.selection("PatientId").selected_csv_column == "patient_id"
        assert table.selection("FirstName").selected_csv_column is None

    def test_apply_saved_without_entry(self, loaded):
        assert loaded.apply_saved("PatientStudy") == 0

    def test_failed_transformation_keeps_plain_mapping(
        self, schema_file: Path, patient_csv: Path
    ):
        logger = RecordingLogger()
        container = DependencyContainer(use_null_logger=True)
        container._logger_instance = logger
        session = container.create_mapping_session()
        session.load_schema(schema_file)
        session.load_csv("PatientStudy", patient_csv)
        session.saved = MultiMappingResult(
            mappings=[
                MappingResult(
                    table_name="Patients",
                    csv_type="PatientStudy",
                    column_mappings=[
                        ColumnMapping.derived(
                            "Gender",
                            "Gender",
                            "Gender",
                            TransformationKind.CATEGORY_MAPPING,
                            {"Mappings": "nope"},
                        )
                    ],
                )
            ]
        )

        assert session.apply_saved("PatientStudy") == 1
        selection = session.table("PatientStudy").selection("Gender")
        assert selection.selected_csv_column == "Gender"
        assert selection.transformation_kind is None
        assert "Could not re-apply transformation for Gender" in logger.warnings[0]


class TestAsyncOperations:
    """Tests for the awaitable file operations."""

    def test_async_round_trip(self, session, schema_file: Path, patient_csv: Path, tmp_path: Path):
        async def run() -> bool:
            await session.load_schema_async(schema_file)
            columns = await session.load_csv_async("PatientStudy", patient_csv)
            assert len(columns) == 5
            session.auto_match("PatientStudy")
            return await session.save_async(tmp_path / "async.json")

        assert asyncio.run(run()) is True
        assert session.saved.for_csv_type("PatientStudy") is not None
        assert (tmp_path / "async.json").exists()
