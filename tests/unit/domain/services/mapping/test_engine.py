"""Unit tests for MappingEngine."""

import pytest

from csv_mapper.domain.entities import ColumnSelection, CsvColumn, DatabaseColumn, DerivedColumn
from csv_mapper.domain.services.mapping.engine import MappingEngine
from csv_mapper.domain.services.type_inference import TypeTag
from csv_mapper.infrastructure.io.exceptions import (
    InvalidParametersError,
    UnsupportedTransformationError,
)
from csv_mapper.transformations import TransformationKind, TransformationLibrary


def _csv(*names: str) -> list[CsvColumn]:
    return [CsvColumn(name, index) for index, name in enumerate(names)]


def _db(*names: str) -> list[DatabaseColumn]:
    return [DatabaseColumn(name=name) for name in names]


@pytest.fixture
def engine() -> MappingEngine:
    return MappingEngine(TransformationLibrary())


class TestAutoMatch:
    """Tests for name-based auto matching."""

    def test_exact_case_insensitive(self, engine):
        assert engine.auto_match(_csv("patientid"), _db("PatientId")) == {
            "PatientId": "patientid"
        }

    def test_normalized_names(self, engine):
        matches = engine.auto_match(
            _csv("patient_id", "First Name", "Last-Name"),
            _db("PatientId", "FirstName", "LastName"),
        )
        assert matches == {
            "PatientId": "patient_id",
            "FirstName": "First Name",
            "LastName": "Last-Name",
        }

    def test_substring_either_way(self, engine):
        matches = engine.auto_match(_csv("PatientGender", "Age"), _db("Gender", "AgeYears"))
        assert matches == {"Gender": "PatientGender", "AgeYears": "Age"}

    def test_exact_beats_earlier_substring(self, engine):
        matches = engine.auto_match(_csv("GenderCode", "gender"), _db("Gender"))
        assert matches == {"Gender": "gender"}

    def test_first_csv_column_wins(self, engine):
        matches = engine.auto_match(_csv("HomeCity", "WorkCity"), _db("City"))
        assert matches == {"City": "HomeCity"}

    def test_unmatched_columns_are_absent(self, engine):
        matches = engine.auto_match(
            _csv("FirstName", "LastName", "DOB"), _db("PatientName", "BirthDate")
        )
        assert matches == {}

    def test_idempotent(self, engine):
        csv = _csv("patient_id", "Gender", "DOB")
        db = _db("PatientId", "Gender", "BirthDate")
        assert engine.auto_match(csv, db) == engine.auto_match(csv, db)


class TestSuggest:
    """Tests for fuzzy, advisory suggestions."""

    def test_ranks_best_candidate_first(self, engine):
        suggestions = engine.suggest(
            _csv("Gender", "patient_id", "Notes"), DatabaseColumn(name="PatientId")
        )

        assert suggestions
        assert suggestions[0].csv_column == "patient_id"
        assert suggestions[0].score == pytest.approx(1.0)
        assert all(s.db_column == "PatientId" for s in suggestions)

    def test_threshold_and_limit(self, engine):
        csv = _csv("Name1", "Name2", "Name3", "Name4", "Zzz")

        suggestions = engine.suggest(csv, DatabaseColumn(name="Name"), limit=2)

        assert len(suggestions) == 2
        assert all(s.score >= engine.min_score for s in suggestions)
        assert "Zzz" not in [s.csv_column for s in suggestions]

    def test_min_score_override(self, engine):
        suggestions = engine.suggest(
            _csv("Gender"), DatabaseColumn(name="PatientId"), min_score=1.0
        )
        assert suggestions == []

    def test_does_not_change_auto_match(self, engine):
        csv = _csv("PatntId")
        assert engine.suggest(csv, DatabaseColumn(name="PatientId"))
        assert engine.auto_match(csv, _db("PatientId")) == {}


class TestDerivedColumns:
    """Tests for derived column creation."""

    def test_create_derived_column(self, engine):
        source = CsvColumn.from_samples("PhysicianName", 3, ["Smith, John A", "Doe, Jane"])

        derived = engine.create_derived_column(
            source,
            "PhysicianLastName",
            TransformationKind.SPLIT_FIRST_TOKEN,
            {"Delimiter": ", "},
        )

        assert isinstance(derived, DerivedColumn)
        assert derived.is_virtual
        assert derived.name == "PhysicianLastName"
        assert derived.index == 3
        assert derived.sample_values == ("Smith", "Doe")
        assert derived.source_column_name == "PhysicianName"
        assert derived.transformation_parameters == {"Delimiter": ", "}
        assert source.sample_values == ("Smith, John A", "Doe, Jane")

    def test_type_is_reinferred(self, engine):
        source = CsvColumn.from_samples("DOB", 0, ["01/31/1980", "1975-06-15"])
        assert source.inferred_type is TypeTag.DATETIME

        derived = engine.create_derived_column(
            source, "BirthYear", TransformationKind.DATE_FORMAT, {"TargetFormat": "yyyy"}
        )

        assert derived.sample_values == ("1980", "1975")
        assert derived.inferred_type is TypeTag.INT

    def test_invalid_parameters(self, engine):
        source = CsvColumn.from_samples("DOB", 0, ["01/31/1980"])

        with pytest.raises(InvalidParametersError):
            engine.create_derived_column(
                source, "BirthYear", TransformationKind.DATE_FORMAT, {"TargetFormat": "Q"}
            )

    def test_unsupported_kind(self, engine):
        source = CsvColumn.from_samples("Code", 0, ["A1"])

        with pytest.raises(UnsupportedTransformationError):
            engine.create_derived_column(source, "X", TransformationKind.REGEX_EXTRACT, {})

    def test_apply_transformation_keeps_name(self, engine):
        source = CsvColumn.from_samples("Gender", 1, ["Male"])

        derived = engine.apply_transformation(
            source,
            TransformationKind.CATEGORY_MAPPING,
            {"Mappings": {"Male": "M"}},
        )

        assert derived.name == "Gender"
        assert derived.sample_values == ("M",)


class TestEngineValidation:
    """Tests for the validation entry points on the engine."""

    def test_uses_engine_default_max_length(self):
        engine = MappingEngine(TransformationLibrary(), default_max_length=3)
        csv = [CsvColumn.from_samples("Notes", 0, ["abcd"])]
        db = [DatabaseColumn(name="Notes")]
        selections = [ColumnSelection(db[0], selected_csv_column="Notes")]

        errors = engine.validate_mappings(selections, csv, db)

        assert "Notes" in errors
        assert "exceeds" in errors["Notes"]

    def test_report_carries_warnings(self, engine):
        csv = [CsvColumn.from_samples("FullName", 0, ["John Smith"])]
        db = [DatabaseColumn(name="FirstName"), DatabaseColumn(name="LastName")]
        selections = [ColumnSelection(column, selected_csv_column="FullName") for column in db]

        report = engine.build_validation_report(selections, csv, db)

        assert report.is_valid
        assert set(report.warnings) == {"FirstName", "LastName"}

    def test_available_transformations_filters_unsupported(self, engine):
        column = DatabaseColumn(name="Gender")
        assert engine.can_transform(column)
        assert engine.available_transformations(column) == [
            TransformationKind.CATEGORY_MAPPING
        ]

        bare = MappingEngine(TransformationLibrary([]))
        assert bare.available_transformations(column) == []
