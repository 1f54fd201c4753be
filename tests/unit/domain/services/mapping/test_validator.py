"""Unit tests for mapping validation."""

import pytest

from csv_mapper.constants import Sentinels
from csv_mapper.domain.entities import ColumnSelection, CsvColumn, DatabaseColumn
from csv_mapper.domain.services.mapping.validator import (
    ValidationReport,
    build_validation_report,
    is_type_compatible,
    validate_mappings,
)
from csv_mapper.transformations import TransformationKind, TransformationLibrary


def _column(name: str, *samples: str, index: int = 0) -> CsvColumn:
    return CsvColumn.from_samples(name, index, samples)


def _select(db: DatabaseColumn, csv_name: str | None = None, **kwargs) -> ColumnSelection:
    return ColumnSelection(db, selected_csv_column=csv_name, **kwargs)


class TestTypeCompatibility:
    """Tests for the source/target type table."""

    @pytest.mark.parametrize(
        ("source", "target"),
        [
            ("int", "string"),
            ("datetime", "string"),
            ("int", "int"),
            ("int", "decimal"),
            ("decimal", "double"),
            ("int", "float"),
            ("datetime", "datetime"),
            ("string", "datetime"),
            ("int", "bool"),
            ("int", "Boolean"),
            ("custom", "custom"),
        ],
    )
    def test_compatible(self, source, target):
        assert is_type_compatible(source, target)

    @pytest.mark.parametrize(
        ("source", "target"),
        [
            ("decimal", "int"),
            ("string", "int"),
            ("datetime", "decimal"),
            ("int", "datetime"),
            ("string", "bool"),
            ("string", "custom"),
        ],
    )
    def test_incompatible(self, source, target):
        assert not is_type_compatible(source, target)


class TestValidateMappings:
    """Tests for validate_mappings rules."""

    def test_patient_name_and_birth_date_unmapped(self):
        """Required columns without a source are reported, nothing is thrown."""
        csv = [_column("FirstName", "John"), _column("LastName", "Smith"), _column("DOB", "1980-01-31")]
        db = [
            DatabaseColumn(name="PatientName", dataType="string", isRequired=True),
            DatabaseColumn(name="BirthDate", dataType="datetime", isRequired=True),
        ]
        selections = [_select(column) for column in db]

        errors = validate_mappings(selections, csv, db)

        assert set(errors) == {"PatientName", "BirthDate"}
        assert all("must be mapped" in message for message in errors.values())

    def test_full_name_duplicate_is_a_warning(self):
        """FullName contains "name", so sharing it is only a warning."""
        csv = [_column("FullName", "John Smith")]
        db = [
            DatabaseColumn(name="FirstName", dataType="string", isRequired=True),
            DatabaseColumn(name="LastName", dataType="string", isRequired=True),
        ]
        selections = [_select(column, "FullName") for column in db]

        errors = validate_mappings(selections, csv, db)

        assert errors == {}
        assert all("FullName" in selection.warning for selection in selections)

    def test_other_duplicates_are_errors(self):
        csv = [_column("Code", "A1")]
        db = [DatabaseColumn(name="CodeA"), DatabaseColumn(name="CodeB")]
        selections = [_select(column, "Code") for column in db]

        errors = validate_mappings(selections, csv, db)

        assert set(errors) == {"CodeA", "CodeB"}
        assert "same CSV column 'Code'" in errors["CodeA"]
        assert all(selection.warning == "" for selection in selections)

    @pytest.mark.parametrize("source", ["AdmitDate", "DOB", "BirthPlace"])
    def test_date_and_birth_duplicates_are_warnings(self, source):
        csv = [_column(source, "x")]
        db = [DatabaseColumn(name="A"), DatabaseColumn(name="B")]
        selections = [_select(column, source) for column in db]

        assert validate_mappings(selections, csv, db) == {}

    def test_optional_unmapped_is_valid(self):
        db = [DatabaseColumn(name="Notes")]

        assert validate_mappings([_select(db[0])], [], db) == {}
        assert validate_mappings([_select(db[0], Sentinels.NO_MAPPING)], [], db) == {}

    def test_required_sentinel_is_unmapped(self):
        db = [DatabaseColumn(name="Id", isRequired=True)]

        errors = validate_mappings([_select(db[0], Sentinels.NO_MAPPING)], [], db)

        assert "must be mapped" in errors["Id"]

    def test_required_column_without_selection(self):
        db = [DatabaseColumn(name="Id", isRequired=True), DatabaseColumn(name="Notes")]

        errors = validate_mappings([_select(db[1])], [], db)

        assert set(errors) == {"Id"}

    def test_unknown_source(self):
        db = [DatabaseColumn(name="Id")]

        errors = validate_mappings([_select(db[0], "Ghost")], [_column("Id", "1")], db)

        assert errors == {"Id": "Selected CSV column 'Ghost' not found."}

    def test_type_mismatch(self):
        csv = [_column("Count", "abc", "12")]
        db = [DatabaseColumn(name="Count", dataType="int")]

        errors = validate_mappings([_select(db[0], "Count")], csv, db)

        assert errors["Count"] == (
            "Type mismatch: CSV column is 'string', but DB column requires 'int'."
        )

    def test_transformation_skips_type_check(self):
        csv = [_column("DOB", "01/31/1980", "1975-06-15")]
        db = [DatabaseColumn(name="BirthYear", dataType="int", isRequired=True)]
        selection = _select(
            db[0],
            "DOB",
            transformation_kind=TransformationKind.DATE_FORMAT,
            transformation_parameters={"TargetFormat": "yyyy"},
        )

        assert validate_mappings([selection], csv, db, library=TransformationLibrary()) == {}

    def test_max_length_uses_transformed_samples(self):
        csv = [_column("FullName", "Alexandra Smith")]
        db = [DatabaseColumn(name="FirstName", maxLength=9)]
        plain = _select(db[0], "FullName")
        assert "exceeds" in validate_mappings([plain], csv, db)["FirstName"]

        split = _select(
            db[0],
            "FullName",
            transformation_kind=TransformationKind.SPLIT_FIRST_TOKEN,
            transformed_samples=["Alexandra"],
        )
        assert validate_mappings([split], csv, db) == {}

    def test_default_max_length(self):
        csv = [_column("Notes", "x" * 4001)]
        db = [DatabaseColumn(name="Notes")]
        selection = _select(db[0], "Notes")

        assert "4000" in validate_mappings([selection], csv, db)["Notes"]
        assert validate_mappings([selection], csv, db, default_max_length=5000) == {}

    def test_max_length_only_for_string_targets(self):
        csv = [_column("Amount", "1234567")]
        db = [DatabaseColumn(name="Amount", dataType="int", maxLength=2)]

        assert validate_mappings([_select(db[0], "Amount")], csv, db) == {}

    def test_required_all_blank_after_transformation(self):
        csv = [_column("Status", "x", "y")]
        db = [DatabaseColumn(name="Status", isRequired=True)]
        selection = _select(
            db[0],
            "Status",
            transformation_kind=TransformationKind.CATEGORY_MAPPING,
            transformation_parameters={"Mappings": {"a": "A"}, "DefaultValue": ""},
        )

        errors = validate_mappings([selection], csv, db, library=TransformationLibrary())

        assert errors == {"Status": "No valid values after transformation."}

    def test_warnings_are_reset(self):
        csv = [_column("FullName", "John Smith"), _column("Surname", "Smith")]
        db = [DatabaseColumn(name="FirstName"), DatabaseColumn(name="LastName")]
        selections = [_select(column, "FullName") for column in db]
        validate_mappings(selections, csv, db)
        assert selections[1].warning

        selections[1].selected_csv_column = "Surname"
        validate_mappings(selections, csv, db)

        assert selections[0].warning == ""
        assert selections[1].warning == ""

    def test_reports_every_problem(self):
        csv = [_column("Count", "abc")]
        db = [
            DatabaseColumn(name="Id", isRequired=True),
            DatabaseColumn(name="Count", dataType="int"),
            DatabaseColumn(name="Other"),
        ]
        selections = [_select(db[0]), _select(db[1], "Count"), _select(db[2], "Missing")]

        errors = validate_mappings(selections, csv, db)

        assert set(errors) == {"Id", "Count", "Other"}

    def test_valid_mapping_has_no_errors(self):
        csv = [_column("patient_id", "P1"), _column("Age", "34")]
        db = [
            DatabaseColumn(name="PatientId", isRequired=True, maxLength=10),
            DatabaseColumn(name="Age", dataType="decimal"),
        ]
        selections = [_select(db[0], "patient_id"), _select(db[1], "Age")]

        assert validate_mappings(selections, csv, db) == {}


class TestValidationReport:
    """Tests for the report wrapper."""

    def test_report_collects_errors_and_warnings(self):
        csv = [_column("FullName", "John Smith")]
        db = [
            DatabaseColumn(name="FirstName"),
            DatabaseColumn(name="LastName"),
            DatabaseColumn(name="Id", isRequired=True),
        ]
        selections = [_select(db[0], "FullName"), _select(db[1], "FullName"), _select(db[2])]

        report = build_validation_report(selections, csv, db)

        assert not report.is_valid
        assert set(report.errors) == {"Id"}
        assert set(report.warnings) == {"FirstName", "LastName"}
        assert report.summary() == "1 error(s), 2 warning(s)"

    def test_empty_report(self):
        report = ValidationReport()
        assert report.is_valid
        assert report.summary() == "All mappings are valid"
