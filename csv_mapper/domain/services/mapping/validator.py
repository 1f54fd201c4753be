"""Validation of proposed column mappings.

Problems are returned as data, keyed by database column name, so that every
problem can be shown at once. Validation never raises for a bad mapping and
only mutates its input to attach warning text to ``ColumnSelection.warning``.

Rules, in order:

1. Duplicate source. Several database columns sharing a CSV column is an
   error, unless the CSV column name looks like a name or date field, in
   which case each affected selection gets a warning instead.
2. A required database column must be mapped.
3. The selected CSV column must exist.
4. The source type must be compatible with the declared database type.
   Skipped when a transformation is attached.
5. String values must fit within the column's max length.
6. A required column must keep at least one non-blank value after its
   transformation.

Only the first failing rule is reported for a given column.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ....constants import Defaults, NameHints
from ...entities.columns import CsvColumn
from ...entities.mapping import ColumnSelection
from ...entities.schema import DatabaseColumn
from ..type_inference import is_blank
from .utils import contains_any

if TYPE_CHECKING:
    from ....transformations.registry import TransformationLibrary

_DECIMAL_FAMILY = frozenset({"int", "decimal", "float", "double"})
_BOOL_TYPES = frozenset({"bool", "boolean"})


@dataclass
class ValidationReport:
    """Errors and warnings produced by one validation pass.

    Attributes:
        errors: Blocking problems keyed by database column name
        warnings: Advisory problems keyed by database column name
    """

    errors: dict[str, str] = field(default_factory=dict)
    warnings: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        if self.is_valid and not self.warnings:
            return "All mappings are valid"
        parts = [f"{len(self.errors)} error(s)"]
        if self.warnings:
            parts.append(f"{len(self.warnings)} warning(s)")
        return ", ".join(parts)


def is_type_compatible(source_type: str, target_type: str) -> bool:
    source = source_type.strip().lower()
    target = target_type.strip().lower()
    if source == target:
        return True
    match target:
        case "string":
            return True
        case "int":
            return source == "int"
        case "decimal" | "float" | "double":
            return source in _DECIMAL_FAMILY
        case "datetime" | "date":
            return source in ("datetime", "string")
        case "bool" | "boolean":
            return source in _BOOL_TYPES or source == "int"
        case _:
            return False


def _effective_samples(
    selection: ColumnSelection,
    column: CsvColumn,
    library: TransformationLibrary | None,
) -> list[str]:
    if selection.transformation_kind is None:
        return list(column.sample_values)
    if selection.transformed_samples is not None:
        return list(selection.transformed_samples)
    if library is not None and library.is_supported(selection.transformation_kind):
        return library.transform_samples(
            column.sample_values,
            selection.transformation_kind,
            selection.transformation_parameters,
        )
    return list(column.sample_values)


def _check_duplicates(
    selections: Sequence[ColumnSelection], errors: dict[str, str]
) -> None:
    by_source: dict[str, list[ColumnSelection]] = defaultdict(list)
    for selection in selections:
        if selection.is_mapped and selection.selected_csv_column is not None:
            by_source[selection.selected_csv_column].append(selection)

    for csv_name, group in by_source.items():
        if len(group) < 2:
            continue
        if contains_any(csv_name, NameHints.DUPLICATE_TOLERANT, ignore_case=True):
            others = ", ".join(s.db_column.name for s in group)
            for selection in group:
                selection.warning = (
                    f"CSV column '{csv_name}' is mapped to several database "
                    f"columns ({others}); consider a transformation for each."
                )
            continue
        for selection in group:
            errors.setdefault(
                selection.db_column.name,
                "Multiple database columns are mapped to the same CSV column "
                f"'{csv_name}'.",
            )


def _check_selection(
    selection: ColumnSelection,
    columns_by_name: dict[str, CsvColumn],
    *,
    default_max_length: int,
    library: TransformationLibrary | None,
) -> str | None:
    db_column = selection.db_column

    if not selection.is_mapped:
        if db_column.is_required:
            return "This database column must be mapped to a CSV column."
        return None

    csv_name = selection.selected_csv_column or ""
    column = columns_by_name.get(csv_name)
    if column is None:
        return f"Selected CSV column '{csv_name}' not found."

    if selection.transformation_kind is None and not is_type_compatible(
        column.inferred_type, db_column.data_type
    ):
        return (
            f"Type mismatch: CSV column is '{column.inferred_type}', "
            f"but DB column requires '{db_column.data_type}'."
        )

    samples = _effective_samples(selection, column, library)

    if db_column.normalized_type == "string":
        max_length = db_column.max_length or default_max_length
        for value in samples:
            if value is not None and len(value) > max_length:
                return (
                    f"Value length {len(value)} exceeds the maximum length "
                    f"of {max_length}."
                )

    if (
        db_column.is_required
        and selection.transformation_kind is not None
        and samples
        and all(is_blank(value) for value in samples)
    ):
        return "No valid values after transformation."

    return None


def validate_mappings(
    selections: Sequence[ColumnSelection],
    csv_columns: Sequence[CsvColumn],
    db_columns: Sequence[DatabaseColumn],
    *,
    default_max_length: int = Defaults.MAX_STRING_LENGTH,
    library: TransformationLibrary | None = None,
) -> dict[str, str]:
    """Validate ``selections`` and return errors keyed by database column name.

    Args:
        selections: Current operator choices, one per database column
        csv_columns: Available CSV columns, derived columns included
        db_columns: Target schema columns
        default_max_length: Limit for string columns without ``maxLength``
        library: Used to compute transformed samples a selection lacks

    Returns:
        Mapping of database column name to error message. Empty when valid.
    """
    for selection in selections:
        selection.warning = ""

    errors: dict[str, str] = {}
    _check_duplicates(selections, errors)

    columns_by_name = {column.name: column for column in csv_columns}
    for selection in selections:
        name = selection.db_column.name
        if name in errors:
            continue
        error = _check_selection(
            selection,
            columns_by_name,
            default_max_length=default_max_length,
            library=library,
        )
        if error:
            errors[name] = error

    # Required schema columns that have no selection at all are unmapped.
    selected = {selection.db_column.name for selection in selections}
    for db_column in db_columns:
        if db_column.is_required and db_column.name not in selected:
            errors.setdefault(
                db_column.name, "This database column must be mapped to a CSV column."
            )

    return errors


def build_validation_report(
    selections: Sequence[ColumnSelection],
    csv_columns: Sequence[CsvColumn],
    db_columns: Sequence[DatabaseColumn],
    *,
    default_max_length: int = Defaults.MAX_STRING_LENGTH,
    library: TransformationLibrary | None = None,
) -> ValidationReport:
    errors = validate_mappings(
        selections,
        csv_columns,
        db_columns,
        default_max_length=default_max_length,
        library=library,
    )
    warnings = {
        selection.db_column.name: selection.warning
        for selection in selections
        if selection.warning
    }
    return ValidationReport(errors=errors, warnings=warnings)
