"""Mapping engine for CSV to database column mapping.

This module provides the MappingEngine class which proposes pairings between
sampled CSV columns and the columns of a database table, validates the
operator's choices, and builds derived columns through an injected
transformation library.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from rapidfuzz import fuzz

from ....constants import Defaults
from ....transformations.base import ParameterValue, TransformationKind
from ....transformations.registry import TransformationLibrary
from ...entities.columns import CsvColumn, DerivedColumn
from ...entities.mapping import ColumnSelection, MappingSuggestion
from ...entities.schema import DatabaseColumn
from ..type_inference import infer_type
from . import transformability, validator
from .utils import normalize_name, normalize_text


class MappingEngine:
    """Engine for matching CSV columns to database columns.

    ``auto_match`` is deterministic and name based. ``suggest`` ranks
    candidates with fuzzy scores and is advisory only.

    Example:
        >>> engine = MappingEngine(TransformationLibrary())
        >>> csv = [CsvColumn("patient_id", 0), CsvColumn("Gender", 1)]
        >>> engine.auto_match(csv, [DatabaseColumn(name="PatientId")])
        {'PatientId': 'patient_id'}
    """

    def __init__(
        self,
        library: TransformationLibrary,
        *,
        min_score: float = Defaults.SUGGESTION_MIN_SCORE,
        default_max_length: int = Defaults.MAX_STRING_LENGTH,
    ) -> None:
        """Initialize the mapping engine.

        Args:
            library: Transformation library used for derived columns
            min_score: Minimum fuzzy score for suggestions (0.0-1.0)
            default_max_length: Limit for string columns without ``maxLength``
        """
        self.library = library
        self.min_score = min_score
        self.default_max_length = default_max_length

    def auto_match(
        self, csv_columns: Sequence[CsvColumn], db_columns: Sequence[DatabaseColumn]
    ) -> dict[str, str]:
        """Propose a CSV column for each database column by name.

        Precedence is exact case-insensitive equality, then equality after
        removing spaces, underscores and hyphens, then substring containment
        either way. The first qualifying CSV column in CSV order wins. Database
        columns without a candidate are left out of the result.
        """
        matches: dict[str, str] = {}
        for db_column in db_columns:
            match = self._match_one(csv_columns, db_column.name)
            if match is not None:
                matches[db_column.name] = match
        return matches

    def _match_one(self, csv_columns: Sequence[CsvColumn], db_name: str) -> str | None:
        lowered = db_name.lower()
        for column in csv_columns:
            if column.name.lower() == lowered:
                return column.name

        normalized = normalize_name(db_name)
        for column in csv_columns:
            if normalize_name(column.name) == normalized:
                return column.name

        for column in csv_columns:
            candidate = column.name.lower()
            if not candidate or not lowered:
                continue
            if candidate in lowered or lowered in candidate:
                return column.name
        return None

    def suggest(
        self,
        csv_columns: Sequence[CsvColumn],
        db_column: DatabaseColumn,
        *,
        limit: int = Defaults.SUGGESTION_LIMIT,
        min_score: float | None = None,
    ) -> list[MappingSuggestion]:
        """Rank CSV columns by fuzzy similarity to ``db_column``.

        Args:
            csv_columns: Candidate CSV columns
            db_column: Database column to find a source for
            limit: Maximum number of suggestions returned
            min_score: Override for the engine's minimum score

        Returns:
            Suggestions ordered by descending score, ties in CSV order
        """
        threshold = self.min_score if min_score is None else min_score
        target = normalize_text(db_column.name)
        scored: list[MappingSuggestion] = []
        for column in csv_columns:
            score_raw = fuzz.token_set_ratio(column.name.upper(), db_column.name.upper())
            score_norm = fuzz.ratio(normalize_text(column.name), target)
            score = max(score_raw, score_norm) / 100
            if score >= threshold:
                scored.append(
                    MappingSuggestion(
                        db_column=db_column.name, csv_column=column.name, score=score
                    )
                )
        scored.sort(key=lambda suggestion: suggestion.score, reverse=True)
        return scored[:limit]

    def validate_mappings(
        self,
        selections: Sequence[ColumnSelection],
        csv_columns: Sequence[CsvColumn],
        db_columns: Sequence[DatabaseColumn],
        *,
        default_max_length: int | None = None,
    ) -> dict[str, str]:
        return validator.validate_mappings(
            selections,
            csv_columns,
            db_columns,
            default_max_length=default_max_length or self.default_max_length,
            library=self.library,
        )

    def build_validation_report(
        self,
        selections: Sequence[ColumnSelection],
        csv_columns: Sequence[CsvColumn],
        db_columns: Sequence[DatabaseColumn],
        *,
        default_max_length: int | None = None,
    ) -> validator.ValidationReport:
        return validator.build_validation_report(
            selections,
            csv_columns,
            db_columns,
            default_max_length=default_max_length or self.default_max_length,
            library=self.library,
        )

    def create_derived_column(
        self,
        source: CsvColumn,
        new_name: str,
        kind: TransformationKind,
        parameters: Mapping[str, ParameterValue] | None = None,
    ) -> DerivedColumn:
        """Build a virtual column by transforming ``source``.

        Raises:
            UnsupportedTransformationError: If ``kind`` is not registered
            InvalidParametersError: If the transformation rejects ``parameters``
        """
        params = dict(parameters or {})
        self.library.ensure_valid(kind, params)
        values = self.library.transform_samples(source.sample_values, kind, params)
        return DerivedColumn(
            name=new_name,
            index=source.index,
            sample_values=tuple(values),
            inferred_type=infer_type(values),
            source_column_name=source.name,
            transformation_kind=kind,
            transformation_parameters=params,
        )

    def apply_transformation(
        self,
        source: CsvColumn,
        kind: TransformationKind,
        parameters: Mapping[str, ParameterValue] | None = None,
    ) -> DerivedColumn:
        """Derive a column that keeps the source column's name."""
        return self.create_derived_column(source, source.name, kind, parameters)

    def can_transform(self, db_column: DatabaseColumn) -> bool:
        return transformability.can_transform(db_column)

    def available_transformations(
        self, db_column: DatabaseColumn
    ) -> list[TransformationKind]:
        return [
            kind
            for kind in transformability.available_transformations(db_column)
            if self.library.is_supported(kind)
        ]
