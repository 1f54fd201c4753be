from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ...constants import Sentinels
from ...transformations.base import Parameters, ParameterValue, TransformationKind
from .schema import DatabaseColumn


class _MappingModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ColumnMapping(_MappingModel):
    csv_column: str = Field(alias="csvColumn")
    db_column: str = Field(alias="dbColumn")
    is_derived_column: bool = Field(default=False, alias="isDerivedColumn")
    source_column_name: str | None = Field(default=None, alias="sourceColumnName")
    transformation_type: TransformationKind | None = Field(
        default=None, alias="transformationType"
    )
    transformation_parameters: dict[str, ParameterValue] | None = Field(
        default=None, alias="transformationParameters"
    )

    @model_validator(mode="after")
    def _derived_fields_present(self) -> ColumnMapping:
        if self.is_derived_column and (
            self.source_column_name is None
            or self.transformation_type is None
            or self.transformation_parameters is None
        ):
            raise ValueError(
                f"Derived mapping for '{self.db_column}' requires sourceColumnName, "
                "transformationType and transformationParameters"
            )
        return self

    @classmethod
    def direct(cls, csv_column: str, db_column: str) -> ColumnMapping:
        return cls(csv_column=csv_column, db_column=db_column)

    @classmethod
    def derived(
        cls,
        csv_column: str,
        db_column: str,
        source_column_name: str,
        kind: TransformationKind,
        parameters: Parameters,
    ) -> ColumnMapping:
        return cls(
            csv_column=csv_column,
            db_column=db_column,
            is_derived_column=True,
            source_column_name=source_column_name,
            transformation_type=kind,
            transformation_parameters=dict(parameters),
        )


class MappingResult(_MappingModel):
    table_name: str = Field(alias="tableName")
    csv_type: str = Field(default="", alias="csvType")
    column_mappings: list[ColumnMapping] = Field(
        default_factory=list, alias="columnMappings"
    )

    def mapping_for(self, db_column: str) -> ColumnMapping | None:
        for mapping in self.column_mappings:
            if mapping.db_column == db_column:
                return mapping
        return None


class MultiMappingResult(_MappingModel):
    mappings: list[MappingResult]

    @model_validator(mode="after")
    def _unique_csv_types(self) -> MultiMappingResult:
        seen: set[str] = set()
        for result in self.mappings:
            if result.csv_type in seen:
                raise ValueError(f"Duplicate mapping for csvType '{result.csv_type}'")
            seen.add(result.csv_type)
        return self

    @classmethod
    def empty(cls) -> MultiMappingResult:
        return cls(mappings=[])

    @property
    def csv_types(self) -> list[str]:
        return [result.csv_type for result in self.mappings]

    def for_csv_type(self, csv_type: str) -> MappingResult | None:
        for result in self.mappings:
            if result.csv_type == csv_type:
                return result
        return None


@dataclass(slots=True)
class ColumnSelection:
    """Operator's current choice for one database column.

    ``transformed_samples`` holds the preview of the attached transformation,
    if any. ``warning`` is the only field validation writes to.
    """

    db_column: DatabaseColumn
    selected_csv_column: str | None = None
    transformation_kind: TransformationKind | None = None
    transformation_parameters: Parameters = field(default_factory=dict)
    transformed_samples: list[str] | None = None
    warning: str = ""

    @property
    def is_mapped(self) -> bool:
        return bool(self.selected_csv_column) and (
            self.selected_csv_column != Sentinels.NO_MAPPING
        )

    @property
    def has_transformation(self) -> bool:
        return self.transformation_kind is not None

    def clear_transformation(self) -> None:
        self.transformation_kind = None
        self.transformation_parameters = {}
        self.transformed_samples = None

    def to_column_mapping(self) -> ColumnMapping | None:
        if not self.is_mapped or self.selected_csv_column is None:
            return None
        if self.transformation_kind is not None:
            return ColumnMapping.derived(
                self.selected_csv_column,
                self.db_column.name,
                self.selected_csv_column,
                self.transformation_kind,
                self.transformation_parameters,
            )
        return ColumnMapping.direct(self.selected_csv_column, self.db_column.name)


@dataclass(slots=True)
class MappingSuggestion:
    db_column: str
    csv_column: str
    score: float


def build_result(
    table_name: str, csv_type: str, selections: Iterable[ColumnSelection]
) -> MappingResult:
    mappings = [
        mapping
        for mapping in (selection.to_column_mapping() for selection in selections)
        if mapping is not None
    ]
    return MappingResult(
        table_name=table_name, csv_type=csv_type, column_mappings=mappings
    )
