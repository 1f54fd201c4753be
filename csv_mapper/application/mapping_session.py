"""Mapping session orchestrating one interactive mapping run.

The session owns the loaded schema, one ``TableSession`` per active csvType
and the last saved ``MultiMappingResult``. Every operation takes its full
input and either returns a complete result or raises, so a caller is never
left with a half-updated table.

File I/O has awaitable variants that run in a worker thread; cancelling the
awaiting task abandons the whole operation.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import MapperConfig
from ..domain.entities.mapping import (
    ColumnSelection,
    MappingResult,
    MappingSuggestion,
    MultiMappingResult,
    build_result,
)
from ..infrastructure.io.exceptions import MapperError, MappingConfigError
from ..infrastructure.repositories.mapping_config_repository import (
    load_mappings,
    save_mappings,
)
from ..infrastructure.repositories.schema_repository import load_schema
from ..transformations.base import coerce_parameters

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..domain.entities.columns import CsvColumn, DerivedColumn
    from ..domain.entities.schema import DatabaseSchema, SchemaTable
    from ..domain.services.mapping.engine import MappingEngine
    from ..domain.services.mapping.validator import ValidationReport
    from ..transformations.base import ParameterValue, TransformationKind
    from .ports.services import CsvSourcePort, LoggerPort


@dataclass
class TableSession:
    """Mapping state for the schema table bound to one csvType."""

    csv_type: str
    table: SchemaTable
    csv_path: Path | None = None
    csv_columns: list[CsvColumn] = field(default_factory=list)
    derived_columns: dict[str, DerivedColumn] = field(default_factory=dict)
    selections: list[ColumnSelection] = field(default_factory=list)
    last_report: ValidationReport | None = None

    def __post_init__(self) -> None:
        if not self.selections:
            self.selections = [ColumnSelection(db_column=c) for c in self.table.columns]

    def selection(self, db_column: str) -> ColumnSelection:
        for selection in self.selections:
            if selection.db_column.name == db_column:
                return selection
        raise MappingConfigError(
            f"Table '{self.table.table_name}' has no column '{db_column}'"
        )

    def csv_column(self, name: str) -> CsvColumn | None:
        for column in self.csv_columns:
            if column.name == name:
                return column
        return None

    @property
    def csv_column_names(self) -> list[str]:
        return [column.name for column in self.csv_columns]

    @property
    def is_valid(self) -> bool:
        return self.last_report is not None and self.last_report.is_valid

    def reset_selections(self) -> None:
        self.selections = [ColumnSelection(db_column=c) for c in self.table.columns]
        self.derived_columns.clear()
        self.last_report = None

    def to_result(self) -> MappingResult:
        return build_result(self.table.table_name, self.csv_type, self.selections)


class MappingSession:
    """Collaborator surface for a UI or command line driving a mapping run."""

    def __init__(
        self,
        engine: MappingEngine,
        sampler: CsvSourcePort,
        logger: LoggerPort,
        config: MapperConfig | None = None,
    ) -> None:
        self.engine = engine
        self.sampler = sampler
        self.logger = logger
        self.config = config or MapperConfig()
        self.schema: DatabaseSchema | None = None
        self.tables: dict[str, TableSession] = {}
        self.saved: MultiMappingResult = MultiMappingResult.empty()

    # ------------------------------------------------------------------
    # Schema and tables
    # ------------------------------------------------------------------

    def load_schema(self, path: str | Path) -> DatabaseSchema:
        """Load the schema, dropping any tables opened against the previous one."""
        schema_path = Path(path)
        schema = load_schema(schema_path)
        self.schema = schema
        self.tables.clear()
        self.logger.log_schema_loaded(schema_path, schema.database_name, len(schema.tables))
        return schema

    def open_table(self, csv_type: str) -> TableSession:
        if csv_type in self.tables:
            return self.tables[csv_type]
        session = TableSession(csv_type=csv_type, table=self._schema_table(csv_type))
        self.tables[csv_type] = session
        return session

    def _schema_table(self, csv_type: str) -> SchemaTable:
        if self.schema is None:
            raise MappingConfigError("No schema loaded")
        table = self.schema.table_for_csv_type(csv_type)
        if table is None:
            raise MappingConfigError(f"Schema has no table for csvType '{csv_type}'")
        return table

    def table(self, csv_type: str) -> TableSession:
        try:
            return self.tables[csv_type]
        except KeyError as exc:
            raise MappingConfigError(f"No open table for csvType '{csv_type}'") from exc

    def remove_table(self, csv_type: str) -> bool:
        return self.tables.pop(csv_type, None) is not None

    # ------------------------------------------------------------------
    # CSV sampling and matching
    # ------------------------------------------------------------------

    def load_csv(self, csv_type: str, path: str | Path) -> list[CsvColumn]:
        """Sample ``path`` for ``csv_type`` and reset that table's selections."""
        csv_path = Path(path)
        self._schema_table(csv_type)
        columns = self.sampler.parse_csv_file(csv_path)
        session = self.open_table(csv_type)
        self._bind_csv(session, csv_path, columns)
        return columns

    def _bind_csv(
        self, session: TableSession, csv_path: Path, columns: list[CsvColumn]
    ) -> None:
        session.csv_path = csv_path
        session.csv_columns = columns
        session.reset_selections()
        self.logger.log_csv_loaded(session.csv_type, csv_path, columns)

    def auto_match(self, csv_type: str) -> dict[str, str]:
        session = self.table(csv_type)
        matches = self.engine.auto_match(session.csv_columns, session.table.columns)
        for selection in session.selections:
            match = matches.get(selection.db_column.name)
            if match is not None:
                selection.selected_csv_column = match
                selection.clear_transformation()
                session.derived_columns.pop(selection.db_column.name, None)
        self.logger.log_auto_match(csv_type, len(matches), len(session.table.columns))
        return matches

    def suggest(self, csv_type: str, db_column: str) -> list[MappingSuggestion]:
        """Fuzzy-ranked CSV columns for ``db_column``; advisory only."""
        session = self.table(csv_type)
        return self.engine.suggest(
            session.csv_columns, session.selection(db_column).db_column
        )

    def select(self, csv_type: str, db_column: str, csv_column: str | None) -> ColumnSelection:
        session = self.table(csv_type)
        selection = session.selection(db_column)
        if selection.selected_csv_column != csv_column:
            selection.clear_transformation()
            session.derived_columns.pop(db_column, None)
        selection.selected_csv_column = csv_column
        return selection

    def attach_transformation(
        self,
        csv_type: str,
        db_column: str,
        kind: TransformationKind,
        parameters: Mapping[str, ParameterValue] | None = None,
    ) -> DerivedColumn:
        """Transform the selected CSV column of ``db_column`` and record the result.

        Raises:
            MappingConfigError: If the column has no CSV source selected
            UnsupportedTransformationError: If ``kind`` is not registered
            InvalidParametersError: If the parameters are rejected
        """
        session = self.table(csv_type)
        selection = session.selection(db_column)
        source = (
            session.csv_column(selection.selected_csv_column)
            if selection.is_mapped and selection.selected_csv_column
            else None
        )
        if source is None:
            raise MappingConfigError(
                f"Select a CSV column for '{db_column}' before adding a transformation"
            )
        derived = self.engine.apply_transformation(source, kind, parameters)
        selection.transformation_kind = kind
        selection.transformation_parameters = dict(derived.transformation_parameters)
        selection.transformed_samples = list(derived.sample_values)
        session.derived_columns[db_column] = derived
        return derived

    def clear_transformation(self, csv_type: str, db_column: str) -> None:
        session = self.table(csv_type)
        session.selection(db_column).clear_transformation()
        session.derived_columns.pop(db_column, None)

    def validate(self, csv_type: str) -> ValidationReport:
        session = self.table(csv_type)
        report = self.engine.build_validation_report(
            session.selections,
            session.csv_columns,
            session.table.columns,
            default_max_length=self.config.default_max_length,
        )
        session.last_report = report
        self.logger.log_validation(csv_type, report)
        return report

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def build_result(self) -> MultiMappingResult:
        """Combine open tables with saved mappings for csvTypes not open."""
        results = [session.to_result() for session in self.tables.values()]
        results.extend(
            saved for saved in self.saved.mappings if saved.csv_type not in self.tables
        )
        return MultiMappingResult(mappings=results)

    def save(self, path: str | Path | None = None) -> bool:
        target = Path(path) if path is not None else self.config.mapping_file
        result = self.build_result()
        if save_mappings(result, target, self.logger):
            self.saved = result
            self.logger.success(f"Saved {len(result.mappings)} mapping(s) to {target}")
            return True
        return False

    def load_saved(self, path: str | Path | None = None) -> MultiMappingResult:
        source = Path(path) if path is not None else self.config.mapping_file
        self.saved = load_mappings(source, self.logger)
        return self.saved

    def apply_saved(self, csv_type: str) -> int:
        """Re-apply the saved mapping for ``csv_type`` to the freshly sampled columns.

        Saved entries whose database column or CSV source no longer exists are
        dropped. A saved transformation that fails to re-apply leaves the
        plain mapping in place.

        Returns:
            Number of database columns that received a mapping
        """
        session = self.table(csv_type)
        saved = self.saved.for_csv_type(csv_type)
        if saved is None:
            return 0

        applied = 0
        for mapping in saved.column_mappings:
            if session.table.get_column(mapping.db_column) is None:
                self.logger.verbose(f"Dropping saved mapping for unknown column {mapping.db_column}")
                continue
            source_name = (
                mapping.source_column_name
                if mapping.is_derived_column and mapping.source_column_name
                else mapping.csv_column
            )
            if session.csv_column(source_name) is None:
                self.logger.verbose(
                    f"Dropping saved mapping {mapping.db_column} <- {source_name}: "
                    "column not in CSV"
                )
                continue
            self.select(csv_type, mapping.db_column, source_name)
            applied += 1
            if mapping.is_derived_column and mapping.transformation_type is not None:
                try:
                    self.attach_transformation(
                        csv_type,
                        mapping.db_column,
                        mapping.transformation_type,
                        coerce_parameters(mapping.transformation_parameters),
                    )
                except MapperError as exc:
                    self.logger.warning(
                        f"Could not re-apply transformation for {mapping.db_column}: {exc}"
                    )
        return applied

    # ------------------------------------------------------------------
    # Awaitable file operations
    # ------------------------------------------------------------------

    async def load_schema_async(self, path: str | Path) -> DatabaseSchema:
        schema_path = Path(path)
        schema = await asyncio.to_thread(load_schema, schema_path)
        self.schema = schema
        self.tables.clear()
        self.logger.log_schema_loaded(schema_path, schema.database_name, len(schema.tables))
        return schema

    async def load_csv_async(self, csv_type: str, path: str | Path) -> list[CsvColumn]:
        csv_path = Path(path)
        self._schema_table(csv_type)
        columns = await asyncio.to_thread(self.sampler.parse_csv_file, csv_path)
        session = self.open_table(csv_type)
        self._bind_csv(session, csv_path, columns)
        return columns

    async def save_async(self, path: str | Path | None = None) -> bool:
        target = Path(path) if path is not None else self.config.mapping_file
        result = self.build_result()
        saved = await asyncio.to_thread(save_mappings, result, target, self.logger)
        if saved:
            self.saved = result
        return saved
