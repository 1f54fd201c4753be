"""csv-mapper package.

This package maps the columns of a CSV file onto the columns of a database
table described by a JSON schema.

Features:
- CSV sampling with per-column type inference
- Name-based auto-matching with fuzzy suggestions
- Mapping validation that reports every problem at once
- Derived columns through text, date and category transformations
- Mapping persistence as JSON, including the legacy single-table format
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("csv-mapper")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

# Core exports
from csv_mapper.domain.entities import (
    ColumnMapping,
    ColumnSelection,
    CsvColumn,
    DatabaseColumn,
    DatabaseSchema,
    DerivedColumn,
    MappingResult,
    MultiMappingResult,
    SchemaTable,
)
from csv_mapper.domain.services.mapping.engine import MappingEngine
from csv_mapper.domain.services.type_inference import TypeTag, infer_type
from csv_mapper.infrastructure.io.csv_reader import CsvSampler
from csv_mapper.infrastructure.repositories import (
    load_mappings,
    load_schema,
    save_mappings,
)
from csv_mapper.transformations import TransformationKind, TransformationLibrary

__all__ = [
    "__version__",
    # Columns and schema
    "CsvColumn",
    "DerivedColumn",
    "DatabaseColumn",
    "DatabaseSchema",
    "SchemaTable",
    # Mappings
    "ColumnMapping",
    "ColumnSelection",
    "MappingResult",
    "MultiMappingResult",
    "MappingEngine",
    # Types
    "TypeTag",
    "infer_type",
    # Transformations
    "TransformationKind",
    "TransformationLibrary",
    # I/O
    "CsvSampler",
    "load_mappings",
    "load_schema",
    "save_mappings",
]
