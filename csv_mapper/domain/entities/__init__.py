"""Domain entities.

Sampled CSV columns, the target database schema, and the mapping records
that are persisted to JSON.
"""

from .columns import CsvColumn, DerivedColumn
from .mapping import (
    ColumnMapping,
    ColumnSelection,
    MappingResult,
    MappingSuggestion,
    MultiMappingResult,
    build_result,
)
from .schema import DatabaseColumn, DatabaseSchema, SchemaTable

__all__ = [
    # Columns
    "CsvColumn",
    "DerivedColumn",
    # Schema
    "DatabaseColumn",
    "DatabaseSchema",
    "SchemaTable",
    # Mapping
    "ColumnMapping",
    "ColumnSelection",
    "MappingResult",
    "MappingSuggestion",
    "MultiMappingResult",
    "build_result",
]
