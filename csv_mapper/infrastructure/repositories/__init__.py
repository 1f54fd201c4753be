"""Repository implementations for data access.

This module provides loading of the database schema and persistence of the
column mappings.
"""

from .mapping_config_repository import load_mappings, save_mappings
from .schema_repository import load_schema

__all__ = [
    "load_mappings",
    "load_schema",
    "save_mappings",
]
