"""Mapping services for CSV to database column mapping.

This package provides the auto-match heuristic, the advisory fuzzy
suggestions, mapping validation and the transformability rules used to
decide which database columns may take a derived column.
"""

__all__ = []
