"""Application layer for csv-mapper.

This layer holds the mapping session that orchestrates sampling, schema
loading, matching, validation and persistence. It defines ports (interfaces)
for external dependencies.
"""

__all__ = []
