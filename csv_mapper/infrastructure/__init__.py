"""Infrastructure layer for csv-mapper.

This layer contains adapters for files on disk (CSV samples, schema and
mapping JSON) and console logging. It implements the ports defined in the
application layer.
"""

__all__ = []
