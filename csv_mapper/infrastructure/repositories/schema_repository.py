import json
from pathlib import Path

from pydantic import ValidationError

from ...domain.entities.schema import DatabaseSchema
from ..io.exceptions import DataSourceNotFoundError, SchemaLoadError


def load_schema(path: str | Path) -> DatabaseSchema:
    file_path = Path(path)
    if not file_path.exists():
        raise DataSourceNotFoundError(f"Schema file not found: {file_path}")
    try:
        with file_path.open("r", encoding="utf-8-sig") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise SchemaLoadError(f"Invalid JSON in {file_path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SchemaLoadError(
            f"Encoding error reading schema {file_path}: {exc}"
        ) from exc
    except OSError as exc:
        raise SchemaLoadError(f"Failed to read schema {file_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Schema file {file_path} must contain a JSON object")
    try:
        return DatabaseSchema.model_validate(data)
    except ValidationError as exc:
        raise SchemaLoadError(f"Failed to deserialize schema {file_path}: {exc}") from exc
