"""Persistence of column mappings as JSON.

Saving and loading never raise. A missing or unreadable mapping file is an
expected event (first run, moved file), so failures degrade to ``False`` or
an empty result and are reported through the logger.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from ...domain.entities.mapping import MappingResult, MultiMappingResult
from ..io.exceptions import SerializationError

if TYPE_CHECKING:
    from ...application.ports.services import LoggerPort


def _dump(result: MappingResult | MultiMappingResult) -> str:
    try:
        payload = result.model_dump(mode="json", by_alias=True)
        # The mappings list is mutable, so csvType uniqueness is checked again.
        type(result).model_validate(payload)
        return json.dumps(payload, indent=2, ensure_ascii=False)
    except ValidationError as exc:
        raise SerializationError(f"Refusing to save invalid mappings: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Failed to serialize mappings: {exc}") from exc


def _write_atomic(file_path: Path, text: str) -> None:
    file_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{file_path.name}.", suffix=".tmp", dir=file_path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, file_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def save_mappings(
    result: MappingResult | MultiMappingResult,
    path: str | Path,
    logger: LoggerPort | None = None,
) -> bool:
    """Write ``result`` as indented JSON, replacing any existing file.

    A single ``MappingResult`` is written in the legacy single-table shape.

    Returns:
        True on success, False if serialization or the write failed
    """
    file_path = Path(path)
    try:
        _write_atomic(file_path, _dump(result))
    except (OSError, SerializationError) as exc:
        if logger is not None:
            logger.error(f"Failed to save mappings to {file_path}: {exc}")
        return False
    if logger is not None:
        logger.verbose(f"Saved mappings to {file_path}")
    return True


def load_mappings(
    path: str | Path, logger: LoggerPort | None = None
) -> MultiMappingResult:
    """Load mappings, accepting both the multi-table and legacy shapes.

    Returns an empty result if the file is missing or cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.exists():
        if logger is not None:
            logger.verbose(f"No saved mappings at {file_path}")
        return MultiMappingResult.empty()
    try:
        with file_path.open("r", encoding="utf-8-sig") as handle:
            data = json.load(handle)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        if logger is not None:
            logger.warning(f"Could not read mappings from {file_path}: {exc}")
        return MultiMappingResult.empty()

    try:
        return MultiMappingResult.model_validate(data)
    except ValidationError:
        pass
    try:
        legacy = MappingResult.model_validate(data)
    except ValidationError as exc:
        if logger is not None:
            logger.warning(f"Ignoring unreadable mappings in {file_path}: {exc}")
        return MultiMappingResult.empty()
    if logger is not None:
        logger.verbose(f"Loaded legacy single-table mappings from {file_path}")
    return MultiMappingResult(mappings=[legacy])
