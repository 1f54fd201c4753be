from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults


@dataclass(frozen=True, slots=True)
class MapperConfig:
    sample_rows: int = Defaults.SAMPLE_ROWS
    default_max_length: int = Defaults.MAX_STRING_LENGTH
    default_date_format: str = Defaults.DATE_FORMAT
    mapping_file: Path = field(default_factory=lambda: Path(Defaults.MAPPING_FILE))
    csv_encoding: str = Defaults.CSV_ENCODING
    suggestion_min_score: float = Defaults.SUGGESTION_MIN_SCORE

    def __post_init__(self) -> None:
        if self.sample_rows < 1:
            raise ValueError(f"sample_rows must be positive, got {self.sample_rows}")
        if self.default_max_length < 1:
            raise ValueError(
                f"default_max_length must be positive, got {self.default_max_length}"
            )
        if not self.default_date_format.strip():
            raise ValueError("default_date_format must not be empty")
        if not 0.0 <= self.suggestion_min_score <= 1.0:
            raise ValueError(
                "suggestion_min_score must be between 0.0 and 1.0, "
                f"got {self.suggestion_min_score}"
            )

    @classmethod
    def from_env(cls) -> MapperConfig:
        return cls(
            sample_rows=int(
                os.getenv("CSV_MAPPER_SAMPLE_ROWS", str(Defaults.SAMPLE_ROWS))
            ),
            default_max_length=int(
                os.getenv("CSV_MAPPER_MAX_LENGTH", str(Defaults.MAX_STRING_LENGTH))
            ),
            default_date_format=os.getenv(
                "CSV_MAPPER_DATE_FORMAT", Defaults.DATE_FORMAT
            ),
            mapping_file=Path(
                os.getenv("CSV_MAPPER_MAPPING_FILE", Defaults.MAPPING_FILE)
            ),
            csv_encoding=os.getenv("CSV_MAPPER_CSV_ENCODING", Defaults.CSV_ENCODING),
            suggestion_min_score=float(
                os.getenv(
                    "CSV_MAPPER_SUGGESTION_MIN_SCORE",
                    str(Defaults.SUGGESTION_MIN_SCORE),
                )
            ),
        )


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> MapperConfig:
        config = MapperConfig.from_env()
        if config_file is None:
            config_file = Path("csv_mapper.toml")
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(config_file: Path, base_config: MapperConfig) -> MapperConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        sampling = _get_table(data, "sampling")
        validation = _get_table(data, "validation")
        paths = _get_table(data, "paths")
        sample_rows = base_config.sample_rows
        if (value := sampling.get("rows")) is not None:
            sample_rows = _coerce_int(value, key="sampling.rows")
        csv_encoding = base_config.csv_encoding
        if value := sampling.get("encoding"):
            csv_encoding = str(value)
        default_max_length = base_config.default_max_length
        if (value := validation.get("default_max_length")) is not None:
            default_max_length = _coerce_int(
                value, key="validation.default_max_length"
            )
        default_date_format = base_config.default_date_format
        if value := validation.get("default_date_format"):
            default_date_format = str(value)
        suggestion_min_score = base_config.suggestion_min_score
        if (value := validation.get("suggestion_min_score")) is not None:
            suggestion_min_score = _coerce_float(
                value, key="validation.suggestion_min_score"
            )
        mapping_file = base_config.mapping_file
        if value := paths.get("mapping_file"):
            mapping_file = Path(str(value))
        return MapperConfig(
            sample_rows=sample_rows,
            default_max_length=default_max_length,
            default_date_format=default_date_format,
            mapping_file=mapping_file,
            csv_encoding=csv_encoding,
            suggestion_min_score=suggestion_min_score,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_float(value: object, *, key: str) -> float:
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return float(value)
    raise ValueError(f"{key} must be numeric or string, got {type(value).__name__}")


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"{key} must be int-like or string, got {type(value).__name__}")
