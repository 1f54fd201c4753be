"""Base interface for value transformations.

A transformation turns one sampled CSV string into another string, driven by
a small parameter dictionary. Every concrete transformation offers the same
capabilities: report the type tag of its output, transform a single value,
transform a batch, describe itself in words, and validate its own parameters.

Parameters are a closed tagged variant. A value is either a string, a bool,
or a string-to-string mapping, which keeps them losslessly round-trippable
through the mapping JSON file.

Example:
    >>> from csv_mapper.transformations.text import SplitTokenTransformation
    >>> split = SplitTokenTransformation(TransformationKind.SPLIT_FIRST_TOKEN)
    >>> split.transform_samples(["Smith, John A"], {"Delimiter": ", "})
    ['Smith']
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol, runtime_checkable

from ..domain.services.type_inference import TypeTag
from ..infrastructure.io.exceptions import InvalidParametersError

ParameterValue = str | bool | dict[str, str]
Parameters = dict[str, ParameterValue]


class TransformationKind(StrEnum):
    SPLIT_FIRST_TOKEN = "SplitFirstToken"
    SPLIT_LAST_TOKEN = "SplitLastToken"
    REGEX_EXTRACT = "RegexExtract"
    DATE_FORMAT = "DateFormat"
    DATE_EXTRACT_COMPONENT = "DateExtractComponent"
    CATEGORY_MAPPING = "CategoryMapping"
    NUMBER_FORMAT = "NumberFormat"
    UNIT_CONVERSION = "UnitConversion"

    @classmethod
    def parse(cls, raw: str) -> TransformationKind:
        """Resolve a kind from its serialized name, member name, or any casing."""
        text = raw.strip()
        for kind in cls:
            if text.lower() in (kind.value.lower(), kind.name.lower()):
                return kind
        raise ValueError(f"Unknown transformation kind: {raw!r}")


def coerce_parameter_value(key: str, value: object) -> ParameterValue:
    if isinstance(value, (str, bool)):
        return value
    if isinstance(value, Mapping):
        mapping: dict[str, str] = {}
        for map_key, map_value in value.items():
            if not isinstance(map_key, str) or not isinstance(map_value, str):
                raise InvalidParametersError(
                    f"Parameter '{key}' must map strings to strings"
                )
            mapping[map_key] = map_value
        return mapping
    raise InvalidParametersError(
        f"Parameter '{key}' has unsupported type {type(value).__name__}"
    )


def coerce_parameters(raw: Mapping[str, object] | None) -> Parameters:
    if not raw:
        return {}
    return {str(key): coerce_parameter_value(str(key), value) for key, value in raw.items()}


def get_str(parameters: Mapping[str, ParameterValue] | None, key: str, default: str) -> str:
    value = (parameters or {}).get(key)
    return value if isinstance(value, str) else default


def get_bool(
    parameters: Mapping[str, ParameterValue] | None, key: str, default: bool
) -> bool:
    value = (parameters or {}).get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    return default


def get_mapping(
    parameters: Mapping[str, ParameterValue] | None, key: str
) -> dict[str, str]:
    value = (parameters or {}).get(key)
    return dict(value) if isinstance(value, dict) else {}


@dataclass
class TransformationResult:
    """Outcome of previewing a transformation over sample values.

    Attributes:
        kind: Transformation that was applied
        values: Transformed values, same length and order as the input
        description: Human-readable description of the transformation
        inferred_type: Type inferred from the transformed values
        errors: Per-value failures that were replaced by an error marker
    """

    kind: TransformationKind
    values: list[str]
    description: str = ""
    inferred_type: TypeTag = TypeTag.STRING
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = [f"{self.kind.value}: {self.description}" if self.description else self.kind.value]
        if self.errors:
            lines.append(f"Errors ({len(self.errors)}): {', '.join(self.errors)}")
        return "\n".join(lines)


@runtime_checkable
class TransformationPort(Protocol):
    """Structural interface every transformation satisfies."""

    @property
    def kind(self) -> TransformationKind: ...

    def output_type(self, parameters: Mapping[str, ParameterValue] | None = None) -> TypeTag: ...

    def transform(
        self, value: str, parameters: Mapping[str, ParameterValue] | None = None
    ) -> str: ...

    def transform_samples(
        self, values: Sequence[str], parameters: Mapping[str, ParameterValue] | None = None
    ) -> list[str]: ...

    def describe(self, parameters: Mapping[str, ParameterValue] | None = None) -> str: ...

    def validate_parameters(
        self, parameters: Mapping[str, ParameterValue] | None = None
    ) -> str | None: ...


class TransformationBase(ABC):
    """Shared behaviour for the concrete transformations."""

    @property
    @abstractmethod
    def kind(self) -> TransformationKind: ...

    @abstractmethod
    def transform(
        self, value: str, parameters: Mapping[str, ParameterValue] | None = None
    ) -> str: ...

    @abstractmethod
    def describe(self, parameters: Mapping[str, ParameterValue] | None = None) -> str: ...

    def output_type(self, parameters: Mapping[str, ParameterValue] | None = None) -> TypeTag:
        _ = parameters
        return TypeTag.STRING

    def validate_parameters(
        self, parameters: Mapping[str, ParameterValue] | None = None
    ) -> str | None:
        _ = parameters
        return None

    def transform_samples(
        self, values: Sequence[str], parameters: Mapping[str, ParameterValue] | None = None
    ) -> list[str]:
        transformed: list[str] = []
        for value in values:
            try:
                transformed.append(self.transform(value, parameters))
            except (TypeError, ValueError, OverflowError):
                # A single unusable value keeps its original text.
                transformed.append(value)
        return transformed

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value})"
