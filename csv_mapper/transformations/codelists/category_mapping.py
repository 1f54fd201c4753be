"""Category mapping transformation.

Maps free-text categorical values (``"Male"``, ``"female"``, ``"F"``) onto a
controlled set of codes. Lookups are case-insensitive unless ``CaseSensitive``
is set. A value that already equals one of the target codes is kept as that
code; every other miss falls back to ``DefaultValue``.
"""

from __future__ import annotations

from collections.abc import Mapping

from ...constants import Defaults
from ...domain.services.type_inference import TypeTag, infer_type
from ..base import (
    ParameterValue,
    TransformationBase,
    TransformationKind,
    get_bool,
    get_mapping,
    get_str,
)


class CategoryMappingTransformation(TransformationBase):
    """Transformation for mapping categorical values to standard codes.

    Example:
        >>> mapper = CategoryMappingTransformation()
        >>> params = {"Mappings": {"Male": "M", "Female": "F"}, "DefaultValue": "U"}
        >>> mapper.transform_samples(["Male", "F", "female", "n/a"], params)
        ['M', 'F', 'F', 'U']
    """

    @property
    def kind(self) -> TransformationKind:
        return TransformationKind.CATEGORY_MAPPING

    def transform(
        self, value: str, parameters: Mapping[str, ParameterValue] | None = None
    ) -> str:
        mappings = get_mapping(parameters, "Mappings")
        default = get_str(parameters, "DefaultValue", Defaults.CATEGORY_DEFAULT_VALUE)
        key = "" if value is None else value.strip()
        if get_bool(parameters, "CaseSensitive", False):
            if key in mappings:
                return mappings[key]
            # Values already expressed as a target code pass through.
            return key if key in mappings.values() else default
        lowered = key.casefold()
        for source, target in mappings.items():
            if source.strip().casefold() == lowered:
                return target
        for target in mappings.values():
            if target.casefold() == lowered:
                return target
        return default

    def output_type(self, parameters: Mapping[str, ParameterValue] | None = None) -> TypeTag:
        outputs = list(get_mapping(parameters, "Mappings").values())
        outputs.append(get_str(parameters, "DefaultValue", Defaults.CATEGORY_DEFAULT_VALUE))
        return infer_type(outputs)

    def describe(self, parameters: Mapping[str, ParameterValue] | None = None) -> str:
        mappings = get_mapping(parameters, "Mappings")
        default = get_str(parameters, "DefaultValue", Defaults.CATEGORY_DEFAULT_VALUE)
        sensitivity = (
            "case-sensitive"
            if get_bool(parameters, "CaseSensitive", False)
            else "case-insensitive"
        )
        return (
            f"Map {len(mappings)} categor{'y' if len(mappings) == 1 else 'ies'} "
            f"({sensitivity}), default '{default}'"
        )

    def validate_parameters(
        self, parameters: Mapping[str, ParameterValue] | None = None
    ) -> str | None:
        raw = (parameters or {}).get("Mappings")
        if raw is None:
            return None
        if not isinstance(raw, dict):
            return "Mappings must be a dictionary of source value to code"
        for source, target in raw.items():
            if not isinstance(source, str) or not isinstance(target, str):
                return "Mappings must map strings to strings"
        return None
