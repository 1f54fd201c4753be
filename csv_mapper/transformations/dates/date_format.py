"""Date reformatting transformation.

Values are parsed with a locale-invariant generic parse first, then with the
known explicit input patterns, and rendered with the ``TargetFormat``
parameter. Anything that cannot be parsed is returned unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from ...constants import Defaults
from ...domain.services.type_inference import TypeTag, infer_type, parse_datetime
from ..base import ParameterValue, TransformationBase, TransformationKind, get_str
from .date_pattern import compile_pattern, format_date

COMMON_DATE_FORMATS: dict[str, str] = {
    "ISO8601": "yyyy-MM-dd",
    "US": "MM/dd/yyyy",
    "European": "dd/MM/yyyy",
    "FileFriendly": "yyyyMMdd",
    "LongDate": "MMMM d, yyyy",
    "ShortDateWithDay": "ddd, MMM d, yyyy",
}

VALIDATION_SAMPLE_DATE = datetime(2023, 1, 31)


class DateFormatTransformation(TransformationBase):
    """Reformat date values to a target pattern.

    Example:
        >>> DateFormatTransformation().transform("01/31/2023")
        '2023-01-31'
        >>> DateFormatTransformation().transform("31/01/2023", {"TargetFormat": "yyyy"})
        '2023'
        >>> DateFormatTransformation().transform("not a date")
        'not a date'
    """

    def __init__(self, default_format: str = Defaults.DATE_FORMAT) -> None:
        self.default_format = default_format

    @property
    def kind(self) -> TransformationKind:
        return TransformationKind.DATE_FORMAT

    def target_format(self, parameters: Mapping[str, ParameterValue] | None) -> str:
        return get_str(parameters, "TargetFormat", self.default_format)

    def transform(
        self, value: str, parameters: Mapping[str, ParameterValue] | None = None
    ) -> str:
        if value is None or not value.strip():
            return ""
        parsed = parse_datetime(value)
        if parsed is None:
            return value
        try:
            return format_date(parsed, self.target_format(parameters))
        except ValueError:
            return value

    def output_type(self, parameters: Mapping[str, ParameterValue] | None = None) -> TypeTag:
        try:
            sample = format_date(VALIDATION_SAMPLE_DATE, self.target_format(parameters))
        except ValueError:
            return TypeTag.STRING
        return infer_type([sample])

    def describe(self, parameters: Mapping[str, ParameterValue] | None = None) -> str:
        target = self.target_format(parameters)
        return f"Format date as {format_name(target)} ({target})"

    def validate_parameters(
        self, parameters: Mapping[str, ParameterValue] | None = None
    ) -> str | None:
        target = self.target_format(parameters)
        try:
            compile_pattern(target)
            format_date(VALIDATION_SAMPLE_DATE, target)
        except ValueError:
            return f"Invalid date format string: {target}"
        return None


def format_name(pattern: str) -> str:
    for name, value in COMMON_DATE_FORMATS.items():
        if value == pattern:
            return name
    return "Custom"
