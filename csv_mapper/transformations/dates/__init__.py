"""Date transformations and the custom date pattern renderer."""

from .date_format import COMMON_DATE_FORMATS, DateFormatTransformation, format_name
from .date_pattern import compile_pattern, format_date

__all__ = [
    "COMMON_DATE_FORMATS",
    "DateFormatTransformation",
    "compile_pattern",
    "format_date",
    "format_name",
]
