"""Semantic type inference over sampled CSV values.

Sample values are classified into the small closed set of types the mapping
engine reasons about. Tests run from the most specific type to the least
specific one and the first type that every non-blank sample satisfies wins.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from enum import StrEnum
import re
import warnings

import pandas as pd

INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
DECIMAL_PATTERN = re.compile(r"^[+-]?(?:\d{1,3}(?:,\d{3})+|\d+)?(?:\.\d+)?$")
NUMERIC_ONLY_PATTERN = re.compile(r"^[+-]?[\d.,]+$")
HAS_DIGIT_PATTERN = re.compile(r"\d")

KNOWN_DATE_PATTERNS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%Y%m%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
)


class TypeTag(StrEnum):
    INT = "int"
    DECIMAL = "decimal"
    DATETIME = "datetime"
    STRING = "string"


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_integer(value: str) -> bool:
    return bool(INTEGER_PATTERN.match(value.strip()))


def is_decimal(value: str) -> bool:
    text = value.strip()
    if not text or text in {"+", "-", "."}:
        return False
    return bool(DECIMAL_PATTERN.match(text)) and HAS_DIGIT_PATTERN.search(text) is not None


def parse_known_pattern(value: str) -> datetime | None:
    text = value.strip()
    for pattern in KNOWN_DATE_PATTERNS:
        try:
            return datetime.strptime(text, pattern)
        except ValueError:
            continue
    return None


def parse_generic(value: str) -> datetime | None:
    """Calendar-aware parse that refuses bare numbers and digit-free words.

    ``pandas.to_datetime`` happily turns ``"12"`` into the 12th of the current
    month and ``"May"`` into May of the current year; neither is a date for
    our purposes.
    """
    text = value.strip()
    if not text or not HAS_DIGIT_PATTERN.search(text):
        return None
    if NUMERIC_ONLY_PATTERN.match(text):
        return None
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            parsed = pd.to_datetime(text, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if not isinstance(parsed, pd.Timestamp) or pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def parse_datetime(value: str) -> datetime | None:
    return parse_generic(value) or parse_known_pattern(value)


def is_datetime(value: str) -> bool:
    return parse_known_pattern(value) is not None or parse_generic(value) is not None


def infer_type(samples: Iterable[str]) -> TypeTag:
    values = [value for value in samples if not is_blank(value)]
    if not values:
        return TypeTag.STRING
    if all(is_integer(value) for value in values):
        return TypeTag.INT
    if all(is_decimal(value) for value in values):
        return TypeTag.DECIMAL
    if all(is_datetime(value) for value in values):
        return TypeTag.DATETIME
    return TypeTag.STRING
