"""Custom date pattern rendering.

Target formats are written with the familiar ``yyyy-MM-dd`` style tokens
rather than ``strftime`` directives. Rendering is locale invariant: month and
day names are always English.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from functools import lru_cache

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

STANDARD_PATTERNS: dict[str, str] = {
    "d": "MM/dd/yyyy",
    "D": "dddd, dd MMMM yyyy",
    "f": "dddd, dd MMMM yyyy HH:mm",
    "F": "dddd, dd MMMM yyyy HH:mm:ss",
    "g": "MM/dd/yyyy HH:mm",
    "G": "MM/dd/yyyy HH:mm:ss",
    "m": "MMMM dd",
    "M": "MMMM dd",
    "o": "yyyy'-'MM'-'dd'T'HH':'mm':'ss'.'fffffff",
    "O": "yyyy'-'MM'-'dd'T'HH':'mm':'ss'.'fffffff",
    "r": "ddd, dd MMM yyyy HH':'mm':'ss 'GMT'",
    "R": "ddd, dd MMM yyyy HH':'mm':'ss 'GMT'",
    "s": "yyyy'-'MM'-'dd'T'HH':'mm':'ss",
    "t": "HH:mm",
    "T": "HH:mm:ss",
    "u": "yyyy'-'MM'-'dd HH':'mm':'ss'Z'",
    "y": "yyyy MMMM",
    "Y": "yyyy MMMM",
}

SPECIFIERS = frozenset("yMdhHmsftgFzK")
MAX_FRACTION_DIGITS = 7

Renderer = Callable[[datetime], str]


def _year(count: int) -> Renderer:
    if count <= 2:
        return lambda dt: str(dt.year % 100).zfill(count)
    return lambda dt: str(dt.year).zfill(count)


def _month(count: int) -> Renderer:
    if count == 1:
        return lambda dt: str(dt.month)
    if count == 2:
        return lambda dt: f"{dt.month:02d}"
    if count == 3:
        return lambda dt: MONTH_NAMES[dt.month - 1][:3]
    return lambda dt: MONTH_NAMES[dt.month - 1]


def _day(count: int) -> Renderer:
    if count == 1:
        return lambda dt: str(dt.day)
    if count == 2:
        return lambda dt: f"{dt.day:02d}"
    if count == 3:
        return lambda dt: DAY_NAMES[dt.weekday()][:3]
    return lambda dt: DAY_NAMES[dt.weekday()]


def _padded(getter: Callable[[datetime], int], count: int) -> Renderer:
    if count == 1:
        return lambda dt: str(getter(dt))
    return lambda dt: f"{getter(dt):02d}"


def _hour12(dt: datetime) -> int:
    return dt.hour % 12 or 12


def _fraction(count: int, *, trim: bool) -> Renderer:
    if count > MAX_FRACTION_DIGITS:
        raise ValueError(f"Too many fraction digits: {count}")

    def render(dt: datetime) -> str:
        digits = f"{dt.microsecond:06d}0"[:count]
        return digits.rstrip("0") if trim else digits

    return render


def _am_pm(count: int) -> Renderer:
    if count == 1:
        return lambda dt: "A" if dt.hour < 12 else "P"
    return lambda dt: "AM" if dt.hour < 12 else "PM"


def _renderer_for(letter: str, count: int) -> Renderer:
    match letter:
        case "y":
            return _year(count)
        case "M":
            return _month(count)
        case "d":
            return _day(count)
        case "h":
            return _padded(_hour12, count)
        case "H":
            return _padded(lambda dt: dt.hour, count)
        case "m":
            return _padded(lambda dt: dt.minute, count)
        case "s":
            return _padded(lambda dt: dt.second, count)
        case "f":
            return _fraction(count, trim=False)
        case "F":
            return _fraction(count, trim=True)
        case "t":
            return _am_pm(count)
        case "g":
            return lambda dt: "A.D."
        case _:
            raise ValueError(f"Unsupported date format specifier: {letter}")


def _literal(text: str) -> Renderer:
    return lambda dt: text


@lru_cache(maxsize=64)
def compile_pattern(pattern: str) -> tuple[Renderer, ...]:
    """Compile a custom date pattern into renderers, raising ValueError if invalid."""
    if not pattern or not pattern.strip():
        raise ValueError("Date format pattern is empty")
    if len(pattern) == 1:
        if pattern not in STANDARD_PATTERNS:
            raise ValueError(f"Unknown standard date format: {pattern}")
        return compile_pattern(STANDARD_PATTERNS[pattern])

    renderers: list[Renderer] = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch in ("'", '"'):
            end = pattern.find(ch, i + 1)
            if end == -1:
                raise ValueError(f"Unterminated quoted literal in pattern: {pattern}")
            renderers.append(_literal(pattern[i + 1 : end]))
            i = end + 1
            continue
        if ch == "\\":
            if i + 1 >= n:
                raise ValueError(f"Trailing escape character in pattern: {pattern}")
            renderers.append(_literal(pattern[i + 1]))
            i += 2
            continue
        if ch == "%":
            i += 1
            continue
        if ch in SPECIFIERS:
            j = i
            while j < n and pattern[j] == ch:
                j += 1
            renderers.append(_renderer_for(ch, j - i))
            i = j
            continue
        renderers.append(_literal(ch))
        i += 1
    return tuple(renderers)


def format_date(value: datetime, pattern: str) -> str:
    return "".join(render(value) for render in compile_pattern(pattern))
