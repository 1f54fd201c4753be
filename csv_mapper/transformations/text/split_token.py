"""Token split transformation for name-like text columns."""

from __future__ import annotations

from collections.abc import Mapping

from ...constants import Defaults
from ..base import ParameterValue, TransformationBase, TransformationKind, get_str

SPLIT_KINDS = frozenset(
    {TransformationKind.SPLIT_FIRST_TOKEN, TransformationKind.SPLIT_LAST_TOKEN}
)


class SplitTokenTransformation(TransformationBase):
    """Extract the first or last segment of a value split on a literal delimiter.

    The delimiter is matched literally (no regular expressions). A delimiter
    that does not occur leaves the whole value unchanged and blank input
    yields an empty string.

    Example:
        >>> first = SplitTokenTransformation(TransformationKind.SPLIT_FIRST_TOKEN)
        >>> first.transform("Smith, John A", {"Delimiter": ", "})
        'Smith'
        >>> last = SplitTokenTransformation(TransformationKind.SPLIT_LAST_TOKEN)
        >>> last.transform("Smith, John A")
        'A'
    """

    def __init__(self, kind: TransformationKind) -> None:
        if kind not in SPLIT_KINDS:
            raise ValueError(f"Invalid split transformation kind: {kind}")
        self._kind = kind

    @property
    def kind(self) -> TransformationKind:
        return self._kind

    def transform(
        self, value: str, parameters: Mapping[str, ParameterValue] | None = None
    ) -> str:
        if value is None or not value.strip():
            return ""
        delimiter = get_str(parameters, "Delimiter", Defaults.DELIMITER)
        if not delimiter:
            return value
        parts = value.split(delimiter)
        if self._kind is TransformationKind.SPLIT_FIRST_TOKEN:
            return parts[0]
        return parts[-1]

    def describe(self, parameters: Mapping[str, ParameterValue] | None = None) -> str:
        delimiter = get_str(parameters, "Delimiter", Defaults.DELIMITER)
        display = "space" if delimiter == " " else f"'{delimiter}'"
        if self._kind is TransformationKind.SPLIT_FIRST_TOKEN:
            return f"Extract first part before {display}"
        return f"Extract last part after {display}"
