"""Rules deciding whether a database column may take a derived column.

An explicit ``canTransform`` flag in the schema always wins. Without one,
name and type heuristics decide. Name checks are case-sensitive substring
matches on the database column name (``PatientName`` qualifies, ``patientname``
does not).
"""

from __future__ import annotations

from ....constants import NameHints
from ....transformations.base import TransformationKind
from ...entities.schema import DatabaseColumn
from .utils import contains_any

_STRING = "string"
_INT = "int"


def _is_date_type(data_type: str) -> bool:
    return data_type == "date" or "time" in data_type


def can_transform(column: DatabaseColumn) -> bool:
    """Return True if the operator may attach a transformation to ``column``."""
    if column.can_transform is not None:
        return column.can_transform

    data_type = column.normalized_type
    name = column.name

    if data_type == _STRING and contains_any(name, NameHints.NAME_LIKE):
        return True
    if _is_date_type(data_type):
        return True
    if data_type == _STRING and contains_any(name, NameHints.CATEGORY_LIKE):
        return True
    # Derived numerics such as BirthYear from a DOB column.
    if contains_any(name, NameHints.DERIVED_NUMERIC) or (
        data_type == _INT and "Birth" in name
    ):
        return True
    if data_type == _STRING and contains_any(name, NameHints.ADDRESS_LIKE):
        return True
    return False


def available_transformations(column: DatabaseColumn) -> list[TransformationKind]:
    """List the transformation kinds worth offering for ``column``.

    Returns an empty list when the column cannot be transformed at all.
    """
    if not can_transform(column):
        return []

    data_type = column.normalized_type
    name = column.name
    kinds: list[TransformationKind] = []

    if contains_any(name, NameHints.SPLITTABLE_NAME):
        kinds.extend(
            (TransformationKind.SPLIT_FIRST_TOKEN, TransformationKind.SPLIT_LAST_TOKEN)
        )
    if _is_date_type(data_type) or (data_type == _INT and "Year" in name):
        kinds.append(TransformationKind.DATE_FORMAT)
    if contains_any(name, NameHints.CATEGORY_TARGET):
        kinds.append(TransformationKind.CATEGORY_MAPPING)
    return kinds
