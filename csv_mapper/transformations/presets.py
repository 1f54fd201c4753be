"""Ready-made parameter sets for the transformations operators reach for most."""

from __future__ import annotations

from collections.abc import Callable

from .base import Parameters, TransformationKind

STANDARD_GENDER_MAPPINGS: dict[str, str] = {
    "M": "M",
    "Male": "M",
    "Man": "M",
    "Boy": "M",
    "F": "F",
    "Female": "F",
    "Woman": "F",
    "Girl": "F",
    "O": "O",
    "Other": "O",
    "Non-binary": "O",
    "U": "U",
    "Unknown": "U",
    "Not Specified": "U",
    "": "U",
}


def first_name() -> Parameters:
    return {"Delimiter": " "}


def last_name() -> Parameters:
    return {"Delimiter": " "}


def iso_date() -> Parameters:
    return {"TargetFormat": "yyyy-MM-dd"}


def extract_year() -> Parameters:
    return {"TargetFormat": "yyyy"}


def standard_gender() -> Parameters:
    return {
        "Mappings": dict(STANDARD_GENDER_MAPPINGS),
        "CaseSensitive": False,
        "DefaultValue": "U",
    }


PRESETS: dict[str, tuple[TransformationKind, Callable[[], Parameters]]] = {
    "first-name": (TransformationKind.SPLIT_FIRST_TOKEN, first_name),
    "last-name": (TransformationKind.SPLIT_LAST_TOKEN, last_name),
    "iso-date": (TransformationKind.DATE_FORMAT, iso_date),
    "year": (TransformationKind.DATE_FORMAT, extract_year),
    "gender": (TransformationKind.CATEGORY_MAPPING, standard_gender),
}


def resolve(name: str) -> tuple[TransformationKind, Parameters]:
    """Return the kind and a fresh parameter set for preset ``name``.

    Raises:
        KeyError: If no preset has that name
    """
    kind, factory = PRESETS[name]
    return kind, factory()
