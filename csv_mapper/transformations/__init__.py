"""Transformation framework.

This package provides the pluggable value transformations used to build
derived columns (token split, date reformat, category mapping) and the
registry that resolves a ``TransformationKind`` to its implementation.
"""

from .base import (
    ParameterValue,
    Parameters,
    TransformationBase,
    TransformationKind,
    TransformationPort,
    TransformationResult,
    coerce_parameters,
)
from .registry import TransformationLibrary

__all__ = [
    "ParameterValue",
    "Parameters",
    "TransformationBase",
    "TransformationKind",
    "TransformationLibrary",
    "TransformationPort",
    "TransformationResult",
    "coerce_parameters",
]
