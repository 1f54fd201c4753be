"""Registry of the available transformations.

The library maps every ``TransformationKind`` to its implementation. It is
handed to the mapping engine at construction time instead of being looked up
globally.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from ..constants import Defaults, Sentinels
from ..domain.services.type_inference import infer_type
from ..infrastructure.io.exceptions import (
    InvalidParametersError,
    UnsupportedTransformationError,
)
from .base import (
    ParameterValue,
    TransformationKind,
    TransformationPort,
    TransformationResult,
)
from .codelists import CategoryMappingTransformation
from .dates import DateFormatTransformation
from .text import SplitTokenTransformation


class TransformationLibrary:
    """Lookup table from transformation kind to implementation.

    Example:
        >>> library = TransformationLibrary()
        >>> library.transform_samples(
        ...     ["2023-01-31"], TransformationKind.DATE_FORMAT, {"TargetFormat": "yyyy"}
        ... )
        ['2023']
    """

    def __init__(
        self,
        transformations: Sequence[TransformationPort] | None = None,
        *,
        default_date_format: str = Defaults.DATE_FORMAT,
    ) -> None:
        self._transformations: dict[TransformationKind, TransformationPort] = {}
        if transformations is None:
            transformations = (
                SplitTokenTransformation(TransformationKind.SPLIT_FIRST_TOKEN),
                SplitTokenTransformation(TransformationKind.SPLIT_LAST_TOKEN),
                DateFormatTransformation(default_date_format),
                CategoryMappingTransformation(),
            )
        for transformation in transformations:
            self.register(transformation)

    def register(self, transformation: TransformationPort) -> TransformationLibrary:
        self._transformations[transformation.kind] = transformation
        return self

    def get(self, kind: TransformationKind) -> TransformationPort:
        try:
            return self._transformations[kind]
        except KeyError as exc:
            raise UnsupportedTransformationError(
                f"Transformation of type {kind} is not supported."
            ) from exc

    def is_supported(self, kind: TransformationKind) -> bool:
        return kind in self._transformations

    @property
    def kinds(self) -> list[TransformationKind]:
        return list(self._transformations)

    def validate_parameters(
        self,
        kind: TransformationKind,
        parameters: Mapping[str, ParameterValue] | None = None,
    ) -> str | None:
        return self.get(kind).validate_parameters(parameters)

    def ensure_valid(
        self,
        kind: TransformationKind,
        parameters: Mapping[str, ParameterValue] | None = None,
    ) -> None:
        error = self.validate_parameters(kind, parameters)
        if error:
            raise InvalidParametersError(f"Invalid transformation parameters: {error}")

    def transform_samples(
        self,
        values: Sequence[str],
        kind: TransformationKind,
        parameters: Mapping[str, ParameterValue] | None = None,
    ) -> list[str]:
        return self.get(kind).transform_samples(values, parameters)

    def describe(
        self,
        kind: TransformationKind,
        parameters: Mapping[str, ParameterValue] | None = None,
    ) -> str:
        return self.get(kind).describe(parameters)

    def preview(
        self,
        values: Sequence[str],
        kind: TransformationKind,
        parameters: Mapping[str, ParameterValue] | None = None,
    ) -> TransformationResult:
        """Transform sample values for display, marking failures inline.

        Unlike ``transform_samples`` this never falls back silently: a value
        whose transform raises is shown as ``#ERROR: <message>`` and the
        message is collected on the result.
        """
        transformation = self.get(kind)
        outputs: list[str] = []
        errors: list[str] = []
        for value in values:
            try:
                outputs.append(transformation.transform(value, parameters))
            except Exception as exc:
                errors.append(f"{value!r}: {exc}")
                outputs.append(f"{Sentinels.PREVIEW_ERROR_PREFIX}{exc}")
        clean = [v for v in outputs if not v.startswith(Sentinels.PREVIEW_ERROR_PREFIX)]
        return TransformationResult(
            kind=kind,
            values=outputs,
            description=transformation.describe(parameters),
            inferred_type=infer_type(clean),
            errors=errors,
        )

    def __len__(self) -> int:
        return len(self._transformations)

    def __repr__(self) -> str:
        names = [kind.value for kind in self._transformations]
        return f"TransformationLibrary({names})"
