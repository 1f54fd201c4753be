from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from ..services.type_inference import TypeTag, infer_type

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ...transformations.base import Parameters, TransformationKind


@dataclass(frozen=True, slots=True)
class CsvColumn:
    name: str
    index: int
    sample_values: tuple[str, ...] = ()
    inferred_type: TypeTag = TypeTag.STRING

    is_virtual: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Column index must be >= 0, got {self.index}")

    @classmethod
    def from_samples(cls, name: str, index: int, samples: Iterable[str]) -> CsvColumn:
        values = tuple(samples)
        return cls(
            name=name, index=index, sample_values=values, inferred_type=infer_type(values)
        )


@dataclass(frozen=True, slots=True)
class DerivedColumn(CsvColumn):
    """A virtual column produced by transforming a real CSV column.

    ``sample_values`` and ``inferred_type`` hold the transformed samples; the
    source column's own samples are left untouched.
    """

    source_column_name: str = ""
    transformation_kind: TransformationKind | None = None
    transformation_parameters: Parameters = field(default_factory=dict)

    is_virtual: ClassVar[bool] = True
