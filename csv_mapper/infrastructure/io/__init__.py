"""Infrastructure I/O layer.

This package contains the CSV sampler and the error taxonomy shared by every
layer. Only the exceptions are re-exported here; import the sampler from
``csv_reader`` directly to avoid import cycles with the domain layer.
"""

from .exceptions import (
    DataParseError,
    DataSourceError,
    DataSourceNotFoundError,
    EmptyInputError,
    InvalidParametersError,
    MapperError,
    MappingConfigError,
    SchemaLoadError,
    SerializationError,
    TransformationError,
    UnsupportedTransformationError,
)

__all__ = [
    "DataParseError",
    "DataSourceError",
    "DataSourceNotFoundError",
    "EmptyInputError",
    "InvalidParametersError",
    "MapperError",
    "MappingConfigError",
    "SchemaLoadError",
    "SerializationError",
    "TransformationError",
    "UnsupportedTransformationError",
]
