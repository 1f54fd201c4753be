class MapperError(Exception):
    pass


class DataSourceError(MapperError):
    pass


class DataSourceNotFoundError(DataSourceError):
    pass


class DataParseError(DataSourceError):
    pass


class EmptyInputError(DataParseError):
    pass


class SchemaLoadError(DataParseError):
    pass


class TransformationError(MapperError):
    pass


class UnsupportedTransformationError(TransformationError):
    pass


class InvalidParametersError(TransformationError):
    pass


class MappingConfigError(MapperError):
    pass


class SerializationError(MappingConfigError):
    pass
