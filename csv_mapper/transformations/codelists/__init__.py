"""Category and code list transformations."""

from .category_mapping import CategoryMappingTransformation

__all__ = ["CategoryMappingTransformation"]
