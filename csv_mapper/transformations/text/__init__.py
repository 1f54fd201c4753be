"""Text transformations."""

from .split_token import SplitTokenTransformation

__all__ = ["SplitTokenTransformation"]
