"""Core JSON:API document, inclusion and error helpers."""

from .document import VERSION, JSONAPIDocumentBuilder
from .errors import (
    JSONAPIError,
    JSONAPIErrorBuilder,
    MissingPrimaryKeyError,
    ResourceNotFoundError,
    UnresolvableRelationError,
)
from .inclusion import IncludedResourceSet, InclusionWalker

__all__ = [
    "VERSION",
    "IncludedResourceSet",
    "InclusionWalker",
    "JSONAPIDocumentBuilder",
    "JSONAPIError",
    "JSONAPIErrorBuilder",
    "MissingPrimaryKeyError",
    "ResourceNotFoundError",
    "UnresolvableRelationError",
]
