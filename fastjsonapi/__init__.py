"""Async JSON:API compound document serialization for FastAPI and SQLAlchemy."""

from .config import JSONAPISettings, get_settings
from .core.document import VERSION, JSONAPIDocumentBuilder
from .core.errors import (
    JSONAPIError,
    JSONAPIErrorBuilder,
    MissingPrimaryKeyError,
    ResourceNotFoundError,
    UnresolvableRelationError,
)
from .models import ModelHandle
from .routers.base import JSONAPIRouter
from .serializers.base import JSONAPISerializer
from .serializers.definition import SerializerDefinition
from .serializers.registry import SerializerRegistry
from .viewsets.base import JSONAPIViewSet

__all__ = [
    "VERSION",
    "JSONAPIDocumentBuilder",
    "JSONAPIError",
    "JSONAPIErrorBuilder",
    "JSONAPIRouter",
    "JSONAPISerializer",
    "JSONAPISettings",
    "JSONAPIViewSet",
    "MissingPrimaryKeyError",
    "ModelHandle",
    "ResourceNotFoundError",
    "SerializerDefinition",
    "SerializerRegistry",
    "UnresolvableRelationError",
    "get_settings",
]
