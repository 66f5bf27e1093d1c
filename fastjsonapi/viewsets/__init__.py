"""JSON:API viewsets."""

from .base import JSONAPIViewSet

__all__ = ["JSONAPIViewSet"]
