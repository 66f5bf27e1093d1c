"""Serializers turning model handles into JSON:API documents."""

from .base import JSONAPISerializer
from .definition import SerializerDefinition
from .registry import SerializerRegistry

__all__ = ["JSONAPISerializer", "SerializerDefinition", "SerializerRegistry"]
