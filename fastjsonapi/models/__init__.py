"""Model capability interfaces consumed by the serializer."""

from .base import ModelHandle, RelationValue, model_name_of

__all__ = ["ModelHandle", "RelationValue", "model_name_of"]
