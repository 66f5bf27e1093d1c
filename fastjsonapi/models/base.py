"""Model handle protocol: the read surface the serializer depends on."""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, Union, runtime_checkable


@runtime_checkable
class ModelHandle(Protocol):
    """A record exposing its key, attribute snapshot and lazily loaded relations.

    ``model_name`` is the singular model type name (``post``, ``categorization``);
    the JSON:API resource type is derived from it.
    """

    model_name: str

    def get_primary_key(self) -> Any:
        """Return the primary key value, or None when the record has none."""
        ...

    def get_attributes(self, *names: str) -> dict[str, Any]:
        """Return a ``name -> value`` snapshot for the given attribute names."""
        ...

    async def get_relation(self, name: str) -> "RelationValue":
        """Resolve a relation: a handle or None for has-one, a sequence for has-many."""
        ...


RelationValue = Union[Optional[ModelHandle], Sequence[ModelHandle]]


def model_name_of(record: Any) -> str:
    """Return ``record.model_name``, falling back to its class name."""
    return getattr(record, "model_name", None) or type(record).__name__
