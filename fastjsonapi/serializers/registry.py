"""Explicit lookup of nested serializers for included relations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Mapping, Optional

if TYPE_CHECKING:
    from .base import JSONAPISerializer


class SerializerRegistry:
    """Map include paths, relation names or resource types to serializer instances."""

    def __init__(self, serializers: Mapping[str, "JSONAPISerializer"] | None = None) -> None:
        self._serializers: dict[str, "JSONAPISerializer"] = dict(serializers or {})

    def register(self, key: str, serializer: "JSONAPISerializer") -> None:
        """Register ``serializer`` under a dotted path, relation name or type."""
        self._serializers[key] = serializer

    def get(self, key: str) -> Optional["JSONAPISerializer"]:
        return self._serializers.get(key)

    def lookup(
        self,
        path: str,
        relation: str | None = None,
        resource_type: str | None = None,
    ) -> Optional["JSONAPISerializer"]:
        """Return the serializer for ``path``, falling back to relation name, then type."""
        for key in (path, relation, resource_type):
            if key and key in self._serializers:
                return self._serializers[key]
        return None

    def __contains__(self, key: object) -> bool:
        return key in self._serializers

    def __iter__(self) -> Iterator[str]:
        return iter(self._serializers)

    def __len__(self) -> int:
        return len(self._serializers)
