"""Side-loading of related resources into a compound document's ``included``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Sequence

from fastjsonapi.models import model_name_of
from fastjsonapi.utils.concurrency import gather_all
from fastjsonapi.utils.inflection import resource_type

if TYPE_CHECKING:
    from fastjsonapi.models import ModelHandle
    from fastjsonapi.serializers.base import JSONAPISerializer

logger = logging.getLogger(__name__)

ResourceKey = tuple[str, str]


class IncludedResourceSet:
    """Resource objects keyed by ``(type, id)``; the first insert of a key wins."""

    def __init__(self, *, exclude: Iterable[ResourceKey] = ()) -> None:
        self._resources: dict[ResourceKey, dict[str, Any]] = {}
        self._exclude = set(exclude)

    @staticmethod
    def key_for(resource: dict[str, Any]) -> ResourceKey:
        return (resource["type"], resource["id"])

    def add(self, resource: dict[str, Any]) -> bool:
        """Insert ``resource`` unless its key is excluded or already present."""
        key = self.key_for(resource)
        if key in self._exclude or key in self._resources:
            return False
        self._resources[key] = resource
        return True

    def values(self) -> list[dict[str, Any]]:
        """Return resources in first-insertion order."""
        return list(self._resources.values())

    def __contains__(self, key: object) -> bool:
        return key in self._resources

    def __len__(self) -> int:
        return len(self._resources)


def split_include_paths(include: Iterable[str]) -> list[list[str]]:
    """Turn ``["image", "comments.author"]`` into segment lists, dropping blanks."""
    paths: list[list[str]] = []
    for path in include:
        segments = [segment.strip() for segment in path.split(".") if segment.strip()]
        if segments and segments not in paths:
            paths.append(segments)
    return paths


class InclusionWalker:
    """Resolve include paths against primary records and format what they reach.

    Each path is resolved per record concurrently; the formatted results are
    merged into the :class:`IncludedResourceSet` afterwards, in record order
    then path order, so deduplication never races with the fan-out.
    """

    def __init__(self, serializer: "JSONAPISerializer", *, domain: str | None) -> None:
        self.serializer = serializer
        self.domain = domain

    async def walk(
        self,
        records: Sequence["ModelHandle"],
        include: Iterable[str],
        included: IncludedResourceSet,
    ) -> IncludedResourceSet:
        """Fill ``included`` with the resources reachable from ``records``."""
        paths = split_include_paths(include)
        if not paths:
            return included
        results = await gather_all(
            *(
                self._walk_path(self.serializer, record, segments, "")
                for record in records
                for segments in paths
            )
        )
        for resources in results:
            for resource in resources:
                included.add(resource)
        return included

    def _nested_serializer(
        self,
        owner: "JSONAPISerializer",
        path: str,
        relation: str,
        related_type: str,
    ) -> "JSONAPISerializer | None":
        nested = self.serializer.registry.lookup(path, relation, related_type)
        if nested is None and owner is not self.serializer:
            nested = owner.registry.lookup(relation, relation, related_type)
        return nested

    async def _walk_path(
        self,
        owner: "JSONAPISerializer",
        record: "ModelHandle",
        segments: list[str],
        prefix: str,
    ) -> list[dict[str, Any]]:
        relation, rest = segments[0], segments[1:]
        path = f"{prefix}.{relation}" if prefix else relation
        kind = owner.definition.relation_kind(relation)
        if kind is None:
            logger.debug("Skipping include %r: %r is not a relation of %s", path, relation, owner.type_)
            return []

        value = await owner.resolve_relation(record, relation)
        if kind == "has_many":
            related = list(value or [])
        else:
            related = [value] if value is not None else []
        if not related:
            return []

        nested = self._nested_serializer(owner, path, relation, resource_type(model_name_of(related[0])))
        if nested is None:
            logger.warning("No serializer registered for include %r; skipping it.", path)
            return []

        formatted = await nested.format_many(related, domain=self.domain)
        if not rest:
            return formatted
        deeper = await gather_all(
            *(self._walk_path(nested, item, rest, path) for item in related)
        )
        return formatted + [resource for group in deeper for resource in group]
