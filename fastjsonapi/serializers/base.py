"""Base serializer for JSON:API compound documents."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

from fastjsonapi.config import get_settings
from fastjsonapi.core.document import JSONAPIDocumentBuilder
from fastjsonapi.core.errors import (
    JSONAPIError,
    MissingPrimaryKeyError,
    UnresolvableRelationError,
)
from fastjsonapi.core.inclusion import IncludedResourceSet, InclusionWalker
from fastjsonapi.models import ModelHandle, RelationValue, model_name_of
from fastjsonapi.utils.concurrency import gather_all
from fastjsonapi.utils.inflection import dasherize, resource_type

from .definition import SerializerDefinition
from .registry import SerializerRegistry

logger = logging.getLogger(__name__)


class JSONAPISerializer:
    """Serialize model handles into JSON:API resource objects and documents."""

    class Meta:
        """Serializer metadata (type, model, attributes and relations)."""

        type_: str = ""
        model: Any = None
        attributes: list[str] = []
        has_one: list[str] = []
        has_many: list[str] = []

    document_builder_class: type = JSONAPIDocumentBuilder

    def __init__(
        self,
        *,
        namespace: str = "",
        registry: SerializerRegistry | Mapping[str, "JSONAPISerializer"] | None = None,
        definition: SerializerDefinition | None = None,
        exclude_primary_from_included: bool | None = None,
    ) -> None:
        self.definition = definition or SerializerDefinition.from_meta(self.Meta, namespace=namespace)
        if not isinstance(registry, SerializerRegistry):
            registry = SerializerRegistry(registry)
        self.registry = registry
        if exclude_primary_from_included is None:
            exclude_primary_from_included = get_settings().exclude_primary_from_included
        self.exclude_primary_from_included = exclude_primary_from_included

    @property
    def type_(self) -> str:
        return self.definition.type_

    @property
    def namespace(self) -> str:
        return self.definition.namespace

    async def format(
        self,
        *,
        data: ModelHandle | Sequence[ModelHandle] | None,
        domain: str,
        include: Iterable[str] = (),
        links: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a compound document for one record or an ordered sequence of records.

        The shape of ``data`` in the document mirrors the input. ``included``
        is present only when ``include`` names paths that reach at least one
        record.
        """
        include = [path for path in include if path]
        builder = self.document_builder_class()
        is_collection = isinstance(data, Sequence) and not isinstance(data, (str, bytes))
        records: list[ModelHandle] = list(data) if is_collection else ([] if data is None else [data])
        logger.debug("Formatting %d %s record(s), include=%s", len(records), self.type_, include)

        primary = await self.format_many(records, domain=domain)
        included = None
        if include:
            exclude = (
                {IncludedResourceSet.key_for(resource) for resource in primary}
                if self.exclude_primary_from_included
                else ()
            )
            included_set = IncludedResourceSet(exclude=exclude)
            await InclusionWalker(self, domain=domain).walk(records, include, included_set)
            included = included_set.values()

        if is_collection:
            return builder.build_collection(primary, included=included, links=links)
        return builder.build_single(primary[0] if primary else None, included=included, links=links)

    async def format_resource(self, record: ModelHandle, *, domain: str | None = None) -> dict[str, Any]:
        """Format one record into a resource object. Never mutates ``record``."""
        resource_id = self.get_id(record)
        resource: dict[str, Any] = {"id": resource_id, "type": self.type_}
        if domain is not None:
            resource["links"] = {"self": self.resource_link(domain, self.type_, resource_id)}
        resource["attributes"] = self.get_attributes(record)
        if self.definition.relations:
            resource["relationships"] = await self.get_relationships(record, domain=domain)
        return resource

    async def format_many(
        self, records: Iterable[ModelHandle], *, domain: str | None = None
    ) -> list[dict[str, Any]]:
        """Format records concurrently; output position ``i`` matches input position ``i``."""
        return await gather_all(*(self.format_resource(record, domain=domain) for record in records))

    def get_id(self, record: ModelHandle) -> str:
        """Return the record's primary key as a string."""
        try:
            value = record.get_primary_key()
        except JSONAPIError:
            raise
        except Exception as exc:
            raise MissingPrimaryKeyError(model_name_of(record)) from exc
        if value is None or value == "":
            raise MissingPrimaryKeyError(model_name_of(record))
        return str(value)

    def get_attributes(self, record: ModelHandle) -> dict[str, Any]:
        """Return declared attributes with dasherized keys, in declared order."""
        names = self.definition.attributes
        if not names:
            return {}
        snapshot = record.get_attributes(*names)
        return {dasherize(name): snapshot.get(name) for name in names}

    async def resolve_relation(self, record: ModelHandle, relation: str) -> RelationValue:
        """Load a declared relation; has-many relations always come back as a list."""
        kind = self.definition.relation_kind(relation)
        try:
            value = await record.get_relation(relation)
        except JSONAPIError:
            raise
        except Exception as exc:
            raise UnresolvableRelationError(model_name_of(record), relation) from exc
        if kind == "has_many":
            return list(value or [])
        return value

    async def get_relationships(
        self, record: ModelHandle, *, domain: str | None = None
    ) -> dict[str, Any]:
        """Return relationship linkage for every declared relation, in declared order."""
        names = self.definition.relations
        values = await gather_all(*(self.resolve_relation(record, name) for name in names))
        return {
            name: self.relationship_object(name, value, domain=domain)
            for name, value in zip(names, values)
        }

    def relationship_object(
        self, relation: str, value: RelationValue, *, domain: str | None = None
    ) -> dict[str, Any]:
        """Build the linkage object for an already resolved relation."""
        if self.definition.relation_kind(relation) == "has_many":
            return {"data": [self.identifier(item, relation=relation) for item in value or []]}
        if value is None:
            return {"data": None}
        identifier = self.identifier(value, relation=relation)
        linkage: dict[str, Any] = {"data": identifier}
        if domain is not None:
            linkage["links"] = {
                "self": self.resource_link(domain, identifier["type"], identifier["id"])
            }
        return linkage

    def identifier(self, record: ModelHandle, *, relation: str | None = None) -> dict[str, str]:
        """Return the ``{id, type}`` resource identifier of a related record."""
        return {"id": self.get_id(record), "type": self.type_for(record, relation=relation)}

    def type_for(self, record: ModelHandle, *, relation: str | None = None) -> str:
        """Return the resource type of a related record, preferring its registered serializer."""
        derived = resource_type(model_name_of(record))
        if relation:
            nested = self.registry.lookup(relation, relation, derived)
            if nested is not None:
                return nested.type_
        return derived

    def resource_link(self, domain: str, type_: str, resource_id: str) -> str:
        """Return ``{domain}/{namespace/}{type}/{id}``."""
        prefix = f"{self.namespace}/" if self.namespace else ""
        return f"{domain.rstrip('/')}/{prefix}{type_}/{resource_id}"
