"""Immutable per-type serializer configuration."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from fastjsonapi.utils.inflection import resource_type, underscore

RelationKind = Literal["has_one", "has_many"]


class SerializerDefinition(BaseModel):
    """Declared attributes and relations of one resource type."""

    model_config = ConfigDict(frozen=True)

    type_: str
    attributes: tuple[str, ...] = ()
    has_one: tuple[str, ...] = ()
    has_many: tuple[str, ...] = ()
    namespace: str = ""

    @field_validator("namespace")
    @classmethod
    def _strip_namespace(cls, value: str) -> str:
        return value.strip("/")

    @classmethod
    def from_meta(cls, meta: Any, *, namespace: str = "") -> "SerializerDefinition":
        """Build a definition from a serializer ``Meta`` class.

        ``Meta.type_`` wins; otherwise the type is derived from ``Meta.model``.
        """
        type_ = getattr(meta, "type_", "") or ""
        if not type_:
            model = getattr(meta, "model", None)
            if model is None:
                raise ValueError("Serializer Meta needs either type_ or model.")
            model_name = getattr(model, "model_name", None) or underscore(model.__name__)
            type_ = resource_type(model_name)
        return cls(
            type_=type_,
            attributes=tuple(getattr(meta, "attributes", ())),
            has_one=tuple(getattr(meta, "has_one", ())),
            has_many=tuple(getattr(meta, "has_many", ())),
            namespace=namespace or getattr(meta, "namespace", "") or "",
        )

    @property
    def relations(self) -> tuple[str, ...]:
        """All relation names, has-one first, each group in declared order."""
        return self.has_one + self.has_many

    def relation_kind(self, name: str) -> Optional[RelationKind]:
        """Return the cardinality of a declared relation, or None if undeclared."""
        if name in self.has_one:
            return "has_one"
        if name in self.has_many:
            return "has_many"
        return None
