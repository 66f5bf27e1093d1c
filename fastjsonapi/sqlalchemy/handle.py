"""Model handle adapter for SQLAlchemy ORM instances."""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncAttrs, AsyncSession, async_object_session
from sqlalchemy.inspection import inspect

from fastjsonapi.utils.inflection import underscore

_LOAD_LOCK_KEY = "fastjsonapi.load_lock"


class SQLAlchemyModelHandle:
    """Expose an ORM instance through the model handle protocol.

    Unloaded relationships are fetched with ``awaitable_attrs`` when the model
    mixes in ``AsyncAttrs``, otherwise with ``AsyncSession.refresh``. Loads
    sharing a session are serialized because an ``AsyncSession`` does not
    allow concurrent operations.
    """

    def __init__(
        self,
        instance: Any,
        *,
        session: AsyncSession | None = None,
        model_name: str | None = None,
    ) -> None:
        self.instance = instance
        self.session = session
        self.model_name = (
            model_name
            or getattr(type(instance), "__jsonapi_model_name__", None)
            or underscore(type(instance).__name__)
        )
        self._local_lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.model_name}:{self.get_primary_key()!r}>"

    def get_primary_key(self) -> Any:
        state = inspect(self.instance)
        identity = state.identity
        if identity is None:
            mapper = state.mapper
            identity = tuple(
                getattr(self.instance, mapper.get_property_by_column(column).key)
                for column in mapper.primary_key
            )
        if any(value is None for value in identity):
            return None
        if len(identity) == 1:
            return identity[0]
        return ",".join(str(value) for value in identity)

    def get_attributes(self, *names: str) -> dict[str, Any]:
        return {name: getattr(self.instance, name) for name in names}

    async def get_relation(self, name: str) -> Optional["SQLAlchemyModelHandle"] | Sequence["SQLAlchemyModelHandle"]:
        relationship = inspect(type(self.instance)).relationships.get(name)
        if relationship is None:
            raise AttributeError(f"{type(self.instance).__name__} has no relationship '{name}'.")

        if name in inspect(self.instance).unloaded:
            async with self._load_lock():
                value = await self._load(name)
        else:
            value = getattr(self.instance, name)

        if relationship.uselist:
            return [self.wrap(item) for item in value or []]
        return None if value is None else self.wrap(value)

    def wrap(self, instance: Any) -> "SQLAlchemyModelHandle":
        """Wrap a related instance, sharing this handle's session."""
        return self.__class__(instance, session=self.session)

    async def _load(self, name: str) -> Any:
        if name not in inspect(self.instance).unloaded:
            return getattr(self.instance, name)
        if isinstance(self.instance, AsyncAttrs):
            return await getattr(self.instance.awaitable_attrs, name)
        session = self._session()
        if session is None:
            raise RuntimeError(
                f"Cannot load '{name}' of a detached {type(self.instance).__name__} instance."
            )
        await session.refresh(self.instance, attribute_names=[name])
        return getattr(self.instance, name)

    def _session(self) -> AsyncSession | None:
        return self.session or async_object_session(self.instance)

    def _load_lock(self) -> asyncio.Lock:
        session = self._session()
        if session is None:
            return self._local_lock
        return session.info.setdefault(_LOAD_LOCK_KEY, asyncio.Lock())
