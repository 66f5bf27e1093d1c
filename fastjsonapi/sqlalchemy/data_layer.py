"""SQLAlchemy data layer feeding model handles to JSON:API viewsets."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.inspection import inspect
from sqlalchemy.orm import selectinload

from fastjsonapi.core.errors import ResourceNotFoundError

from .handle import SQLAlchemyModelHandle


class SQLAlchemyDataLayer:
    """Load SQLAlchemy models for the read-only JSON:API views."""

    handle_class: type = SQLAlchemyModelHandle

    def __init__(self, *, model: Any, session: AsyncSession) -> None:
        """Store the SQLAlchemy model and session."""
        self.model = model
        self.session = session

    def wrap(self, instance: Any) -> SQLAlchemyModelHandle:
        return self.handle_class(instance, session=self.session)

    def _primary_key_value(self, resource_id: str) -> Any:
        column = inspect(self.model).primary_key[0]
        try:
            return column.type.python_type(resource_id)
        except (NotImplementedError, TypeError, ValueError):
            return resource_id

    def _eager_options(self, include: list[str]) -> list[Any]:
        """Build ``selectinload`` chains for include paths the model knows about."""
        options = []
        for path in include:
            model = self.model
            loader = None
            for name in path.split("."):
                relationship = inspect(model).relationships.get(name)
                if relationship is None:
                    break
                attribute = getattr(model, name)
                loader = selectinload(attribute) if loader is None else loader.selectinload(attribute)
                model = relationship.mapper.class_
            if loader is not None:
                options.append(loader)
        return options

    async def list(self, *, params: dict[str, Any] | None = None) -> list[SQLAlchemyModelHandle]:
        """Return handles for every row of the model, in primary key order."""
        params = params or {}
        statement = select(self.model).order_by(*inspect(self.model).primary_key)
        statement = statement.options(*self._eager_options(params.get("include", [])))
        result = await self.session.execute(statement)
        return [self.wrap(instance) for instance in result.scalars().all()]

    async def retrieve(
        self, *, resource_id: str, params: dict[str, Any] | None = None
    ) -> SQLAlchemyModelHandle:
        """Return the handle for one row, raising if it does not exist."""
        params = params or {}
        column = inspect(self.model).primary_key[0]
        statement = select(self.model).where(column == self._primary_key_value(resource_id))
        statement = statement.options(*self._eager_options(params.get("include", [])))
        result = await self.session.execute(statement)
        instance = result.scalars().first()
        if instance is None:
            raise ResourceNotFoundError(f"No {self.model.__name__} with id '{resource_id}'.")
        return self.wrap(instance)
