"""JSON:API exceptions and error object builders."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any


class JSONAPIError(Exception):
    """Base error carrying the JSON:API error object fields."""

    status: int = HTTPStatus.INTERNAL_SERVER_ERROR.value
    title: str = "Internal Server Error"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.title)
        self.detail = detail

    def to_error_object(self) -> dict[str, Any]:
        """Return this error as a JSON:API error object."""
        return JSONAPIErrorBuilder().error_object(
            status=str(self.status),
            code=self.__class__.__name__,
            title=self.title,
            detail=self.detail or None,
        )


class MissingPrimaryKeyError(JSONAPIError):
    """A record handed to the serializer has no resolvable primary key."""

    title = "Missing Primary Key"

    def __init__(self, model_name: str, detail: str = "") -> None:
        self.model_name = model_name
        super().__init__(detail or f"Record of model '{model_name}' has no primary key.")


class UnresolvableRelationError(JSONAPIError):
    """Loading a declared relation failed in the model layer."""

    title = "Unresolvable Relation"

    def __init__(self, model_name: str, relation: str) -> None:
        self.model_name = model_name
        self.relation = relation
        super().__init__(f"Could not resolve relation '{relation}' of model '{model_name}'.")


class ResourceNotFoundError(JSONAPIError):
    """The requested resource does not exist."""

    status = HTTPStatus.NOT_FOUND.value
    title = "Not Found"


class JSONAPIErrorBuilder:
    """Build JSON:API error objects and error documents."""

    def error_object(
        self,
        *,
        status: str | None = None,
        code: str | None = None,
        title: str | None = None,
        detail: str | None = None,
        source: dict[str, Any] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API error object."""
        error: dict[str, Any] = {}
        if status is not None:
            error["status"] = status
        if code is not None:
            error["code"] = code
        if title is not None:
            error["title"] = title
        if detail is not None:
            error["detail"] = detail
        if source is not None:
            error["source"] = source
        if meta is not None:
            error["meta"] = meta
        if not error:
            raise ValueError("Error object must include at least one field.")
        return error
