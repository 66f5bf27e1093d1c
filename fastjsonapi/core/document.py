"""JSON:API document construction."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from fastjsonapi.config import get_settings

VERSION = "1.0"


class JSONAPIDocumentBuilder:
    """Build JSON:API compound documents from formatted resource objects.

    Keys are emitted in the order ``data``, ``links``, ``jsonapi``, then
    ``included`` and ``meta`` only when they carry something.
    """

    def __init__(self, *, version: str | None = None) -> None:
        self.version = version or get_settings().jsonapi_version or VERSION

    def build_single(
        self,
        resource: Mapping[str, Any] | None,
        *,
        included: Iterable[Mapping[str, Any]] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a document whose primary data is one resource object (or null)."""
        data = dict(resource) if resource is not None else None
        return self._envelope(data, included=included, links=links, meta=meta)

    def build_collection(
        self,
        resources: Iterable[Mapping[str, Any]],
        *,
        included: Iterable[Mapping[str, Any]] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a document whose primary data is an array of resource objects."""
        data = [dict(item) for item in resources]
        return self._envelope(data, included=included, links=links, meta=meta)

    def build_error(self, errors: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
        """Return a JSON:API error document from error objects."""
        return {"errors": [dict(error) for error in errors], "jsonapi": {"version": self.version}}

    def _envelope(
        self,
        data: Any,
        *,
        included: Iterable[Mapping[str, Any]] | None,
        links: Mapping[str, Any] | None,
        meta: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        document: dict[str, Any] = {
            "data": data,
            "links": dict(links or {}),
            "jsonapi": {"version": self.version},
        }
        included = [dict(item) for item in included or ()]
        if included:
            document["included"] = included
        if meta:
            document["meta"] = dict(meta)
        return document
