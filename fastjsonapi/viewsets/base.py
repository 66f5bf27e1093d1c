"""Read-only viewset serving JSON:API compound documents."""

from __future__ import annotations

from typing import Any

from fastapi import Request

from fastjsonapi.serializers import JSONAPISerializer
from fastjsonapi.utils.query_params import parse_query_params


class JSONAPIViewSet:
    """Base class wiring a data layer to a serializer for GET actions."""

    serializer: JSONAPISerializer | None = None
    data_layer: Any = None
    allowed_actions: list[str] = ["list", "retrieve"]

    def get_serializer(self) -> JSONAPISerializer:
        """Return the configured serializer."""
        if self.serializer is None:
            raise ValueError("serializer must be set.")
        return self.serializer

    def get_query_params(self, request: Request) -> dict[str, Any]:
        """Parse and normalize JSON:API query parameters."""
        return parse_query_params(request.query_params)

    def get_domain(self, request: Request) -> str:
        """Return the base URL links are built from; the namespace is added by the serializer."""
        return str(request.base_url).rstrip("/")

    async def list(self, request: Request) -> dict[str, Any]:
        """Handle GET collection requests."""
        params = self.get_query_params(request)
        records = await self.data_layer.list(params=params)
        return await self.get_serializer().format(
            data=records,
            domain=self.get_domain(request),
            include=params["include"],
            links={"self": str(request.url)},
        )

    async def retrieve(
        self, request: Request, resource_id: str
    ) -> dict[str, Any]:
        """Handle GET single resource requests."""
        params = self.get_query_params(request)
        record = await self.data_layer.retrieve(resource_id=resource_id, params=params)
        return await self.get_serializer().format(
            data=record,
            domain=self.get_domain(request),
            include=params["include"],
            links={"self": str(request.url)},
        )
