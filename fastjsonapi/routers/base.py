"""Router registering read-only JSON:API routes for viewsets."""

from __future__ import annotations

from typing import Any, Callable

from fastapi import APIRouter, Depends, Request

from fastjsonapi.utils.routing import get_dynamic_segments, to_fastapi_path


class JSONAPIRouter(APIRouter):
    """APIRouter wrapper for JSON:API viewsets."""

    def register_viewset(
        self,
        prefix: str,
        viewset: Any | Callable[..., Any],
        *,
        dependencies: list[Any] | None = None,
    ) -> None:
        """Register the collection and detail GET routes of a viewset.

        Args:
            prefix: URL prefix for the routes (e.g. "/posts"). ``:name``
                segments are accepted and turned into path parameters.
            viewset: Viewset instance, or a factory resolved per request
                through FastAPI dependency injection.
            dependencies: Additional FastAPI dependencies for every route.
        """
        collection_path = to_fastapi_path(prefix)
        detail_path = to_fastapi_path(f"{prefix.rstrip('/')}/:resource_id")
        segments = get_dynamic_segments(f"{prefix}/:resource_id")
        if len(segments) != len(set(segments)):
            raise ValueError(f"Duplicate path parameters in '{prefix}'.")

        is_factory = (
            callable(viewset)
            and not isinstance(viewset, type)
            and not hasattr(viewset, "list")
            and not hasattr(viewset, "retrieve")
        )

        if is_factory:
            allowed_actions = getattr(
                viewset.__annotations__.get("return", None), "allowed_actions", ["list", "retrieve"]
            )

            async def list_wrapper(request: Request, viewset_instance: Any = Depends(viewset)) -> Any:
                return await viewset_instance.list(request)

            async def retrieve_wrapper(
                request: Request,
                resource_id: str,
                viewset_instance: Any = Depends(viewset),
            ) -> Any:
                return await viewset_instance.retrieve(request, resource_id)

            list_endpoint, retrieve_endpoint = list_wrapper, retrieve_wrapper
        else:
            allowed_actions = getattr(viewset, "allowed_actions", ["list", "retrieve"])
            list_endpoint, retrieve_endpoint = viewset.list, viewset.retrieve

        if "list" in allowed_actions:
            self.add_jsonapi_route(
                collection_path,
                list_endpoint,
                name=f"{prefix}_list",
                dependencies=dependencies,
            )
        if "retrieve" in allowed_actions:
            self.add_jsonapi_route(
                detail_path,
                retrieve_endpoint,
                name=f"{prefix}_retrieve",
                dependencies=dependencies,
            )

    def add_jsonapi_route(
        self,
        path: str,
        endpoint: Callable[..., Any],
        *,
        name: str | None = None,
        dependencies: list[Any] | None = None,
    ) -> None:
        """Add a GET route with JSON:API defaults."""
        self.add_api_route(
            path,
            endpoint,
            methods=["GET"],
            name=name,
            dependencies=dependencies if dependencies else None,
        )
