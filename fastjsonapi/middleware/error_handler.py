"""JSON:API error handling middleware."""

from __future__ import annotations

import logging
from typing import Any

from starlette.responses import JSONResponse

from fastjsonapi.core.document import JSONAPIDocumentBuilder
from fastjsonapi.core.errors import JSONAPIError, JSONAPIErrorBuilder

logger = logging.getLogger(__name__)

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"


class ErrorHandlerMiddleware:
    """Convert exceptions into JSON:API error documents."""

    def __init__(self, app: Any) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Handle exceptions and serialize JSON:API error documents."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return
        try:
            await self.app(scope, receive, send)
        except JSONAPIError as exc:
            logger.warning("%s: %s", exc.__class__.__name__, exc.detail)
            response = self._response([exc.to_error_object()], exc.status)
            await response(scope, receive, send)
        except Exception as exc:  # noqa: BLE001 - last-resort handler
            logger.exception("Unhandled error while serving %s", scope.get("path"))
            error = JSONAPIErrorBuilder().error_object(
                status="500", title="Internal Server Error", detail=str(exc)
            )
            response = self._response([error], 500)
            await response(scope, receive, send)

    def _response(self, errors: list[dict[str, Any]], status: int) -> JSONResponse:
        return JSONResponse(
            JSONAPIDocumentBuilder().build_error(errors),
            status_code=status,
            media_type=JSONAPI_MEDIA_TYPE,
        )
