"""JSON:API error handling middleware."""

import logging
from typing import Any

from starlette.responses import JSONResponse

from jsonapi_documents.config import JSONAPISettings, get_settings
from jsonapi_documents.core.errors import JSONAPIError, JSONAPIErrorDocument
from jsonapi_documents.exceptions import JSONAPIDocumentError

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware:
    """Convert exceptions into JSON:API error documents."""

    def __init__(self, app: Any, settings: JSONAPISettings | None = None) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app
        self.settings = settings or get_settings()

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Handle exceptions and serialize JSON:API error documents."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return
        try:
            await self.app(scope, receive, send)
        except JSONAPIDocumentError as exc:
            response = self._response(exc.document, exc.status_code)
            await response(scope, receive, send)
        except Exception as exc:
            logger.exception("Unhandled error while serving %s", scope.get("path"))
            error = JSONAPIError(status="500", title="Internal Server Error")
            if self.settings.expose_internal_errors:
                error = error.model_copy(update={"detail": str(exc)})
            response = self._response(JSONAPIErrorDocument(errors=[error]), 500)
            await response(scope, receive, send)

    def _response(self, document: JSONAPIErrorDocument, status_code: int) -> JSONResponse:
        return JSONResponse(
            document.to_json(),
            status_code=status_code,
            media_type=self.settings.media_type,
        )
