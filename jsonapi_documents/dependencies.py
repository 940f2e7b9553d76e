"""FastAPI dependencies that parse JSON:API request documents and fetch parameters."""

from __future__ import annotations

from fastapi import Request

from jsonapi_documents.core.errors import Action, JSONAPIError, JSONAPIErrorDocument, Sender
from jsonapi_documents.core.results import Err
from jsonapi_documents.exceptions import JSONAPIDocumentError
from jsonapi_documents.fetch import Fetch
from jsonapi_documents.schemas.document import JSONAPIDocument, parse_document


class JSONAPIBody:
    """Dependency returning the request body as a validated :class:`JSONAPIDocument`.

    Examples:
        @app.post("/articles")
        async def create_article(
            document: JSONAPIDocument = Depends(JSONAPIBody(action=Action.CREATE)),
        ) -> dict:
            ...
    """

    def __init__(self, *, action: Action) -> None:
        self.action = action

    async def __call__(self, request: Request) -> JSONAPIDocument:
        try:
            raw = await request.json()
        except ValueError as exc:
            raise JSONAPIDocumentError(
                JSONAPIErrorDocument(
                    errors=[
                        JSONAPIError(
                            detail=str(exc),
                            source={"pointer": ""},
                            status="400",
                            title="Malformed JSON",
                        )
                    ]
                ),
                status_code=400,
            ) from exc
        result = parse_document(raw, action=self.action, sender=Sender.CLIENT)
        if isinstance(result, Err):
            raise JSONAPIDocumentError(result.document)
        return result.value


def fetch_params(request: Request) -> Fetch:
    """Dependency returning the parsed fetch parameters of the request."""
    return Fetch.from_params(request.query_params)
