"""Exceptions raised at the HTTP boundary."""

from jsonapi_documents.core.errors import JSONAPIErrorDocument


class JSONAPIDocumentError(Exception):
    """A request document was rejected; carries the errors to send back."""

    def __init__(self, document: JSONAPIErrorDocument, *, status_code: int = 422) -> None:
        super().__init__(f"{len(document.errors)} JSON:API error(s)")
        self.document = document
        self.status_code = status_code
