"""Parse, validate and re-encode JSON:API v1.0 documents."""

from .core.errors import (
    Action,
    ErrorTemplate,
    JSONAPIError,
    JSONAPIErrorDocument,
    JSONAPISource,
    Sender,
)
from .core.links import JSONAPILink
from .core.results import Err, Ok
from .fetch import Fetch
from .schemas.document import JSONAPIDocument, parse_document
from .schemas.resource import (
    JSONAPIRelationship,
    JSONAPIResource,
    JSONAPIResourceIdentifier,
    ResourceLinkage,
)

__all__ = [
    "Action",
    "Err",
    "ErrorTemplate",
    "Fetch",
    "JSONAPIDocument",
    "JSONAPIError",
    "JSONAPIErrorDocument",
    "JSONAPILink",
    "JSONAPIRelationship",
    "JSONAPIResource",
    "JSONAPIResourceIdentifier",
    "JSONAPISource",
    "Ok",
    "ResourceLinkage",
    "Sender",
    "parse_document",
]
