"""Core JSON:API conversion engine: errors, locations and the result algebra."""

from .base import JSONAPIModel, encode
from .errors import (
    Action,
    ErrorTemplate,
    JSONAPIError,
    JSONAPIErrorDocument,
    JSONAPISource,
    Sender,
)
from .links import JSONAPILink, Links
from .meta import Meta
from .results import ABSENT, Err, KeyedValue, Ok, merge, put_key, reduce, reverse

__all__ = [
    "ABSENT",
    "Action",
    "Err",
    "ErrorTemplate",
    "JSONAPIError",
    "JSONAPIErrorDocument",
    "JSONAPILink",
    "JSONAPIModel",
    "JSONAPISource",
    "KeyedValue",
    "Links",
    "Meta",
    "Ok",
    "Sender",
    "encode",
    "merge",
    "put_key",
    "reduce",
    "reverse",
]
