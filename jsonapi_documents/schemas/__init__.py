"""Typed JSON:API document parts."""

from .document import JSONAPIDocument, parse_document
from .resource import (
    JSONAPIRelationship,
    JSONAPIResource,
    JSONAPIResourceIdentifier,
    LinkageShape,
    Relationships,
    ResourceLinkage,
)

__all__ = [
    "JSONAPIDocument",
    "JSONAPIRelationship",
    "JSONAPIResource",
    "JSONAPIResourceIdentifier",
    "LinkageShape",
    "Relationships",
    "ResourceLinkage",
    "parse_document",
]
