"""Top-level JSON:API documents."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

from jsonapi_documents.core.base import JSONAPIModel
from jsonapi_documents.core.errors import Action, ErrorTemplate, JSONAPIError, Sender
from jsonapi_documents.core.links import Link, Links
from jsonapi_documents.core.meta import Meta
from jsonapi_documents.core.results import Err, Ok, Result, array_from_json, member_result, merge, reduce
from jsonapi_documents.schemas.resource import (
    JSONAPIResource,
    ResourceLinkage,
    ResourceLinkageValue,
)

logger = logging.getLogger(__name__)

TOP_LEVEL_CHILDREN = ("data", "errors", "meta")


class JSONAPIDocument(JSONAPIModel):
    """Top-level JSON:API document.

    ``data`` and ``errors`` never appear together on the wire. Leaving ``data``
    unset is different from setting it to ``None``: the latter encodes as
    ``"data": null``.
    """

    data: ResourceLinkageValue = None
    errors: list[JSONAPIError] | None = None
    included: list[JSONAPIResource] | None = None
    links: dict[str, Link] | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def from_json(cls, raw: Any, template: ErrorTemplate) -> Result:
        if not isinstance(raw, dict):
            return template.type_error("json api document")
        results = [
            member_result(raw, template, "data", ResourceLinkage.from_json),
            member_result(
                raw,
                template,
                "errors",
                partial(array_from_json, element_from_json=JSONAPIError.from_json),
            ),
            member_result(
                raw,
                template,
                "included",
                partial(array_from_json, element_from_json=JSONAPIResource.from_json),
            ),
            member_result(raw, template, "links", Links.from_json),
            member_result(raw, template, "meta", Meta.from_json),
        ]
        initial: Result = Ok(cls.model_construct())
        if not any(child in raw for child in TOP_LEVEL_CHILDREN):
            initial = merge(initial, template.minimum_children_error(TOP_LEVEL_CHILDREN))
        return reduce(results, initial)

    def to_json(self) -> dict[str, Any]:
        """Return the wire form.

        Raises:
            ValueError: if both ``data`` and ``errors`` are set.
        """
        if "data" in self.model_fields_set and self.errors:
            raise ValueError("A document cannot contain both `data` and `errors`.")
        return super().to_json()

    def included_resource_by_id_by_type(self) -> dict[str, dict[str, JSONAPIResource]]:
        """Index ``included`` resources by type, then id."""
        resource_by_id_by_type: dict[str, dict[str, JSONAPIResource]] = {}
        for resource in self.included or []:
            if resource.id is None:
                continue
            resource_by_id_by_type.setdefault(resource.type, {})[resource.id] = resource
        return resource_by_id_by_type

    def to_params(self) -> Any:
        """Flatten ``data`` into parameter maps, resolving ``included`` resources."""
        return ResourceLinkage.to_params(self.data, self.included_resource_by_id_by_type())


def parse_document(
    raw: Any,
    *,
    action: Action | None = None,
    sender: Sender | None = None,
) -> Result:
    """Convert decoded JSON into a :class:`JSONAPIDocument`.

    Returns ``Ok(document)`` or ``Err(errors_document)`` listing every problem.
    """
    result = JSONAPIDocument.from_json(raw, ErrorTemplate.root(action=action, sender=sender))
    if isinstance(result, Err):
        logger.debug(
            "Rejected JSON:API document with %d error(s) (action=%s, sender=%s)",
            len(result.document.errors),
            action,
            sender,
        )
    return result
