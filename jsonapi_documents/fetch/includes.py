"""Parse the ``include`` query parameter and resolve it against preloads."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from jsonapi_documents.core.errors import JSONAPIError, JSONAPIErrorDocument
from jsonapi_documents.core.results import Err, Ok, Result, reduce
from jsonapi_documents.fetch.relationship_path import (
    Include,
    include_to_relationship_path,
    relationship_path_to_include,
)

logger = logging.getLogger(__name__)

INCLUDE_PARAMETER = "include"


def _split_csv(value: str) -> list[str]:
    return [item for item in (part.strip() for part in value.split(",")) if item]


def includes_from_string(comma_separated_relationship_paths: str) -> list[Include]:
    """Parse ``"author,comments.author"`` into ``["author", {"comments": "author"}]``."""
    return [
        relationship_path_to_include(relationship_path)
        for relationship_path in _split_csv(comma_separated_relationship_paths)
    ]


def includes_from_params(params: Mapping[str, Any]) -> list[Include]:
    """Return the includes requested in query ``params`` (none if absent).

    A list of values, as produced by ``urllib.parse.parse_qs``, is treated as
    one comma-separated string.

    Raises:
        TypeError: if the value is neither a string nor a list of strings.
    """
    value = params.get(INCLUDE_PARAMETER)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        value = ",".join(value)
    if not isinstance(value, str):
        raise TypeError(f"`{INCLUDE_PARAMETER}` must be a string, not {type(value).__name__}.")
    return includes_from_string(value)


def _include_to_preload(include: Include, preload_by_include: Mapping[str, Any]) -> Result:
    relationship_path = include_to_relationship_path(include)
    try:
        return Ok(preload_by_include[relationship_path])
    except KeyError:
        logger.debug("Unknown relationship path in include: %s", relationship_path)
        return Err(
            JSONAPIErrorDocument(errors=[JSONAPIError.unknown_relationship_path(relationship_path)])
        )


def to_preloads(includes: Iterable[Include], preload_by_include: Mapping[str, Any]) -> Result:
    """Look up each include's full relationship path in ``preload_by_include``.

    Returns ``Ok`` with the preloads in include order, or ``Err`` with one
    unknown-relationship-path error per include that has no entry.
    """
    return reduce(
        (_include_to_preload(include, preload_by_include) for include in includes),
        Ok([]),
    )
