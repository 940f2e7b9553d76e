"""Fetch parameters: what a client asked to include alongside primary data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from jsonapi_documents.core.results import Result
from jsonapi_documents.fetch.includes import (
    includes_from_params,
    includes_from_string,
    to_preloads,
)
from jsonapi_documents.fetch.relationship_path import (
    Include,
    include_to_relationship_path,
    relationship_names,
    relationship_path_to_include,
)


@dataclass(frozen=True)
class Fetch:
    """Parsed fetch query parameters."""

    includes: list[Include] = field(default_factory=list)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> Fetch:
        return cls(includes=includes_from_params(params))

    def to_preloads(self, preload_by_include: Mapping[str, Any]) -> Result:
        return to_preloads(self.includes, preload_by_include)


__all__ = [
    "Fetch",
    "Include",
    "include_to_relationship_path",
    "includes_from_params",
    "includes_from_string",
    "relationship_names",
    "relationship_path_to_include",
    "to_preloads",
]
