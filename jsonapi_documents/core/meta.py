"""Meta objects: free-form members that pass through unchanged."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jsonapi_documents.core.results import Ok, Result

if TYPE_CHECKING:
    from jsonapi_documents.core.errors import ErrorTemplate


class Meta:
    """Convert the value of a ``meta`` member."""

    human_type = "meta object"

    @classmethod
    def from_json(cls, raw: Any, template: ErrorTemplate) -> Result:
        """Accept a JSON object (kept as-is) or ``null``."""
        if raw is None or isinstance(raw, dict):
            return Ok(raw)
        return template.type_error(cls.human_type)
