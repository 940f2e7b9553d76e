"""Link objects and links objects."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Union

from jsonapi_documents.core.base import JSONAPIModel
from jsonapi_documents.core.meta import Meta
from jsonapi_documents.core.results import Ok, Result, member_result, put_key, reduce, string_from_json

if TYPE_CHECKING:
    from jsonapi_documents.core.errors import ErrorTemplate


class JSONAPILink(JSONAPIModel):
    """Link object: a URL plus meta-information about it."""

    href: str | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def from_json(cls, raw: Any, template: ErrorTemplate) -> Result:
        """Accept a URL string, a link object or ``null``."""
        if raw is None or isinstance(raw, str):
            return Ok(raw)
        if not isinstance(raw, dict):
            return template.type_error("link object")
        return reduce(
            [
                member_result(raw, template, "href", string_from_json),
                member_result(raw, template, "meta", Meta.from_json),
            ],
            Ok(cls.model_construct()),
        )


Link = Union[str, JSONAPILink, None]


class Links:
    """Convert the value of a ``links`` member into ``{name: link}``."""

    human_type = "links object"

    @classmethod
    def from_json(cls, raw: Any, template: ErrorTemplate) -> Result:
        if raw is None:
            return Ok(None)
        if not isinstance(raw, dict):
            return template.type_error(cls.human_type)
        return reduce(
            (
                put_key(JSONAPILink.from_json(value, template.descend(name)), name)
                for name, value in raw.items()
            ),
            Ok({}),
        )
