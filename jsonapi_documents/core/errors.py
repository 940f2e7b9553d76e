"""JSON:API error objects, error documents and the templates that locate them."""

from __future__ import annotations

import enum
from functools import partial
from typing import Any, Sequence

from pydantic import Field, model_validator

from jsonapi_documents.core.base import JSONAPIModel
from jsonapi_documents.core.links import Link, Links
from jsonapi_documents.core.meta import Meta
from jsonapi_documents.core.results import (
    Err,
    Ok,
    Result,
    array_from_json,
    member_result,
    reduce,
    string_from_json,
)

UNPROCESSABLE_ENTITY = "422"


class Action(str, enum.Enum):
    """Operation that produced the document being parsed."""

    CREATE = "create"
    DELETE = "delete"
    FETCH = "fetch"
    UPDATE = "update"


class Sender(str, enum.Enum):
    """Side of the exchange that sent the document."""

    CLIENT = "client"
    SERVER = "server"


class JSONAPISource(JSONAPIModel):
    """Where a problem was found: a query ``parameter`` or a JSON ``pointer``.

    Only one of the two is ever set.
    """

    parameter: str | None = None
    pointer: str | None = None

    @model_validator(mode="after")
    def validate_single_location(self) -> JSONAPISource:
        """Validate that at most one of ``parameter`` and ``pointer`` is set."""
        if {"parameter", "pointer"} <= self.model_fields_set:
            raise ValueError("A source cannot have both `parameter` and `pointer`.")
        return self

    def descend(self, segment: str | int) -> JSONAPISource:
        """Return a source whose pointer has ``segment`` appended."""
        return self.model_copy(update={"pointer": f"{self.pointer}/{segment}"})

    @classmethod
    def from_json(cls, raw: Any, template: ErrorTemplate) -> Result:
        """Convert an error's ``source`` member."""
        if not isinstance(raw, dict):
            return template.type_error("source object")
        if "parameter" in raw and "pointer" in raw:
            return template.conflicting_error(["parameter", "pointer"])
        return reduce(
            [
                member_result(raw, template, "parameter", string_from_json),
                member_result(raw, template, "pointer", string_from_json),
            ],
            Ok(cls.model_construct()),
        )


class ErrorTemplate(JSONAPIModel):
    """Location and parsing context threaded through ``from_json`` calls.

    ``action`` and ``sender`` change which members are required. They are
    never copied into the errors built from a template.
    """

    source: JSONAPISource = Field(default_factory=lambda: JSONAPISource(pointer=""))
    action: Action | None = None
    sender: Sender | None = None

    @classmethod
    def root(cls, action: Action | None = None, sender: Sender | None = None) -> ErrorTemplate:
        """Return the template for the top of a document."""
        return cls(source=JSONAPISource(pointer=""), action=action, sender=sender)

    @property
    def pointer(self) -> str | None:
        return self.source.pointer

    @property
    def meta(self) -> dict[str, Any]:
        return {"action": self.action, "sender": self.sender}

    def descend(self, segment: str | int) -> ErrorTemplate:
        """Return a template pointing at child ``segment``."""
        return self.model_copy(update={"source": self.source.descend(segment)})

    def missing_error(self, child: str) -> Err:
        return _failure(JSONAPIError.missing(self, child))

    def type_error(self, human_type: str) -> Err:
        return _failure(JSONAPIError.type_mismatch(self, human_type))

    def conflicting_error(self, children: Sequence[str]) -> Err:
        return _failure(JSONAPIError.conflicting(self, children))

    def minimum_children_error(self, children: Sequence[str]) -> Err:
        return _failure(JSONAPIError.minimum_children(self, children))


class JSONAPIError(JSONAPIModel):
    """Error object describing one problem found while processing a document."""

    code: str | None = None
    detail: str | None = None
    id: str | None = None
    links: dict[str, Link] | None = None
    meta: dict[str, Any] | None = None
    source: JSONAPISource | None = None
    status: str | None = None
    title: str | None = None

    @classmethod
    def missing(cls, template: ErrorTemplate, child: str) -> JSONAPIError:
        """A required member ``child`` is not in the object at ``template``."""
        return cls(
            detail=f"`{template.pointer}/{child}` is missing",
            meta={"child": child},
            source=template.source,
            status=UNPROCESSABLE_ENTITY,
            title="Child missing",
        )

    @classmethod
    def type_mismatch(cls, template: ErrorTemplate, human_type: str) -> JSONAPIError:
        """The value at ``template`` is not a ``human_type``."""
        return cls(
            detail=f"`{template.pointer}` type is not {human_type}",
            meta={"type": human_type},
            source=template.source,
            status=UNPROCESSABLE_ENTITY,
            title="Type is wrong",
        )

    @classmethod
    def conflicting(cls, template: ErrorTemplate, children: Sequence[str]) -> JSONAPIError:
        """Mutually exclusive ``children`` are all present."""
        return cls(
            detail=(
                "The following members conflict with each other (only one can be present):\n"
                + "\n".join(children)
            ),
            meta={"children": list(children)},
            source=template.source,
            status=UNPROCESSABLE_ENTITY,
            title="Children conflicting",
        )

    @classmethod
    def minimum_children(cls, template: ErrorTemplate, children: Sequence[str]) -> JSONAPIError:
        """None of ``children`` is present, but at least one must be."""
        return cls(
            detail=(
                f"At least one of the following children of `{template.pointer}` must be present:\n"
                + "\n".join(children)
            ),
            meta={"children": list(children)},
            source=template.source,
            status=UNPROCESSABLE_ENTITY,
            title="Not enough children",
        )

    @classmethod
    def unknown_relationship_path(cls, relationship_path: str) -> JSONAPIError:
        """``relationship_path`` from the ``include`` parameter can't be included."""
        return cls(
            detail=f"`{relationship_path}` is an unknown relationship path",
            meta={"relationship_path": relationship_path},
            source=JSONAPISource(parameter="include"),
            status=UNPROCESSABLE_ENTITY,
            title="Unknown relationship path",
        )

    @classmethod
    def from_json(cls, raw: Any, template: ErrorTemplate) -> Result:
        """Convert one element of an ``errors`` array."""
        if not isinstance(raw, dict):
            return template.type_error("error")
        return reduce(
            [
                member_result(raw, template, "code", string_from_json),
                member_result(raw, template, "detail", string_from_json),
                member_result(raw, template, "id", string_from_json),
                member_result(raw, template, "links", Links.from_json),
                member_result(raw, template, "meta", Meta.from_json),
                member_result(raw, template, "source", JSONAPISource.from_json),
                member_result(raw, template, "status", string_from_json),
                member_result(raw, template, "title", string_from_json),
            ],
            Ok(cls.model_construct()),
        )


class JSONAPIErrorDocument(JSONAPIModel):
    """Top-level document holding only ``errors``; the failure side of parsing."""

    errors: list[JSONAPIError] = Field(default_factory=list)

    def merge(self, other: JSONAPIErrorDocument) -> JSONAPIErrorDocument:
        """Put ``other``'s errors in front, newest first.

        Call :meth:`reverse` once after the last merge to get source order.
        """
        return JSONAPIErrorDocument(errors=[*reversed(other.errors), *self.errors])

    def reverse(self) -> JSONAPIErrorDocument:
        return JSONAPIErrorDocument(errors=self.errors[::-1])

    @classmethod
    def from_json(cls, raw: Any, template: ErrorTemplate) -> Result:
        """Convert an errors document, such as one sent back by a server."""
        if not isinstance(raw, dict):
            return template.type_error("errors document")
        return reduce(
            [
                member_result(
                    raw,
                    template,
                    "errors",
                    partial(array_from_json, element_from_json=JSONAPIError.from_json),
                    required=True,
                ),
            ],
            Ok(cls.model_construct()),
        )


def _failure(error: JSONAPIError) -> Err:
    return Err(JSONAPIErrorDocument(errors=[error]))
