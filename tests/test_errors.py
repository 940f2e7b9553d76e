"""Tests for error objects, error sources and error templates."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from jsonapi_documents.core.errors import (
    Action,
    ErrorTemplate,
    JSONAPIError,
    JSONAPIErrorDocument,
    JSONAPISource,
    Sender,
)
from jsonapi_documents.core.results import Ok

from .conftest import _assert_round_trip, _pointers, _template


class TestErrorTemplate:
    def test_root_points_at_document(self) -> None:
        template = ErrorTemplate.root(Action.CREATE, Sender.CLIENT)
        assert template.pointer == ""
        assert template.meta == {"action": Action.CREATE, "sender": Sender.CLIENT}

    def test_descend_keeps_context(self) -> None:
        template = ErrorTemplate.root(Action.UPDATE, Sender.SERVER).descend("data").descend(0)
        assert template.pointer == "/data/0"
        assert template.action is Action.UPDATE
        assert template.sender is Sender.SERVER

    def test_context_is_not_copied_into_errors(self) -> None:
        template = _template("/data", Action.CREATE, Sender.CLIENT)
        (error,) = template.missing_error("type").document.errors
        assert error.source == JSONAPISource(pointer="/data")
        assert error.meta == {"child": "type"}


class TestFactories:
    """Each factory builds a 422 error located at the template."""

    def test_missing(self) -> None:
        error = JSONAPIError.missing(_template("/data"), "type")
        assert error.to_json() == {
            "detail": "`/data/type` is missing",
            "meta": {"child": "type"},
            "source": {"pointer": "/data"},
            "status": "422",
            "title": "Child missing",
        }

    def test_type_mismatch(self) -> None:
        error = JSONAPIError.type_mismatch(_template("/data/attributes"), "json object")
        assert error.detail == "`/data/attributes` type is not json object"
        assert error.meta == {"type": "json object"}
        assert error.title == "Type is wrong"

    def test_conflicting(self) -> None:
        error = JSONAPIError.conflicting(_template("/errors/0/source"), ["parameter", "pointer"])
        assert error.detail == (
            "The following members conflict with each other (only one can be present):\n"
            "parameter\npointer"
        )
        assert error.meta == {"children": ["parameter", "pointer"]}
        assert error.title == "Children conflicting"

    def test_minimum_children(self) -> None:
        error = JSONAPIError.minimum_children(ErrorTemplate.root(), ["data", "errors", "meta"])
        assert error.detail == (
            "At least one of the following children of `` must be present:\ndata\nerrors\nmeta"
        )
        assert error.meta == {"children": ["data", "errors", "meta"]}
        assert error.title == "Not enough children"

    def test_unknown_relationship_path(self) -> None:
        error = JSONAPIError.unknown_relationship_path("comments.author")
        assert error.to_json() == {
            "detail": "`comments.author` is an unknown relationship path",
            "meta": {"relationship_path": "comments.author"},
            "source": {"parameter": "include"},
            "status": "422",
            "title": "Unknown relationship path",
        }


class TestSourceFromJson:
    def test_pointer(self) -> None:
        result = JSONAPISource.from_json({"pointer": "/data"}, _template("/errors/0/source"))
        assert result == Ok(JSONAPISource(pointer="/data"))

    def test_parameter(self) -> None:
        result = JSONAPISource.from_json({"parameter": "sort"}, _template("/errors/0/source"))
        assert result == Ok(JSONAPISource(parameter="sort"))

    def test_parameter_and_pointer_conflict(self) -> None:
        raw = {"parameter": "include", "pointer": "/data"}
        result = JSONAPISource.from_json(raw, _template("/errors/0/source"))
        (error,) = result.document.errors
        assert error.source == JSONAPISource(pointer="/errors/0/source")
        assert error.meta == {"children": ["parameter", "pointer"]}
        assert error.title == "Children conflicting"

    def test_parameter_must_be_string(self) -> None:
        result = JSONAPISource.from_json({"parameter": 1}, _template("/errors/0/source"))
        assert _pointers(result) == ["/errors/0/source/parameter"]

    def test_rejects_non_object(self) -> None:
        result = JSONAPISource.from_json("/data", _template("/errors/0/source"))
        (error,) = result.document.errors
        assert error.detail == "`/errors/0/source` type is not source object"


class TestErrorFromJson:
    def test_factory_errors_round_trip(self) -> None:
        template = _template("/errors/0")
        _assert_round_trip(JSONAPIError.missing(_template("/data"), "id"), template)
        _assert_round_trip(JSONAPIError.type_mismatch(_template("/meta"), "meta object"), template)
        _assert_round_trip(
            JSONAPIError.conflicting(_template("/data/source"), ["parameter", "pointer"]), template
        )
        _assert_round_trip(
            JSONAPIError.minimum_children(_template(""), ["data", "errors", "meta"]), template
        )
        _assert_round_trip(JSONAPIError.unknown_relationship_path("author"), template)

    def test_links_and_code_round_trip(self) -> None:
        error = JSONAPIError(
            code="E1",
            id="1",
            links={"about": "http://example.com/errors/E1"},
            title="Something",
        )
        _assert_round_trip(error, _template("/errors/0"))

    def test_collects_every_member_error(self) -> None:
        result = JSONAPIError.from_json({"status": 422, "title": 1, "meta": []}, _template("/errors/0"))
        assert _pointers(result) == ["/errors/0/meta", "/errors/0/status", "/errors/0/title"]

    def test_rejects_non_object(self) -> None:
        result = JSONAPIError.from_json("oops", _template("/errors/0"))
        (error,) = result.document.errors
        assert error.detail == "`/errors/0` type is not error"


class TestErrorDocument:
    def test_merge_puts_other_errors_first(self) -> None:
        first = JSONAPIErrorDocument(errors=[JSONAPIError(title="a")])
        second = JSONAPIErrorDocument(errors=[JSONAPIError(title="b"), JSONAPIError(title="c")])
        merged = first.merge(second)
        assert [error.title for error in merged.errors] == ["c", "b", "a"]
        assert [error.title for error in merged.reverse().errors] == ["a", "b", "c"]

    def test_requires_errors(self) -> None:
        result = JSONAPIErrorDocument.from_json({}, ErrorTemplate.root())
        (error,) = result.document.errors
        assert error.detail == "`/errors` is missing"
        assert error.source == JSONAPISource(pointer="")

    def test_round_trip(self) -> None:
        document = JSONAPIErrorDocument(
            errors=[
                JSONAPIError.missing(_template("/data"), "type"),
                JSONAPIError(status="404", title="Not Found"),
            ]
        )
        _assert_round_trip(document, ErrorTemplate.root())

    def test_element_errors_point_at_index(self) -> None:
        result = JSONAPIErrorDocument.from_json({"errors": [{}, 1, {"id": 2}]}, ErrorTemplate.root())
        assert _pointers(result) == ["/errors/1", "/errors/2/id"]


class TestSourceConstruction:
    """A source built in code must encode to something that parses back."""

    def test_rejects_parameter_and_pointer(self) -> None:
        with pytest.raises(ValidationError, match="both `parameter` and `pointer`"):
            JSONAPISource(parameter="q", pointer="/data")

    def test_explicit_null_counts_as_set(self) -> None:
        with pytest.raises(ValidationError):
            JSONAPISource(parameter=None, pointer="/data")

    def test_single_location_round_trips_inside_document(self) -> None:
        document = JSONAPIErrorDocument(
            errors=[JSONAPIError(title="Bad query", source=JSONAPISource(parameter="q"))]
        )
        _assert_round_trip(document, ErrorTemplate.root())

    def test_descend_keeps_single_location(self) -> None:
        assert JSONAPISource(pointer="").descend("data") == JSONAPISource(pointer="/data")
