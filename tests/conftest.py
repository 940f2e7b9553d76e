"""Shared pytest fixtures and helpers for JSON:API conversion tests."""

from __future__ import annotations

import json
from typing import Any

import pytest

from jsonapi_documents.core.errors import Action, ErrorTemplate, JSONAPISource, Sender
from jsonapi_documents.core.results import Ok


def _template(pointer: str, action: Action | None = None, sender: Sender | None = None) -> ErrorTemplate:
    return ErrorTemplate(source=JSONAPISource(pointer=pointer), action=action, sender=sender)


def _pointers(result: Any) -> list[str | None]:
    return [error.source.pointer for error in result.document.errors]


def _assert_round_trip(value: Any, template: ErrorTemplate) -> None:
    decoded = json.loads(json.dumps(value.to_json()))
    assert type(value).from_json(decoded, template) == Ok(value)


@pytest.fixture
def root_template() -> ErrorTemplate:
    """Template for the top of a document with no parsing context."""
    return ErrorTemplate.root()


@pytest.fixture
def client_create_template() -> ErrorTemplate:
    """Template for ``/data`` of a document a client sent to create a resource."""
    return _template("/data", Action.CREATE, Sender.CLIENT)


@pytest.fixture
def client_update_template() -> ErrorTemplate:
    """Template for ``/data`` of a document a client sent to update a resource."""
    return _template("/data", Action.UPDATE, Sender.CLIENT)
