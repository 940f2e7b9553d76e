"""Result algebra used by every ``from_json`` conversion.

Conversions do not stop at the first problem. Every member of a JSON object is
converted on its own and the outcomes are folded together with :func:`merge`,
so a sender sees all of its mistakes in one response.

``merge`` keeps values and errors newest-first; :func:`reduce` reverses once at
the end so callers always get source order back.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterable, Mapping, TypeVar, Union

from pydantic import BaseModel

if TYPE_CHECKING:
    from jsonapi_documents.core.errors import ErrorTemplate, JSONAPIErrorDocument

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful conversion."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed conversion carrying every error found so far."""

    document: JSONAPIErrorDocument


@dataclass(frozen=True)
class KeyedValue:
    """A converted value tagged with the field or key it belongs to."""

    key: str
    value: Any


class Absent(enum.Enum):
    """Marker for an optional member missing from its parent object."""

    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent.ABSENT

Result = Union[Ok[Any], Err]
MemberResult = Union[Ok[Any], Err, Absent]
FromJson = Callable[[Any, "ErrorTemplate"], Result]


def merge(collectable: Result, incoming: Result) -> Result:
    """Fold ``incoming`` into ``collectable``.

    * error + error: the error documents are combined, newest first.
    * error + ok: the ok value is dropped.
    * ok + error: the result becomes the error.
    * ok + ok: the value is prepended to a list, or set on a dict or model
      under its key.
    """
    if isinstance(collectable, Err):
        if isinstance(incoming, Err):
            return Err(collectable.document.merge(incoming.document))
        return collectable
    if isinstance(incoming, Err):
        return Err(incoming.document.reverse())
    return Ok(_collect(collectable.value, incoming.value))


def _collect(collection: Any, value: Any) -> Any:
    if isinstance(collection, list):
        return [value, *collection]
    if not isinstance(value, KeyedValue):
        raise TypeError(
            f"Only keyed values can be merged into {type(collection).__name__}."
        )
    if isinstance(collection, BaseModel):
        return collection.model_copy(update={value.key: value.value})
    if isinstance(collection, Mapping):
        return {**collection, value.key: value.value}
    raise TypeError(f"Cannot merge into {type(collection).__name__}.")


def reverse(result: Result) -> Result:
    """Restore source order after a run of :func:`merge` calls."""
    if isinstance(result, Err):
        return Err(result.document.reverse())
    if isinstance(result.value, list):
        return Ok(result.value[::-1])
    return result


def reduce(results: Iterable[MemberResult], initial: Result) -> Result:
    """Merge every result into ``initial``, skipping absent members."""
    collectable = initial
    for result in results:
        if result is ABSENT:
            continue
        collectable = merge(collectable, result)
    return reverse(collectable)


def put_key(result: Result, key: str) -> Result:
    """Tag an ok value with ``key`` so it can be merged into a dict or model."""
    if isinstance(result, Err):
        return result
    if isinstance(result.value, KeyedValue):
        raise TypeError(f"Value is already keyed as {result.value.key!r}.")
    return Ok(KeyedValue(key, result.value))


def string_from_json(raw: Any, template: ErrorTemplate) -> Result:
    """Accept only JSON strings."""
    if isinstance(raw, str):
        return Ok(raw)
    return template.type_error("string")


def array_from_json(raw: Any, template: ErrorTemplate, element_from_json: FromJson) -> Result:
    """Convert every element of a JSON array, pointing errors at their index."""
    if not isinstance(raw, list):
        return template.type_error("array")
    return reduce(
        (
            element_from_json(element, template.descend(index))
            for index, element in enumerate(raw)
        ),
        Ok([]),
    )


def member_result(
    parent: Mapping[str, Any],
    template: ErrorTemplate,
    name: str,
    from_json: FromJson,
    *,
    required: bool = False,
) -> MemberResult:
    """Convert member ``name`` of ``parent`` into a keyed result.

    A missing optional member is :data:`ABSENT`, which is different from a
    member whose value is ``null``. A missing required member is reported at
    the parent's location.
    """
    if name not in parent:
        if required:
            return template.missing_error(name)
        return ABSENT
    return put_key(from_json(parent[name], template.descend(name)), name)
