"""Base model shared by every JSON:API document part."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


@runtime_checkable
class JSONEncodable(Protocol):
    """Anything that can render itself as decoded JSON."""

    def to_json(self) -> Any:
        """Return the wire representation."""
        ...


class JSONAPIModel(BaseModel):
    """Immutable document part whose unset fields are omitted on encoding.

    A field can be absent (never set), explicitly ``null`` (set to ``None``) or
    present. Only set fields are encoded, so ``{"data": null}`` and ``{}``
    stay distinct through a round trip.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_json(self) -> dict[str, Any]:
        """Return the JSON:API wire form with unset members left out."""
        return self.model_dump(mode="json", exclude_unset=True)

    def __eq__(self, other: object) -> bool:
        equal = super().__eq__(other)
        if equal is not True:
            return equal
        return self.model_fields_set == other.model_fields_set  # type: ignore[attr-defined]


def encode(value: Any) -> Any:
    """Encode a document part, a list of parts, or a plain JSON value."""
    if isinstance(value, JSONEncodable):
        return value.to_json()
    if isinstance(value, list):
        return [encode(element) for element in value]
    return value
