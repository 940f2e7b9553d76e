"""Relationship paths: dot-separated lists of relationship names."""

from __future__ import annotations

from typing import Union

SEPARATOR = "."

# A bare relationship name, or ``{name: include}`` for a longer path.
Include = Union[str, dict[str, "Include"]]


def relationship_path_to_include(relationship_path: str) -> Include:
    """Turn ``"a.b.c"`` into ``{"a": {"b": "c"}}``; a bare name stays a string."""
    *parents, include = relationship_path.split(SEPARATOR)
    for relationship_name in reversed(parents):
        include = {relationship_name: include}
    return include


def relationship_names(include: Include) -> list[str]:
    """Return the relationship names along ``include``, outermost first."""
    names: list[str] = []
    while isinstance(include, dict):
        ((relationship_name, include),) = include.items()
        names.append(relationship_name)
    names.append(include)
    return names


def include_to_relationship_path(include: Include) -> str:
    """Inverse of :func:`relationship_path_to_include`."""
    return SEPARATOR.join(relationship_names(include))
