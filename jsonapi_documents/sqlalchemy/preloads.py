"""Translate JSON:API includes into SQLAlchemy eager-loading options."""

from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy.inspection import inspect
from sqlalchemy.orm import joinedload, selectinload

from jsonapi_documents.core.results import Err, Ok, Result
from jsonapi_documents.fetch.includes import to_preloads
from jsonapi_documents.fetch.relationship_path import (
    Include,
    relationship_names,
    relationship_path_to_include,
)


class SQLAlchemyPreloader:
    """Build loader options for the relationships of a mapped ``model``."""

    def __init__(self, *, model: Any) -> None:
        self.model = model

    def loader(self, include: Include) -> Any | None:
        """Return the loader chain for ``include``, or None if a segment isn't a relationship.

        Collections load with ``selectinload`` and scalars with ``joinedload``.
        """
        current_model = self.model
        loader = None
        for relationship_name in relationship_names(include):
            relationship = inspect(current_model).relationships.get(relationship_name)
            if relationship is None:
                return None
            relationship_attr = getattr(current_model, relationship_name)
            if loader is None:
                if relationship.uselist:
                    loader = selectinload(relationship_attr)
                else:
                    loader = joinedload(relationship_attr)
            else:
                if relationship.uselist:
                    loader = loader.selectinload(relationship_attr)
                else:
                    loader = loader.joinedload(relationship_attr)
            current_model = relationship.mapper.class_
        return loader

    def preload_by_include(self, relationship_paths: Iterable[str]) -> dict[str, Any]:
        """Return ``{relationship_path: loader}`` for the paths a server allows.

        Raises:
            ValueError: if a path does not follow the model's relationships.
        """
        preload_by_include: dict[str, Any] = {}
        for relationship_path in relationship_paths:
            loader = self.loader(relationship_path_to_include(relationship_path))
            if loader is None:
                raise ValueError(
                    f"`{relationship_path}` is not a relationship path of {self.model.__name__}."
                )
            preload_by_include[relationship_path] = loader
        return preload_by_include

    def apply(
        self,
        statement: Any,
        includes: Iterable[Include],
        preload_by_include: dict[str, Any],
    ) -> Result:
        """Add the loaders for ``includes`` to ``statement``.

        Returns ``Ok(statement)`` or ``Err`` naming every unknown relationship path.
        """
        result = to_preloads(includes, preload_by_include)
        if isinstance(result, Err):
            return result
        return Ok(statement.options(*result.value))
