"""Resource objects, resource identifiers, resource linkage and relationships."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Mapping, Union

from pydantic import model_validator

from jsonapi_documents.core.base import JSONAPIModel, encode
from jsonapi_documents.core.errors import Action, Sender
from jsonapi_documents.core.links import Link, Links
from jsonapi_documents.core.meta import Meta
from jsonapi_documents.core.results import (
    ABSENT,
    Err,
    Ok,
    Result,
    array_from_json,
    member_result,
    put_key,
    reduce,
    string_from_json,
)

if TYPE_CHECKING:
    from jsonapi_documents.core.errors import ErrorTemplate

# type -> id -> resource, usually built from a document's ``included``
ResourceByIdByType = Mapping[str, Mapping[str, "JSONAPIResource"]]

RELATIONSHIP_CHILDREN = ("data", "links", "meta")


class JSONAPIResourceIdentifier(JSONAPIModel):
    """Resource identifier object: type + id."""

    type: str
    id: str
    meta: dict[str, Any] | None = None

    @classmethod
    def from_json(cls, raw: Any, template: ErrorTemplate) -> Result:
        if not isinstance(raw, dict):
            return template.type_error("resource identifier")
        return reduce(
            [
                member_result(raw, template, "id", string_from_json, required=True),
                member_result(raw, template, "meta", Meta.from_json),
                member_result(raw, template, "type", string_from_json, required=True),
            ],
            Ok(cls.model_construct()),
        )

    def to_params(self, resource_by_id_by_type: ResourceByIdByType) -> dict[str, Any]:
        """Return the included resource's attributes (if any) plus ``id``."""
        resource = resource_by_id_by_type.get(self.type, {}).get(self.id)
        params = dict(resource.attributes or {}) if resource is not None else {}
        params["id"] = self.id
        return params


def _attributes_from_json(raw: Any, template: ErrorTemplate) -> Result:
    if isinstance(raw, dict):
        return Ok(raw)
    return template.type_error("json object")


def _id_required(template: ErrorTemplate) -> bool:
    # Only a client creating a resource may leave the id to the server.
    return not (template.action == Action.CREATE and template.sender == Sender.CLIENT)


class JSONAPIResource(JSONAPIModel):
    """Resource object with attributes and relationships."""

    type: str
    id: str | None = None
    attributes: dict[str, Any] | None = None
    links: dict[str, Link] | None = None
    meta: dict[str, Any] | None = None
    relationships: dict[str, JSONAPIRelationship] | None = None

    @classmethod
    def from_json(cls, raw: Any, template: ErrorTemplate) -> Result:
        """Convert a resource object.

        ``id`` is required unless ``template`` is for a client creating the
        resource.
        """
        if not isinstance(raw, dict):
            return template.type_error("resource")
        return reduce(
            [
                member_result(raw, template, "attributes", _attributes_from_json),
                member_result(
                    raw, template, "id", string_from_json, required=_id_required(template)
                ),
                member_result(raw, template, "links", Links.from_json),
                member_result(raw, template, "meta", Meta.from_json),
                member_result(raw, template, "relationships", Relationships.from_json),
                member_result(raw, template, "type", string_from_json, required=True),
            ],
            Ok(cls.model_construct()),
        )

    def to_params(self, resource_by_id_by_type: ResourceByIdByType) -> dict[str, Any]:
        """Flatten attributes, ``id`` and relationships into one parameter map."""
        params = dict(self.attributes or {})
        if self.id is not None:
            params["id"] = self.id
        params.update(Relationships.to_params(self.relationships, resource_by_id_by_type))
        return params


ResourceLinkageValue = Union[
    JSONAPIResource,
    JSONAPIResourceIdentifier,
    list[JSONAPIResource],
    list[JSONAPIResourceIdentifier],
    None,
]


class LinkageShape(enum.Enum):
    """Raw JSON shapes a resource linkage can take."""

    EMPTY = "empty"
    EMPTY_COLLECTION = "empty collection"
    SINGLE = "single"
    COLLECTION = "collection"
    INVALID = "invalid"


def _resource_or_identifier_from_json(raw: Any, template: ErrorTemplate) -> Result:
    # Only resource objects may carry attributes or relationships.
    if isinstance(raw, dict) and ("attributes" in raw or "relationships" in raw):
        return JSONAPIResource.from_json(raw, template)
    return JSONAPIResourceIdentifier.from_json(raw, template)


class ResourceLinkage:
    """Convert the ``data`` of a document or relationship.

    * ``null`` -> ``None`` (empty to-one)
    * ``[]`` -> ``[]`` (empty to-many)
    * object -> :class:`JSONAPIResource` or :class:`JSONAPIResourceIdentifier`
    * array of objects -> a list of only one of the two
    """

    human_type = "resource linkage"

    @staticmethod
    def classify(raw: Any) -> LinkageShape:
        if raw is None:
            return LinkageShape.EMPTY
        if isinstance(raw, list):
            return LinkageShape.COLLECTION if raw else LinkageShape.EMPTY_COLLECTION
        if isinstance(raw, dict):
            return LinkageShape.SINGLE
        return LinkageShape.INVALID

    @classmethod
    def from_json(cls, raw: Any, template: ErrorTemplate) -> Result:
        shape = cls.classify(raw)
        if shape is LinkageShape.EMPTY:
            return Ok(None)
        if shape is LinkageShape.EMPTY_COLLECTION:
            return Ok([])
        if shape is LinkageShape.SINGLE:
            return _resource_or_identifier_from_json(raw, template)
        if shape is LinkageShape.COLLECTION:
            result = array_from_json(raw, template, _resource_or_identifier_from_json)
            return cls._validate_consistent_types(result, template)
        return template.type_error(cls.human_type)

    @classmethod
    def _validate_consistent_types(cls, result: Result, template: ErrorTemplate) -> Result:
        if isinstance(result, Err):
            return result
        if len({type(element) for element in result.value}) == 1:
            return result
        return template.type_error(cls.human_type)

    @staticmethod
    def to_json(linkage: ResourceLinkageValue) -> Any:
        return encode(linkage)

    @classmethod
    def to_params(
        cls, linkage: ResourceLinkageValue, resource_by_id_by_type: ResourceByIdByType
    ) -> Any:
        """Return ``None``, a parameter map, or a list of parameter maps."""
        if linkage is None:
            return None
        if isinstance(linkage, list):
            return [element.to_params(resource_by_id_by_type) for element in linkage]
        return linkage.to_params(resource_by_id_by_type)


class JSONAPIRelationship(JSONAPIModel):
    """Relationship object: at least one of ``data``, ``links`` or ``meta``."""

    data: ResourceLinkageValue = None
    links: dict[str, Link] | None = None
    meta: dict[str, Any] | None = None

    @model_validator(mode="after")
    def validate_minimum_children(self) -> JSONAPIRelationship:
        """Validate that at least one of ``data``, ``links`` or ``meta`` is set."""
        if not self.model_fields_set & set(RELATIONSHIP_CHILDREN):
            raise ValueError("A relationship needs at least one of `data`, `links` or `meta`.")
        return self

    @classmethod
    def from_json(cls, raw: Any, template: ErrorTemplate) -> Result:
        if not isinstance(raw, dict):
            return template.type_error("relationship")
        results = [
            member_result(raw, template, "data", ResourceLinkage.from_json),
            member_result(raw, template, "links", Links.from_json),
            member_result(raw, template, "meta", Meta.from_json),
        ]
        if all(result is ABSENT for result in results):
            return template.minimum_children_error(RELATIONSHIP_CHILDREN)
        return reduce(results, Ok(cls.model_construct()))

    def to_params(self, resource_by_id_by_type: ResourceByIdByType) -> Any:
        return ResourceLinkage.to_params(self.data, resource_by_id_by_type)


class Relationships:
    """Convert a relationships object into ``{name: JSONAPIRelationship}``."""

    human_type = "relationships object"

    @classmethod
    def from_json(cls, raw: Any, template: ErrorTemplate) -> Result:
        if raw is None:
            return Ok(None)
        if not isinstance(raw, dict):
            return template.type_error(cls.human_type)
        return reduce(
            (
                put_key(JSONAPIRelationship.from_json(value, template.descend(name)), name)
                for name, value in raw.items()
            ),
            Ok({}),
        )

    @staticmethod
    def to_params(
        relationships: Mapping[str, JSONAPIRelationship] | None,
        resource_by_id_by_type: ResourceByIdByType,
    ) -> dict[str, Any]:
        if relationships is None:
            return {}
        return {
            name: relationship.to_params(resource_by_id_by_type)
            for name, relationship in relationships.items()
        }


JSONAPIResource.model_rebuild()
JSONAPIRelationship.model_rebuild()
