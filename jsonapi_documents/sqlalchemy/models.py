"""Build transient SQLAlchemy model instances from parsed resources."""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy.inspection import inspect
from sqlalchemy.orm import MANYTOONE

from jsonapi_documents.schemas.resource import (
    JSONAPIResource,
    JSONAPIResourceIdentifier,
    ResourceByIdByType,
    ResourceLinkageValue,
)


def to_model(
    linkage: ResourceLinkageValue,
    resource_by_id_by_type: ResourceByIdByType,
    model_by_type: Mapping[str, Any],
) -> Any:
    """Convert resource linkage into model instances.

    ``None`` stays ``None`` and lists map element-wise. Column attributes come
    from ``to_params``. Relationships of full resources become related
    instances; for many-to-one relationships the local foreign key is copied
    from the related instance as well.
    """
    if linkage is None:
        return None
    if isinstance(linkage, list):
        return [to_model(element, resource_by_id_by_type, model_by_type) for element in linkage]
    return _instance(linkage, resource_by_id_by_type, model_by_type)


def _instance(
    resource: JSONAPIResource | JSONAPIResourceIdentifier,
    resource_by_id_by_type: ResourceByIdByType,
    model_by_type: Mapping[str, Any],
) -> Any:
    model = model_by_type[resource.type]
    mapper = inspect(model)
    column_keys = {attr.key for attr in mapper.column_attrs}
    params = resource.to_params(resource_by_id_by_type)
    instance = model(**{key: value for key, value in params.items() if key in column_keys})

    if not isinstance(resource, JSONAPIResource):
        return instance

    for name, relationship in (resource.relationships or {}).items():
        prop = mapper.relationships.get(name)
        if prop is None:
            continue
        related = to_model(relationship.data, resource_by_id_by_type, model_by_type)
        if prop.uselist and related is None:
            related = []
        setattr(instance, name, related)
        if prop.direction is MANYTOONE and related is not None:
            related_mapper = inspect(type(related))
            for local_column, remote_column in prop.local_remote_pairs:
                local_key = mapper.get_property_by_column(local_column).key
                remote_key = related_mapper.get_property_by_column(remote_column).key
                setattr(instance, local_key, getattr(related, remote_key))
    return instance
