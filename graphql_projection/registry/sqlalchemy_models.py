# Copyright 2026-present Kensho Technologies, LLC.
"""Model field source reading SQLAlchemy mapped classes and tables."""
from typing import Any, Dict, Mapping, Optional, Union

import sqlalchemy
from sqlalchemy import Table

from ..typedefs import ModelFieldInfo
from .model_field_registry import ModelFieldRegistry, ModelFieldSource


# Either a declaratively mapped class, or a bare table without relationships.
SQLAlchemyModel = Union[type, Table]


class SQLAlchemyModelFieldSource(ModelFieldSource):
    """Model field source over SQLAlchemy models, keyed by the GraphQL type name they back.

    For mapped classes, column attributes are scalars and relationships are relations. The related
    type name is the name under which the relationship's target class is registered in this
    source, falling back to the target class name if it is not registered. Tables have no
    relationships, so every column of a table is a scalar.
    """

    def __init__(self, type_name_to_model: Mapping[str, SQLAlchemyModel]) -> None:
        """Create a source over the given dict of type name -> mapped class or Table."""
        self._type_name_to_model = dict(type_name_to_model)
        self._class_to_type_name: Dict[Any, str] = {
            model: type_name
            for type_name, model in self._type_name_to_model.items()
            if not isinstance(model, Table)
        }

    def _get_related_type_name(self, target_class: type) -> str:
        return self._class_to_type_name.get(target_class, target_class.__name__)

    def get_model_field_info(self, type_name: str) -> Optional[ModelFieldInfo]:
        """Return the scalar and relation fields of the named model, or None if it is unknown."""
        model = self._type_name_to_model.get(type_name)
        if model is None:
            return None

        if isinstance(model, Table):
            return ModelFieldInfo(scalars=frozenset(model.columns.keys()), relations={})

        mapper = sqlalchemy.inspect(model)
        scalars = frozenset(column_property.key for column_property in mapper.column_attrs)
        relations = {
            relationship.key: self._get_related_type_name(relationship.mapper.class_)
            for relationship in mapper.relationships
        }
        return ModelFieldInfo(scalars=scalars, relations=relations)


def create_registry_from_sqlalchemy_models(
    type_name_to_model: Mapping[str, SQLAlchemyModel],
    cache: Optional[Dict[str, ModelFieldInfo]] = None,
) -> ModelFieldRegistry:
    """Return a ModelFieldRegistry backed by the given SQLAlchemy models."""
    return ModelFieldRegistry(SQLAlchemyModelFieldSource(type_name_to_model), cache=cache)
