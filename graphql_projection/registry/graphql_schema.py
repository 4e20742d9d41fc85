# Copyright 2026-present Kensho Technologies, LLC.
"""Model field source reading the composite types of a GraphQL schema."""
from typing import Dict, Optional

from graphql import GraphQLSchema, get_named_type, is_leaf_type
from graphql.type.definition import GraphQLInterfaceType, GraphQLObjectType, GraphQLUnionType

from ..typedefs import ModelFieldInfo
from .model_field_registry import ModelFieldRegistry, ModelFieldSource


class GraphQLSchemaModelFieldSource(ModelFieldSource):
    """Model field source over the object, interface and union types of a GraphQL schema.

    Fields whose (unwrapped) type is a scalar or enum are scalars. Fields of object, interface
    or union type are relations to that type. A union type has no fields of its own, so only
    the fragments on its member types select anything from it. Only use this source if the
    GraphQL types mirror the stored models, since fields computed by custom resolvers look like
    stored fields here.
    """

    def __init__(self, schema: GraphQLSchema) -> None:
        """Create a source over the given schema."""
        self._schema = schema

    def get_model_field_info(self, type_name: str) -> Optional[ModelFieldInfo]:
        """Return the scalar and relation fields of the named type, or None if it is unknown."""
        graphql_type = self._schema.get_type(type_name)
        if isinstance(graphql_type, GraphQLUnionType):
            return ModelFieldInfo(scalars=frozenset(), relations={})
        if not isinstance(graphql_type, (GraphQLObjectType, GraphQLInterfaceType)):
            return None

        scalars = set()
        relations: Dict[str, str] = {}
        for field_name, field in graphql_type.fields.items():
            field_type = get_named_type(field.type)
            if is_leaf_type(field_type):
                scalars.add(field_name)
            else:
                relations[field_name] = field_type.name

        return ModelFieldInfo(scalars=frozenset(scalars), relations=relations)


def create_registry_from_graphql_schema(
    schema: GraphQLSchema, cache: Optional[Dict[str, ModelFieldInfo]] = None
) -> ModelFieldRegistry:
    """Return a ModelFieldRegistry backed by the given GraphQL schema."""
    return ModelFieldRegistry(GraphQLSchemaModelFieldSource(schema), cache=cache)
