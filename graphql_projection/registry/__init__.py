# Copyright 2026-present Kensho Technologies, LLC.
from .datamodel import DatamodelModelFieldSource, create_registry_from_datamodel  # noqa
from .graphql_schema import (  # noqa
    GraphQLSchemaModelFieldSource,
    create_registry_from_graphql_schema,
)
from .model_field_registry import ModelFieldRegistry, ModelFieldSource  # noqa
from .sqlalchemy_models import (  # noqa
    SQLAlchemyModelFieldSource,
    create_registry_from_sqlalchemy_models,
)
