# Copyright 2026-present Kensho Technologies, LLC.
"""Commonly-used functions and data types from this package."""
from .aggregate_extraction import (  # noqa
    extract_aggregate_projection,
    get_aggregate_projection,
    get_relation_count_projection,
)
from .argument_extraction import extract_relation_arguments  # noqa
from .exceptions import (  # noqa
    DataClientNotFoundError,
    GraphQLParsingError,
    GraphQLProjectionError,
    InvalidProjectionOptionsError,
    UnknownRegistryTypeError,
    UnrecognizedValueNodeKindError,
    UnresolvedFragmentError,
    UnresolvedVariableError,
)
from .field_filtering import (  # noqa
    FieldKind,
    build_select_from_fields,
    create_field_filter,
    filter_fields_batch,
)
from .options import ProjectionOptions  # noqa
from .projection_merging import merge_projections  # noqa
from .registry import (  # noqa
    ModelFieldRegistry,
    ModelFieldSource,
    create_registry_from_datamodel,
    create_registry_from_graphql_schema,
    create_registry_from_sqlalchemy_models,
)
from .resolve_info import (  # noqa
    get_aggregate_projection_from_resolve_info,
    get_data_client_from_context,
    get_projection_from_resolve_info,
)
from .selection_parsing import get_projection, parse_selection_set  # noqa
from .typedefs import AggregateProjection, ModelFieldInfo, Projection  # noqa
from .value_conversion import convert_value_node  # noqa


__package_name__ = "graphql-projection"
__version__ = "1.0.0"
