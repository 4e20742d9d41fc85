# Copyright 2026-present Kensho Technologies, LLC.
"""Entry points for use inside the resolvers of a graphql-core server."""
from typing import Any, Mapping

from graphql import GraphQLResolveInfo

from .aggregate_extraction import get_aggregate_projection
from .exceptions import DataClientNotFoundError
from .options import DEFAULT_PROJECTION_OPTIONS, ProjectionOptions
from .selection_parsing import get_projection
from .typedefs import AggregateProjection, Projection


DEFAULT_DATA_CLIENT_KEY = "prisma"


def get_projection_from_resolve_info(
    info: GraphQLResolveInfo, options: ProjectionOptions = DEFAULT_PROJECTION_OPTIONS
) -> Projection:
    """Return the projection for the field being resolved, see get_projection for details."""
    return get_projection(info.field_nodes, info.fragments, info.variable_values, options)


def get_aggregate_projection_from_resolve_info(info: GraphQLResolveInfo) -> AggregateProjection:
    """Return the aggregate projection for the aggregate or groupBy field being resolved."""
    return get_aggregate_projection(info.field_nodes)


def get_data_client_from_context(context: Any, key: str = DEFAULT_DATA_CLIENT_KEY) -> Any:
    """Return the data client stored under the given key of the resolve context.

    Args:
        context: the context value of the request, i.e. GraphQLResolveInfo.context; either a
                 mapping or an object with the client as an attribute
        key: the key or attribute name under which the client is stored

    Returns:
        the data client
    """
    if isinstance(context, Mapping):
        client = context.get(key)
    else:
        client = getattr(context, key, None)

    if client is None:
        raise DataClientNotFoundError(
            'Unable to find the data client in the GraphQL context. Please provide it under the '
            '"{}" key.'.format(key)
        )
    return client
