# Copyright 2026-present Kensho Technologies, LLC.
"""Compilation of aggregate selections, such as those of aggregate and groupBy queries."""
import logging
from typing import Any, Dict, Optional, Sequence, Union

from graphql.language.ast import FieldNode, SelectionSetNode

from .ast_manipulation import (
    get_ast_field_name,
    get_human_friendly_ast_field_name,
    get_selections,
)
from .typedefs import (
    AGGREGATE_FIELD_NAMES,
    COUNT_AGGREGATE_NAME,
    COUNT_ALL_FIELD_NAME,
    TYPENAME_FIELD_NAME,
    AggregateFieldMap,
    AggregateProjection,
)


logger = logging.getLogger(__name__)


def _get_direct_child_fields(selection_set: Optional[SelectionSetNode]) -> Sequence[FieldNode]:
    """Return the fields selected directly in the selection set, ignoring any fragments."""
    fields = []
    for selection in get_selections(selection_set):
        if isinstance(selection, FieldNode):
            fields.append(selection)
        else:
            logger.debug(
                "Ignoring non-field selection %(selection)s in aggregate selection.",
                {"selection": get_human_friendly_ast_field_name(selection)},
            )
    return fields


def _extract_aggregate_field_map(aggregate_ast: FieldNode) -> Union[bool, AggregateFieldMap]:
    """Return the fields selected under one aggregate, or True to aggregate over all records.

    Only _count supports aggregating over all records, either by not having a selection set
    or by selecting its _all field. For any other aggregate, an empty dict means that nothing
    is to be aggregated.
    """
    is_count = get_ast_field_name(aggregate_ast) == COUNT_AGGREGATE_NAME
    if aggregate_ast.selection_set is None:
        return is_count

    field_map: AggregateFieldMap = {}
    for nested_ast in _get_direct_child_fields(aggregate_ast.selection_set):
        nested_field_name = get_ast_field_name(nested_ast)
        if nested_field_name == TYPENAME_FIELD_NAME:
            continue

        if nested_field_name == COUNT_ALL_FIELD_NAME:
            if is_count:
                # Counting all records supersedes counting the values of particular fields.
                return True
            continue

        field_map[nested_field_name] = True

    if not field_map and is_count:
        return True
    return field_map


# ############
# Public API #
# ############


def extract_aggregate_projection(
    selection_set: Optional[SelectionSetNode],
) -> AggregateProjection:
    """Return the aggregate projection for the selection set of an aggregate or groupBy field.

    For example, the selection
        {
            _count { _all }
            _avg { age }
            groupedField
        }
    compiles into
        {"_count": True, "_avg": {"age": True}}

    Args:
        selection_set: selection set of the aggregate or groupBy field

    Returns:
        dict of aggregate name -> True or a dict of field name -> True. Aggregates which select
        nothing are left out, so no value is ever an empty dict.
    """
    result: Dict[str, Any] = {}

    for aggregate_ast in _get_direct_child_fields(selection_set):
        aggregate_name = get_ast_field_name(aggregate_ast)
        if aggregate_name not in AGGREGATE_FIELD_NAMES:
            continue

        field_map = _extract_aggregate_field_map(aggregate_ast)
        if field_map:
            result[aggregate_name] = field_map

    return result  # type: ignore[return-value]


def get_aggregate_projection(
    field_nodes: Union[FieldNode, Sequence[FieldNode]],
) -> AggregateProjection:
    """Return the aggregate projection for the AST nodes of an aggregate or groupBy field.

    A field selected more than once under the same response name has several nodes,
    whose aggregate selections are merged, with later nodes taking precedence.
    """
    if isinstance(field_nodes, FieldNode):
        field_nodes = [field_nodes]

    result: Dict[str, Any] = {}
    for field_node in field_nodes:
        result.update(extract_aggregate_projection(field_node.selection_set))
    return result  # type: ignore[return-value]


def get_relation_count_projection(
    selection_set: Optional[SelectionSetNode],
) -> Dict[str, Dict[str, Dict[str, bool]]]:
    """Return the projection counting related records, for a _count field in the selection set.

    Unlike in aggregate queries, a _count field selected alongside the fields of a model counts
    the records of each selected relation, e.g. the selection
        {
            id
            _count { posts comments }
        }
    yields {"_count": {"select": {"posts": True, "comments": True}}}. This is meant to be merged
    into the projection of the model, which never contains _count itself.

    Returns:
        the relation count projection, or an empty dict if no relation counts were selected
    """
    count_select: Dict[str, bool] = {}
    for selection in _get_direct_child_fields(selection_set):
        if get_ast_field_name(selection) != COUNT_AGGREGATE_NAME:
            continue

        for nested_ast in _get_direct_child_fields(selection.selection_set):
            nested_field_name = get_ast_field_name(nested_ast)
            if nested_field_name != TYPENAME_FIELD_NAME:
                count_select[nested_field_name] = True

    if not count_select:
        return {}
    return {COUNT_AGGREGATE_NAME: {"select": count_select}}
