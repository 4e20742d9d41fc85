# Copyright 2026-present Kensho Technologies, LLC.
"""Compilation of the selection set of a query field into a nested projection.

The projection mirrors exactly what the query asks for, so that the data-access layer only loads
the requested fields and relations. For example, the selection
    {
        id
        posts(where: {published: true}, take: 5) {
            title
        }
    }
compiles into
    {
        "id": True,
        "posts": {"select": {"title": True}, "where": {"published": True}, "take": 5},
    }
"""
from dataclasses import dataclass
from functools import cached_property
import logging
from typing import Any, Dict, Optional, Sequence, Union

from graphql.language.ast import (
    FieldNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    NamedTypeNode,
    SelectionSetNode,
)

from .argument_extraction import extract_relation_arguments
from .ast_manipulation import get_ast_field_name, get_selections
from .field_filtering import FieldFilter, FieldKind, create_field_filter
from .options import DEFAULT_PROJECTION_OPTIONS, ProjectionOptions
from .resolution import resolve_fragment
from .typedefs import (
    FragmentTable,
    Projection,
    ProjectionMap,
    ProjectionNode,
    RelationArgs,
    VariableTable,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionParsingContext:
    """Everything that stays the same while walking the selections of one query field."""

    fragments: Optional[FragmentTable]
    variable_values: Optional[VariableTable]
    options: ProjectionOptions

    @cached_property
    def permissive_field_filter(self) -> FieldFilter:
        """Return the field filter to use where no model type is known."""
        return create_field_filter(exclude_fields=self.options.exclude_fields)

    def get_field_filter(self, type_name: Optional[str]) -> FieldFilter:
        """Return the field filter for the given model type, or the permissive one if None."""
        if type_name is None or self.options.registry is None:
            return self.permissive_field_filter
        return self.options.registry.get_field_filter(type_name, self.options.exclude_fields)

    def get_related_type_name(self, type_name: Optional[str], field_name: str) -> Optional[str]:
        """Return the type of the model the relation points to, if known."""
        if type_name is None or self.options.registry is None:
            return None
        return self.options.registry.get_related_type_name(type_name, field_name)


def _get_type_name_within_fragment(
    context: SelectionParsingContext,
    type_name: Optional[str],
    type_condition: Optional[NamedTypeNode],
) -> Optional[str]:
    """Return the model type to filter by inside a fragment.

    Type conditions only matter when filtering by model type in the first place. A type condition
    naming a type the registry does not describe, such as an interface implemented by several
    models, keeps the current model type.
    """
    if type_name is None or type_condition is None or context.options.registry is None:
        return type_name

    condition_type_name = type_condition.name.value
    if not context.options.registry.has_type(condition_type_name):
        logger.debug(
            "Type condition %(condition)s is not a model type, filtering by %(type)s instead.",
            {"condition": condition_type_name, "type": type_name},
        )
        return type_name
    return condition_type_name


def _make_relation_projection(
    nested_projection: ProjectionMap, relation_args: RelationArgs
) -> ProjectionNode:
    """Combine the projection of a relation's selection set with its forwarded arguments."""
    if nested_projection:
        relation_projection: Dict[str, Any] = {"select": nested_projection}
        relation_projection.update(relation_args)
        return relation_projection
    elif relation_args:
        return dict(relation_args)
    else:
        # Nothing projectable was selected below this field, so select it as a whole.
        return True


def _get_field_projection(
    context: SelectionParsingContext,
    field_ast: FieldNode,
    field_kind: FieldKind,
    type_name: Optional[str],
) -> ProjectionNode:
    """Return the projection node for a field that the field filter did not skip."""
    if field_ast.selection_set is None:
        return True

    nested_type_name = None
    if field_kind is FieldKind.Relation:
        nested_type_name = context.get_related_type_name(type_name, get_ast_field_name(field_ast))

    nested_projection = _parse_selection_set(context, field_ast.selection_set, nested_type_name)
    relation_args = extract_relation_arguments(
        field_ast, context.variable_values, strict=context.options.strict
    )
    return _make_relation_projection(nested_projection, relation_args)


def _parse_selection_set(
    context: SelectionParsingContext,
    selection_set: Optional[SelectionSetNode],
    type_name: Optional[str],
) -> ProjectionMap:
    """Return the projection map for the selection set, filtering by model type if one is given.

    Selections are processed in document order. When a field is selected more than once,
    e.g. directly and through a fragment, the last selection of it wins.
    """
    projection: ProjectionMap = {}
    field_filter = context.get_field_filter(type_name)

    for selection in get_selections(selection_set):
        if isinstance(selection, FieldNode):
            field_name = get_ast_field_name(selection)
            field_kind = field_filter(field_name)
            if field_kind is None:
                logger.debug(
                    "Leaving field %(field)s of type %(type)s out of the projection.",
                    {"field": field_name, "type": type_name},
                )
                continue

            projection[field_name] = _get_field_projection(
                context, selection, field_kind, type_name
            )
        elif isinstance(selection, FragmentSpreadNode):
            fragment = resolve_fragment(
                selection.name.value, context.fragments, strict=context.options.strict
            )
            if fragment is None:
                continue

            fragment_type_name = _get_type_name_within_fragment(
                context, type_name, fragment.type_condition
            )
            projection.update(
                _parse_selection_set(context, fragment.selection_set, fragment_type_name)
            )
        elif isinstance(selection, InlineFragmentNode):
            fragment_type_name = _get_type_name_within_fragment(
                context, type_name, selection.type_condition
            )
            projection.update(
                _parse_selection_set(context, selection.selection_set, fragment_type_name)
            )
        else:
            raise AssertionError(
                "Unexpected selection type received: {} {}".format(type(selection), selection)
            )

    return projection


# ############
# Public API #
# ############


def parse_selection_set(
    selection_set: Optional[SelectionSetNode],
    fragments: Optional[FragmentTable] = None,
    variable_values: Optional[VariableTable] = None,
    options: ProjectionOptions = DEFAULT_PROJECTION_OPTIONS,
) -> ProjectionMap:
    """Return the projection map of field name -> projection node for the selection set.

    Args:
        selection_set: selection set of the field being resolved
        fragments: fragment name -> fragment definition, for fragments spread in the selection
        variable_values: variable name -> runtime value, for variables used in field arguments
        options: options controlling the compilation, see ProjectionOptions. If schema-aware
                 filtering is enabled, the selection set is assumed to select from the model
                 named in the options.

    Returns:
        dict mapping each projected field name to either True, or to a dict describing the
        projection of a relation: its "select" key, if present, holds the projection map of the
        relation, and any other keys are arguments forwarded to the data-access layer.
        An empty dict means that no particular fields were requested.
    """
    if options.registry is not None and options.model_name is not None:
        # Surface a registry mismatch even if nothing below would have needed a lookup.
        options.registry.get_model_fields(options.model_name)

    context = SelectionParsingContext(fragments, variable_values, options)
    return _parse_selection_set(context, selection_set, options.model_name)


def get_projection(
    field_nodes: Union[FieldNode, Sequence[FieldNode]],
    fragments: Optional[FragmentTable] = None,
    variable_values: Optional[VariableTable] = None,
    options: ProjectionOptions = DEFAULT_PROJECTION_OPTIONS,
) -> Projection:
    """Return the projection to pass to the data-access layer for the given query field.

    Args:
        field_nodes: the AST nodes of the field being resolved. A field selected more than once
                     under the same response name has several nodes, whose selections are merged.
        fragments: fragment name -> fragment definition, for fragments spread in the selection
        variable_values: variable name -> runtime value, for variables used in field arguments
        options: options controlling the compilation, see ProjectionOptions

    Returns:
        dict with a "select" key holding the projection map, or an empty dict if no particular
        fields were requested, meaning that the data-access layer should load its default fields
    """
    if isinstance(field_nodes, FieldNode):
        field_nodes = [field_nodes]

    select: ProjectionMap = {}
    for field_node in field_nodes:
        select.update(
            parse_selection_set(field_node.selection_set, fragments, variable_values, options)
        )

    if not select:
        return {}
    return {"select": select}
