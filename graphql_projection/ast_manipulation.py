# Copyright 2026-present Kensho Technologies, LLC.
from typing import Dict, List, Optional, Sequence, Union

from graphql.error import GraphQLSyntaxError
from graphql.language.ast import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    OperationDefinitionNode,
    SelectionNode,
    SelectionSetNode,
)
from graphql.language.parser import parse

from .exceptions import GraphQLParsingError


def get_ast_field_name(ast: Union[FieldNode, FragmentSpreadNode]) -> str:
    """Return the field name for the given AST node."""
    return ast.name.value


def get_human_friendly_ast_field_name(ast: SelectionNode) -> str:
    """Return a human-friendly name for the AST node, suitable for log and error messages."""
    if isinstance(ast, InlineFragmentNode):
        if ast.type_condition is None:
            return "inline fragment"
        return "type coercion to {}".format(ast.type_condition.name.value)
    elif isinstance(ast, FragmentSpreadNode):
        return "spread of fragment {}".format(ast.name.value)

    return get_ast_field_name(ast)


def get_selections(selection_set: Optional[SelectionSetNode]) -> Sequence[SelectionNode]:
    """Return the selections of the given selection set, treating a missing set as empty."""
    if selection_set is None:
        return ()
    return selection_set.selections


def safe_parse_graphql(graphql_string: str) -> DocumentNode:
    """Return an AST representation of the given GraphQL input, reraising GraphQL library errors."""
    try:
        ast = parse(graphql_string)
    except GraphQLSyntaxError as e:
        raise GraphQLParsingError(e) from e

    return ast


def get_fragment_table_from_document(
    document_ast: DocumentNode,
) -> Dict[str, FragmentDefinitionNode]:
    """Return a dict of fragment name -> fragment definition for every fragment in the document."""
    return {
        definition.name.value: definition
        for definition in document_ast.definitions
        if isinstance(definition, FragmentDefinitionNode)
    }


def get_operation_definition(
    document_ast: DocumentNode, operation_name: Optional[str] = None
) -> OperationDefinitionNode:
    """Return the named operation of the document, or its only operation if no name is given."""
    operations = [
        definition
        for definition in document_ast.definitions
        if isinstance(definition, OperationDefinitionNode)
    ]

    if operation_name is None:
        if len(operations) != 1:
            raise GraphQLParsingError(
                "Expected a GraphQL document with exactly one operation when no operation name "
                "is given, but found {}.".format(len(operations))
            )
        return operations[0]

    for operation in operations:
        if operation.name is not None and operation.name.value == operation_name:
            return operation

    raise GraphQLParsingError(
        'No operation named "{}" found in the GraphQL document.'.format(operation_name)
    )


def get_root_field_nodes(
    document_ast: DocumentNode, operation_name: Optional[str] = None
) -> List[FieldNode]:
    """Return the root fields of the selected operation, i.e. one per top-level resolver call.

    Fragment spreads and inline fragments at the root of the operation are not expanded,
    since each root field is resolved independently by its own resolver.
    """
    operation = get_operation_definition(document_ast, operation_name)
    return [
        selection
        for selection in get_selections(operation.selection_set)
        if isinstance(selection, FieldNode)
    ]
