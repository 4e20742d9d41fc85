# Copyright 2026-present Kensho Technologies, LLC.
from typing import AbstractSet, Optional

from graphql.language.ast import FieldNode
from graphql.pyutils import Undefined

from .typedefs import RELATION_ARGUMENT_NAMES, RelationArgs, VariableTable
from .value_conversion import convert_value_node


def extract_relation_arguments(
    field_ast: FieldNode,
    variable_values: Optional[VariableTable],
    strict: bool = False,
    forwarded_argument_names: AbstractSet[str] = RELATION_ARGUMENT_NAMES,
) -> RelationArgs:
    """Return the arguments of the field that should be forwarded along with its projection.

    Only arguments whose names are in forwarded_argument_names are considered. Arguments whose
    values convert to Undefined, e.g. because they reference a variable without a value,
    are left out entirely.

    Args:
        field_ast: the field whose arguments to extract
        variable_values: variable name -> runtime value, as supplied with the query
        strict: if True, raise an error for values that cannot be converted
        forwarded_argument_names: names of the arguments to forward

    Returns:
        dict of argument name -> converted plain value
    """
    relation_args: RelationArgs = {}

    for argument in field_ast.arguments or ():
        argument_name = argument.name.value
        if argument_name not in forwarded_argument_names:
            continue

        value = convert_value_node(argument.value, variable_values, strict=strict)
        if value is not Undefined:
            relation_args[argument_name] = value

    return relation_args
