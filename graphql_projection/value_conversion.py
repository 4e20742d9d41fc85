# Copyright 2026-present Kensho Technologies, LLC.
import logging
from typing import Any, Dict, List, Optional

from graphql.language.ast import (
    BooleanValueNode,
    EnumValueNode,
    FloatValueNode,
    IntValueNode,
    ListValueNode,
    NullValueNode,
    ObjectValueNode,
    StringValueNode,
    ValueNode,
    VariableNode,
)
from graphql.pyutils import Undefined

from .exceptions import UnrecognizedValueNodeKindError
from .resolution import resolve_variable_value
from .typedefs import VariableTable


logger = logging.getLogger(__name__)


def _convert_list_value_node(
    value_node: ListValueNode, variable_values: Optional[VariableTable], strict: bool
) -> List[Any]:
    """Convert each list element, leaving out the elements that convert to Undefined."""
    result = []
    for element_node in value_node.values:
        element = convert_value_node(element_node, variable_values, strict=strict)
        if element is not Undefined:
            result.append(element)
    return result


def _convert_object_value_node(
    value_node: ObjectValueNode, variable_values: Optional[VariableTable], strict: bool
) -> Dict[str, Any]:
    """Convert each object field, leaving out the fields that convert to Undefined."""
    result = {}
    for field_node in value_node.fields:
        field_value = convert_value_node(field_node.value, variable_values, strict=strict)
        if field_value is not Undefined:
            result[field_node.name.value] = field_value
    return result


def convert_value_node(
    value_node: ValueNode, variable_values: Optional[VariableTable], strict: bool = False
) -> Any:
    """Convert a GraphQL AST value into the plain Python value it represents.

    Variable references are replaced by their runtime values. Enum values become their name
    as a string. Elements of lists and fields of objects whose values convert to Undefined
    are left out of the converted list or dict.

    Args:
        value_node: the AST value to convert, e.g. the value of a field argument
        variable_values: variable name -> runtime value, as supplied with the query
        strict: if True, raise an error for unbound variables and unrecognized value nodes
                instead of converting them to Undefined

    Returns:
        the converted value, or graphql.pyutils.Undefined if the value node is a reference
        to an unbound variable or is not a recognized kind of value node
    """
    if isinstance(value_node, VariableNode):
        return resolve_variable_value(value_node.name.value, variable_values, strict=strict)
    elif isinstance(value_node, IntValueNode):
        return int(value_node.value)
    elif isinstance(value_node, FloatValueNode):
        return float(value_node.value)
    elif isinstance(value_node, (StringValueNode, BooleanValueNode, EnumValueNode)):
        return value_node.value
    elif isinstance(value_node, NullValueNode):
        return None
    elif isinstance(value_node, ListValueNode):
        return _convert_list_value_node(value_node, variable_values, strict)
    elif isinstance(value_node, ObjectValueNode):
        return _convert_object_value_node(value_node, variable_values, strict)

    if strict:
        raise UnrecognizedValueNodeKindError(
            "Unexpected value node received: {} {}".format(type(value_node).__name__, value_node)
        )

    logger.warning(
        "Ignoring value node of unrecognized kind %(kind)s.",
        {"kind": type(value_node).__name__},
    )
    return Undefined
