# Copyright 2026-present Kensho Technologies, LLC.
"""Lookups of fragment definitions and variable bindings supplied alongside a query."""
import logging
from typing import Any, Optional

from graphql.language.ast import FragmentDefinitionNode
from graphql.pyutils import Undefined

from .exceptions import UnresolvedFragmentError, UnresolvedVariableError
from .typedefs import FragmentTable, VariableTable


logger = logging.getLogger(__name__)


def resolve_fragment(
    fragment_name: str, fragments: Optional[FragmentTable], strict: bool = False
) -> Optional[FragmentDefinitionNode]:
    """Return the definition of the named fragment, or None if it is not defined.

    Args:
        fragment_name: name used in the fragment spread
        fragments: fragment name -> fragment definition, for every fragment in the query document
        strict: if True, raise an error for an undefined fragment instead of returning None

    Returns:
        FragmentDefinitionNode carrying the type condition and the selection set of the fragment,
        or None if the fragment is not defined and strict mode is off.
    """
    fragment = None if fragments is None else fragments.get(fragment_name)
    if fragment is not None:
        return fragment

    if strict:
        raise UnresolvedFragmentError(
            'Fragment "{}" is spread in the query, but is not defined.'.format(fragment_name)
        )

    logger.warning(
        "Skipping spread of undefined fragment %(fragment)s.", {"fragment": fragment_name}
    )
    return None


def resolve_variable_value(
    variable_name: str, variable_values: Optional[VariableTable], strict: bool = False
) -> Any:
    """Return the runtime value bound to the variable, or Undefined if it is not bound.

    A variable explicitly bound to None resolves to None, which is distinct from Undefined.
    """
    if variable_values is not None and variable_name in variable_values:
        return variable_values[variable_name]

    if strict:
        raise UnresolvedVariableError(
            'Variable "${}" is referenced in the query, but has no value.'.format(variable_name)
        )

    # Optional variables are routinely left out by clients, so this is not worth a warning.
    logger.debug("Variable $%(variable)s has no value.", {"variable": variable_name})
    return Undefined
