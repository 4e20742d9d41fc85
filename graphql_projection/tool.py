#!/usr/bin/env python
# Copyright 2026-present Kensho Technologies, LLC.
"""Utility modeled after json.tool, prints the projections of a GraphQL query read from stdin.

Used as: python -m graphql_projection.tool [--aggregate] [--variables '{"n": 3}']
"""
import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from .aggregate_extraction import get_aggregate_projection
from .ast_manipulation import (
    get_fragment_table_from_document,
    get_root_field_nodes,
    safe_parse_graphql,
)
from .options import ProjectionOptions
from .selection_parsing import get_projection


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print the projection of each root field of a GraphQL query read from stdin."
    )
    parser.add_argument(
        "--aggregate",
        action="store_true",
        help="treat root fields as aggregate or groupBy fields",
    )
    parser.add_argument(
        "--variables", default="{}", help="JSON object of variable values used by the query"
    )
    parser.add_argument("--operation-name", default=None, help="operation to compile")
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="name of a field to leave out of projections; may be repeated",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="fail on undefined fragments, unbound variables and unsupported values",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Read a GraphQL query from standard input, and output its projections as JSON."""
    parser = _make_parser()
    args = parser.parse_args(argv)
    try:
        variable_values = json.loads(args.variables)
    except json.JSONDecodeError as e:
        parser.error("--variables is not valid JSON: {}".format(e))
    if not isinstance(variable_values, dict):
        parser.error("--variables must be a JSON object of variable name -> value")

    query = " ".join(sys.stdin.readlines())

    document_ast = safe_parse_graphql(query)
    fragments = get_fragment_table_from_document(document_ast)
    options = ProjectionOptions(exclude_fields=frozenset(args.exclude), strict=args.strict)

    projections: Dict[str, Any] = {}
    for field_node in get_root_field_nodes(document_ast, args.operation_name):
        response_name = field_node.alias.value if field_node.alias else field_node.name.value
        if args.aggregate:
            projections[response_name] = get_aggregate_projection(field_node)
        else:
            projections[response_name] = get_projection(
                field_node, fragments, variable_values, options
            )

    sys.stdout.write(json.dumps(projections, indent=4))
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
