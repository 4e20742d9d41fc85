# Copyright 2026-present Kensho Technologies, LLC.
class GraphQLProjectionError(Exception):
    """Generic error when compiling a GraphQL selection into a projection."""


class GraphQLParsingError(GraphQLProjectionError):
    """Exception raised when the provided GraphQL string could not be parsed."""


class InvalidProjectionOptionsError(GraphQLProjectionError):
    """Exception raised when the options passed to the compiler are inconsistent.

    For example:
    - a model field registry was provided without the name of the root model, or vice versa.
    """


class UnknownRegistryTypeError(GraphQLProjectionError):
    """Exception raised when schema-aware filtering is requested for a type the registry lacks.

    This is always fatal: it indicates that the registry and the GraphQL schema disagree,
    rather than that the request itself is malformed.
    """


class UnresolvedFragmentError(GraphQLProjectionError):
    """Exception raised in strict mode when a fragment spread names an unknown fragment."""


class UnresolvedVariableError(GraphQLProjectionError):
    """Exception raised in strict mode when an argument references an unbound variable."""


class UnrecognizedValueNodeKindError(GraphQLProjectionError):
    """Exception raised in strict mode when an argument value node has an unsupported kind."""


class DataClientNotFoundError(GraphQLProjectionError):
    """Exception raised when the resolve context does not carry the expected data client."""
