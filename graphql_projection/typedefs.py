# Copyright 2026-present Kensho Technologies, LLC.
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Literal, Mapping, Tuple, TypedDict, Union

from graphql.language.ast import FragmentDefinitionNode


TYPENAME_FIELD_NAME = "__typename"

COUNT_AGGREGATE_NAME = "_count"

# Selecting this field under _count asks for a count of all records, not of particular fields.
COUNT_ALL_FIELD_NAME = "_all"

AGGREGATE_KINDS: Tuple[str, ...] = ("_count", "_avg", "_sum", "_min", "_max")

AGGREGATE_FIELD_NAMES: FrozenSet[str] = frozenset(AGGREGATE_KINDS)

# Fields that may be selected in a query, but never exist in the underlying data store.
PSEUDO_FIELD_NAMES: FrozenSet[str] = AGGREGATE_FIELD_NAMES | {TYPENAME_FIELD_NAME}

# Arguments of a relation field that are forwarded verbatim to the data-access layer.
RELATION_ARGUMENT_NAMES: FrozenSet[str] = frozenset(
    {"where", "orderBy", "take", "skip", "cursor", "distinct"}
)

# A projection node is either True (select this field) or a relation dict of the form
# {"select": ProjectionMap, **RelationArgs}, where the "select" key may be absent.
# The relation dict is recursive, which is why its values are typed as Any.
ProjectionNode = Union[Literal[True], Dict[str, Any]]
ProjectionMap = Dict[str, ProjectionNode]

# Plain-value arguments forwarded with a relation, keyed by names in RELATION_ARGUMENT_NAMES.
RelationArgs = Dict[str, Any]

# Fragment name -> fragment definition, as found in GraphQLResolveInfo.fragments.
FragmentTable = Mapping[str, FragmentDefinitionNode]

# Variable name -> already-coerced runtime value, as found in GraphQLResolveInfo.variable_values.
VariableTable = Mapping[str, Any]

AggregateFieldMap = Dict[str, Literal[True]]


class Projection(TypedDict, total=False):
    """The arguments handed to the data-access layer for a non-aggregate query."""

    select: ProjectionMap
    include: ProjectionMap


class AggregateProjection(TypedDict, total=False):
    """The arguments handed to the data-access layer for an aggregate or groupBy query.

    No key ever maps to an empty field map.
    """

    _count: Union[Literal[True], AggregateFieldMap]
    _avg: AggregateFieldMap
    _sum: AggregateFieldMap
    _min: AggregateFieldMap
    _max: AggregateFieldMap


@dataclass(frozen=True)
class ModelFieldInfo:
    """The fields of one model type that have a representation in the underlying data store."""

    scalars: FrozenSet[str]
    relations: Mapping[str, str]  # relation field name -> name of the related model type

    def is_known_field(self, field_name: str) -> bool:
        """Return True if the field is either a scalar or a relation of this model."""
        return field_name in self.scalars or field_name in self.relations
