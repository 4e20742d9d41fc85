# Copyright 2026-present Kensho Technologies, LLC.
"""Classification of selected field names into scalars, relations, and fields to skip."""
from enum import Enum, auto, unique
from typing import Callable, Dict, Iterable, List, Literal, NamedTuple, Optional

from .typedefs import PSEUDO_FIELD_NAMES, ModelFieldInfo


@unique
class FieldKind(Enum):
    """How a selected field is represented in the underlying data store."""

    Scalar = auto()
    Relation = auto()


# Returns the kind of the named field, or None if the field should not be projected.
FieldFilter = Callable[[str], Optional[FieldKind]]


class BatchFilterResult(NamedTuple):
    """Field names split by kind, in their original order, with skipped names left out."""

    scalars: List[str]
    relations: List[str]


def create_field_filter(
    model_fields: Optional[ModelFieldInfo] = None,
    exclude_fields: Optional[Iterable[str]] = None,
) -> FieldFilter:
    """Return a function classifying field names for projection.

    Pseudo-fields and the explicitly excluded fields are always skipped. If model field info is
    given, any field the model does not know about is skipped as well, since it can only be
    served by a custom resolver. Without model field info every other field is considered
    a scalar, and callers have to look at the field's selection set to spot relations.

    Args:
        model_fields: optional scalar and relation fields of the model being selected from
        exclude_fields: optional names of fields to skip in addition to the pseudo-fields

    Returns:
        function taking a field name and returning its FieldKind, or None to skip the field
    """
    skipped_fields = PSEUDO_FIELD_NAMES | frozenset(exclude_fields or ())

    if model_fields is None:

        def permissive_field_filter(field_name: str) -> Optional[FieldKind]:
            if field_name in skipped_fields:
                return None
            return FieldKind.Scalar

        return permissive_field_filter

    known_fields = model_fields

    def model_field_filter(field_name: str) -> Optional[FieldKind]:
        if field_name in skipped_fields or not known_fields.is_known_field(field_name):
            return None
        if field_name in known_fields.relations:
            return FieldKind.Relation
        return FieldKind.Scalar

    return model_field_filter


def filter_fields_batch(field_names: Iterable[str], field_filter: FieldFilter) -> BatchFilterResult:
    """Classify many field names at once, dropping the ones the filter skips."""
    classified = [(field_name, field_filter(field_name)) for field_name in field_names]
    return BatchFilterResult(
        scalars=[field_name for field_name, kind in classified if kind is FieldKind.Scalar],
        relations=[field_name for field_name, kind in classified if kind is FieldKind.Relation],
    )


def build_select_from_fields(
    field_names: Iterable[str], field_filter: FieldFilter
) -> Dict[str, Literal[True]]:
    """Return a flat projection selecting every field name the filter does not skip."""
    return {
        field_name: True for field_name in field_names if field_filter(field_name) is not None
    }