# Copyright 2026-present Kensho Technologies, LLC.
from dataclasses import dataclass
from typing import FrozenSet, Optional

from .exceptions import InvalidProjectionOptionsError
from .registry import ModelFieldRegistry


@dataclass(frozen=True)
class ProjectionOptions:
    """Options controlling how a selection is compiled into a projection."""

    # Names of fields to leave out of the projection at every nesting level, e.g. fields
    # served by custom resolvers. Pseudo-fields such as __typename are always left out.
    exclude_fields: FrozenSet[str] = frozenset()

    # When both are set, only fields known to the registry are projected, starting from the
    # model named here and following relations into their related models.
    registry: Optional[ModelFieldRegistry] = None
    model_name: Optional[str] = None

    # If True, undefined fragments, unbound variables and unsupported argument values raise
    # errors instead of being silently left out of the projection.
    strict: bool = False

    def __post_init__(self) -> None:
        """Validate fields."""
        if (self.registry is None) != (self.model_name is None):
            raise InvalidProjectionOptionsError(
                "Schema-aware filtering requires both a registry and a model name, but received "
                "registry={} and model_name={}.".format(self.registry, self.model_name)
            )
        if isinstance(self.exclude_fields, str):
            raise InvalidProjectionOptionsError(
                'Expected a collection of field names for "exclude_fields", but received the '
                'string "{}".'.format(self.exclude_fields)
            )

        # Accept any collection of names, while keeping the dataclass hashable.
        object.__setattr__(self, "exclude_fields", frozenset(self.exclude_fields))


DEFAULT_PROJECTION_OPTIONS = ProjectionOptions()
