# Copyright 2026-present Kensho Technologies, LLC.
from abc import ABCMeta, abstractmethod
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from ..exceptions import UnknownRegistryTypeError
from ..field_filtering import FieldFilter, create_field_filter
from ..typedefs import ModelFieldInfo


class ModelFieldSource(metaclass=ABCMeta):
    """Base class for the schema or ORM metadata that the registry derives model fields from."""

    @abstractmethod
    def get_model_field_info(self, type_name: str) -> Optional[ModelFieldInfo]:
        """Return the scalar and relation fields of the named type, or None if it is unknown."""
        raise NotImplementedError()


class ModelFieldRegistry:
    """Memoized lookup of the scalar and relation fields of model types, by type name.

    The registry owns its cache rather than sharing process-wide state, so that several schemas
    can be used side by side. Entries are only ever added, and computing an entry twice yields
    equal results, so concurrent lookups need no locking.
    """

    def __init__(
        self, source: ModelFieldSource, cache: Optional[Dict[str, ModelFieldInfo]] = None
    ) -> None:
        """Create a registry over the given source.

        Args:
            source: where model field info is computed from on the first lookup of each type
            cache: optional dict of type name -> ModelFieldInfo to use as the memoization cache,
                   for example to share already-computed entries between registries
        """
        self._source = source
        self._cache: Dict[str, ModelFieldInfo] = {} if cache is None else cache
        self._field_filters: Dict[Tuple[str, FrozenSet[str]], FieldFilter] = {}

    def has_type(self, type_name: str) -> bool:
        """Return True if the registry knows the named type."""
        if type_name in self._cache:
            return True
        return self._source.get_model_field_info(type_name) is not None

    def get_model_fields(self, type_name: str) -> ModelFieldInfo:
        """Return the scalar and relation fields of the named type, computing them at most once."""
        model_fields = self._cache.get(type_name)
        if model_fields is not None:
            return model_fields

        model_fields = self._source.get_model_field_info(type_name)
        if model_fields is None:
            raise UnknownRegistryTypeError(
                'Type "{}" was not found in the model field registry. This indicates that the '
                "registry does not describe the same schema as the queries being "
                "compiled.".format(type_name)
            )

        self._cache[type_name] = model_fields
        return model_fields

    def get_related_type_name(self, type_name: str, field_name: str) -> Optional[str]:
        """Return the type name the relation field points to, or None if it is not a relation."""
        return self.get_model_fields(type_name).relations.get(field_name)

    def get_field_filter(
        self, type_name: str, exclude_fields: Optional[Iterable[str]] = None
    ) -> FieldFilter:
        """Return the memoized field filter for the named type and set of excluded fields."""
        cache_key = (type_name, frozenset(exclude_fields or ()))
        field_filter = self._field_filters.get(cache_key)
        if field_filter is None:
            field_filter = create_field_filter(self.get_model_fields(type_name), cache_key[1])
            self._field_filters[cache_key] = field_filter
        return field_filter
