# Copyright 2026-present Kensho Technologies, LLC.
from typing import Dict

from .typedefs import Projection, ProjectionMap


MERGEABLE_PROJECTION_KEYS = ("select", "include")


def merge_projections(*projections: Projection) -> Projection:
    """Merge the "select" and "include" maps of the projections into a single projection.

    The maps are merged shallowly: if several projections contain the same field, the projection
    node given last wins. Keys other than "select" and "include" are not carried over, and a key
    is only present in the result if some projection has it.
    """
    merged: Dict[str, ProjectionMap] = {}
    for projection in projections:
        for key in MERGEABLE_PROJECTION_KEYS:
            projection_map = projection.get(key)
            if projection_map is not None:
                merged.setdefault(key, {}).update(projection_map)
    return merged  # type: ignore[return-value]
