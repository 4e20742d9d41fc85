# Copyright 2026-present Kensho Technologies, LLC.
"""Model field source reading an ORM datamodel document, such as Prisma's DMMF."""
from typing import Any, Dict, Mapping, Optional

import funcy

from ..typedefs import ModelFieldInfo
from .model_field_registry import ModelFieldRegistry, ModelFieldSource


# Datamodel field kind marking a relation to another model. Other kinds are
# "scalar", "enum" and "unsupported", all of which are stored directly on the model.
RELATION_FIELD_KIND = "object"


class DatamodelModelFieldSource(ModelFieldSource):
    """Model field source over a datamodel document.

    The document is expected to have the following shape:
        {
            "datamodel": {
                "models": [
                    {
                        "name": "User",
                        "fields": [
                            {"name": "id", "kind": "scalar", "type": "Int"},
                            {"name": "posts", "kind": "object", "type": "Post"},
                        ],
                    },
                ],
            },
        }
    """

    def __init__(self, datamodel_document: Mapping[str, Any]) -> None:
        """Create a source over the given datamodel document."""
        self._models = datamodel_document["datamodel"]["models"]

    def get_model_field_info(self, type_name: str) -> Optional[ModelFieldInfo]:
        """Return the scalar and relation fields of the named model, or None if it is unknown."""
        model = funcy.first(model for model in self._models if model["name"] == type_name)
        if model is None:
            return None

        scalars = set()
        relations: Dict[str, str] = {}
        for field in model["fields"]:
            if field["kind"] == RELATION_FIELD_KIND:
                relations[field["name"]] = field["type"]
            else:
                scalars.add(field["name"])

        return ModelFieldInfo(scalars=frozenset(scalars), relations=relations)


def create_registry_from_datamodel(
    datamodel_document: Mapping[str, Any],
    cache: Optional[Dict[str, ModelFieldInfo]] = None,
) -> ModelFieldRegistry:
    """Return a ModelFieldRegistry backed by the given datamodel document."""
    return ModelFieldRegistry(DatamodelModelFieldSource(datamodel_document), cache=cache)
