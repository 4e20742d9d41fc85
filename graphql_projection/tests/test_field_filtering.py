# Copyright 2026-present Kensho Technologies, LLC.
import unittest

from ..field_filtering import (
    BatchFilterResult,
    FieldKind,
    build_select_from_fields,
    create_field_filter,
    filter_fields_batch,
)
from ..typedefs import ModelFieldInfo


USER_FIELDS = ModelFieldInfo(
    scalars=frozenset({"id", "name", "email"}), relations={"posts": "Post"}
)


class FieldFilteringTests(unittest.TestCase):
    def test_permissive_filter(self) -> None:
        field_filter = create_field_filter()
        self.assertEqual(FieldKind.Scalar, field_filter("id"))
        self.assertEqual(FieldKind.Scalar, field_filter("posts"))
        self.assertEqual(FieldKind.Scalar, field_filter("displayName"))
        for pseudo_field_name in ("__typename", "_count", "_avg", "_sum", "_min", "_max"):
            self.assertIsNone(field_filter(pseudo_field_name))

    def test_permissive_filter_with_excluded_fields(self) -> None:
        field_filter = create_field_filter(exclude_fields=["displayName"])
        self.assertIsNone(field_filter("displayName"))
        self.assertIsNone(field_filter("__typename"))
        self.assertEqual(FieldKind.Scalar, field_filter("name"))

    def test_model_filter(self) -> None:
        field_filter = create_field_filter(USER_FIELDS)
        self.assertEqual(FieldKind.Scalar, field_filter("id"))
        self.assertEqual(FieldKind.Relation, field_filter("posts"))
        self.assertIsNone(field_filter("displayName"))
        self.assertIsNone(field_filter("_count"))

    def test_model_filter_with_excluded_fields(self) -> None:
        field_filter = create_field_filter(USER_FIELDS, exclude_fields={"email", "posts"})
        self.assertEqual(FieldKind.Scalar, field_filter("id"))
        self.assertIsNone(field_filter("email"))
        self.assertIsNone(field_filter("posts"))

    def test_filter_fields_batch(self) -> None:
        field_filter = create_field_filter(USER_FIELDS)
        result = filter_fields_batch(
            ["id", "posts", "__typename", "displayName", "name"], field_filter
        )
        self.assertEqual(BatchFilterResult(scalars=["id", "name"], relations=["posts"]), result)

    def test_build_select_from_fields(self) -> None:
        field_filter = create_field_filter(USER_FIELDS)
        self.assertEqual(
            {"id": True, "name": True, "posts": True},
            build_select_from_fields(["id", "name", "displayName", "posts"], field_filter),
        )
        self.assertEqual({}, build_select_from_fields([], field_filter))

    def test_known_fields_of_model(self) -> None:
        self.assertTrue(USER_FIELDS.is_known_field("id"))
        self.assertTrue(USER_FIELDS.is_known_field("posts"))
        self.assertFalse(USER_FIELDS.is_known_field("displayName"))
