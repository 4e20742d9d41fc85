# Copyright 2026-present Kensho Technologies, LLC.
from typing import Any, Dict
import unittest

from ..exceptions import (
    InvalidProjectionOptionsError,
    UnknownRegistryTypeError,
    UnresolvedFragmentError,
    UnresolvedVariableError,
)
from ..options import ProjectionOptions
from ..registry import create_registry_from_datamodel, create_registry_from_graphql_schema
from ..selection_parsing import get_projection, parse_selection_set
from ..typedefs import PSEUDO_FIELD_NAMES
from .test_helpers import TEST_DATAMODEL, get_root_field_and_fragments, get_schema


def _get_projection_for_query(query: str, variable_values: Any = None, **options: Any) -> Any:
    """Compile the first root field of the query with the given options."""
    field_ast, fragments = get_root_field_and_fragments(query)
    return get_projection(field_ast, fragments, variable_values, ProjectionOptions(**options))


def _collect_projection_keys(projection_map: Dict[str, Any]) -> set:
    """Return the field names used at every level of the projection map."""
    keys = set(projection_map)
    for projection_node in projection_map.values():
        if isinstance(projection_node, dict) and "select" in projection_node:
            keys |= _collect_projection_keys(projection_node["select"])
    return keys


class SelectionParsingTests(unittest.TestCase):
    def setUp(self) -> None:
        """Disable max diff limits for all tests."""
        self.maxDiff = None

    def test_scalar_fields(self) -> None:
        query = """{
            users {
                id
                name
            }
        }"""
        expected = {"select": {"id": True, "name": True}}
        self.assertEqual(expected, _get_projection_for_query(query))

    def test_relation_with_arguments(self) -> None:
        query = """{
            users {
                id
                name
                posts(where: {published: true}, take: 5) {
                    id
                    title
                }
            }
        }"""
        expected = {
            "select": {
                "id": True,
                "name": True,
                "posts": {
                    "select": {"id": True, "title": True},
                    "where": {"published": True},
                    "take": 5,
                },
            }
        }
        self.assertEqual(expected, _get_projection_for_query(query))

    def test_deeply_nested_relations(self) -> None:
        query = """{
            users {
                posts(orderBy: [{title: asc}]) {
                    author {
                        profile {
                            bio
                        }
                    }
                    comments(take: 2) {
                        body
                    }
                }
            }
        }"""
        expected = {
            "select": {
                "posts": {
                    "select": {
                        "author": {"select": {"profile": {"select": {"bio": True}}}},
                        "comments": {"select": {"body": True}, "take": 2},
                    },
                    "orderBy": [{"title": "asc"}],
                }
            }
        }
        self.assertEqual(expected, _get_projection_for_query(query))

    def test_only_whitelisted_arguments_are_forwarded(self) -> None:
        query = """{
            users {
                posts(first: 3, skip: 1) {
                    id
                }
            }
        }"""
        expected = {"select": {"posts": {"select": {"id": True}, "skip": 1}}}
        self.assertEqual(expected, _get_projection_for_query(query))

    def test_relation_selecting_only_pseudo_fields_collapses(self) -> None:
        query = """{
            users {
                posts {
                    __typename
                }
                profile(take: 1) {
                    __typename
                }
            }
        }"""
        # Without arguments, a relation selecting nothing projectable is selected as a whole.
        # With arguments, only the arguments are kept.
        expected = {"select": {"posts": True, "profile": {"take": 1}}}
        self.assertEqual(expected, _get_projection_for_query(query))

    def test_pseudo_fields_are_never_projected(self) -> None:
        query = """{
            users {
                __typename
                id
                _count {
                    posts
                }
                _avg { id }
                _sum { id }
                _min { id }
                _max { id }
                posts {
                    __typename
                    _count
                    title
                }
            }
        }"""
        projection = _get_projection_for_query(query)
        expected = {"select": {"id": True, "posts": {"select": {"title": True}}}}
        self.assertEqual(expected, projection)
        self.assertFalse(PSEUDO_FIELD_NAMES & _collect_projection_keys(projection["select"]))

    def test_empty_projection_means_default_fields(self) -> None:
        self.assertEqual({}, _get_projection_for_query("{ users }"))
        self.assertEqual({}, _get_projection_for_query("{ users { __typename } }"))

    def test_named_fragment(self) -> None:
        query = """{
            users {
                ...UserFields
                id
            }
        }

        fragment UserFields on User {
            email
        }"""
        expected = {"select": {"email": True, "id": True}}
        self.assertEqual(expected, _get_projection_for_query(query))

    def test_nested_fragments(self) -> None:
        query = """{
            users {
                ...UserWithPosts
            }
        }

        fragment UserWithPosts on User {
            name
            posts {
                ...PostFields
            }
        }

        fragment PostFields on Post {
            title
            author {
                id
            }
        }"""
        expected = {
            "select": {
                "name": True,
                "posts": {"select": {"title": True, "author": {"select": {"id": True}}}},
            }
        }
        self.assertEqual(expected, _get_projection_for_query(query))

    def test_inline_fragments(self) -> None:
        query = """{
            users {
                id
                ... on User {
                    email
                }
                ... {
                    name
                }
            }
        }"""
        expected = {"select": {"id": True, "email": True, "name": True}}
        self.assertEqual(expected, _get_projection_for_query(query))

    def test_later_selection_of_a_field_wins(self) -> None:
        query = """{
            users {
                posts(take: 1) {
                    id
                }
                ...UserPosts
            }
        }

        fragment UserPosts on User {
            posts(take: 2) {
                title
            }
        }"""
        expected = {"select": {"posts": {"select": {"title": True}, "take": 2}}}
        self.assertEqual(expected, _get_projection_for_query(query))

    def test_undefined_fragment_is_skipped(self) -> None:
        query = """{
            users {
                id
                ...Missing
            }
        }"""
        with self.assertLogs("graphql_projection.resolution", level="WARNING"):
            projection = _get_projection_for_query(query)
        self.assertEqual({"select": {"id": True}}, projection)

        with self.assertRaises(UnresolvedFragmentError):
            _get_projection_for_query(query, strict=True)

    def test_variable_substitution(self) -> None:
        query = """query ($n: Int) {
            users {
                posts(take: $n) {
                    id
                }
            }
        }"""
        self.assertEqual(
            {"select": {"posts": {"select": {"id": True}, "take": 3}}},
            _get_projection_for_query(query, {"n": 3}),
        )
        self.assertEqual(
            {"select": {"posts": {"select": {"id": True}}}},
            _get_projection_for_query(query, {}),
        )
        self.assertEqual(
            {"select": {"posts": {"select": {"id": True}}}},
            _get_projection_for_query(query, None),
        )

        with self.assertRaises(UnresolvedVariableError):
            _get_projection_for_query(query, {}, strict=True)

    def test_excluded_fields(self) -> None:
        query = """{
            users {
                id
                displayName
                posts {
                    title
                    excerpt
                }
            }
        }"""
        expected = {"select": {"id": True, "posts": {"select": {"title": True}}}}
        self.assertEqual(
            expected,
            _get_projection_for_query(query, exclude_fields=frozenset({"displayName", "excerpt"})),
        )

    def test_deterministic_output(self) -> None:
        query = """query ($where: PostWhereInput) {
            users {
                id
                ...UserFields
                posts(where: $where) {
                    ... on Post {
                        title
                    }
                }
            }
        }

        fragment UserFields on User {
            email
        }"""
        variable_values = {"where": {"published": True}}
        first = _get_projection_for_query(query, variable_values)
        second = _get_projection_for_query(query, variable_values)
        self.assertEqual(first, second)
        self.assertEqual(list(first["select"]), list(second["select"]))

    def test_multiple_field_nodes_are_merged(self) -> None:
        field_ast, fragments = get_root_field_and_fragments("{ users { id } }")
        other_field_ast, _ = get_root_field_and_fragments("{ users { name } }")
        self.assertEqual(
            {"select": {"id": True, "name": True}},
            get_projection([field_ast, other_field_ast], fragments, {}),
        )

    def test_parse_selection_set(self) -> None:
        field_ast, fragments = get_root_field_and_fragments("{ users { id posts { title } } }")
        self.assertEqual(
            {"id": True, "posts": {"select": {"title": True}}},
            parse_selection_set(field_ast.selection_set, fragments),
        )
        self.assertEqual({}, parse_selection_set(None))


class SchemaAwareSelectionParsingTests(unittest.TestCase):
    def setUp(self) -> None:
        """Disable max diff limits for all tests."""
        self.maxDiff = None
        self.registry = create_registry_from_datamodel(TEST_DATAMODEL)

    def test_fields_missing_from_model_are_dropped(self) -> None:
        query = """{
            users {
                id
                displayName
                posts(take: 5) {
                    title
                    excerpt
                    rating
                }
            }
        }"""
        expected = {
            "select": {
                "id": True,
                "posts": {"select": {"title": True, "rating": True}, "take": 5},
            }
        }
        self.assertEqual(
            expected,
            _get_projection_for_query(query, registry=self.registry, model_name="User"),
        )

    def test_relations_switch_model(self) -> None:
        # "name" exists on User but not on Post, and "title" the other way around.
        query = """{
            users {
                name
                title
                posts {
                    name
                    title
                    author {
                        name
                        title
                    }
                }
            }
        }"""
        expected = {
            "select": {
                "name": True,
                "posts": {
                    "select": {
                        "title": True,
                        "author": {"select": {"name": True}},
                    }
                },
            }
        }
        self.assertEqual(
            expected,
            _get_projection_for_query(query, registry=self.registry, model_name="User"),
        )

    def test_relation_selecting_only_unknown_fields_collapses(self) -> None:
        query = """{
            users {
                posts {
                    excerpt
                }
            }
        }"""
        expected = {"select": {"posts": True}}
        self.assertEqual(
            expected,
            _get_projection_for_query(query, registry=self.registry, model_name="User"),
        )

    def test_fragments_use_their_type_condition(self) -> None:
        query = """{
            users {
                ...UserFields
                posts {
                    ... on Post {
                        title
                        excerpt
                    }
                }
            }
        }

        fragment UserFields on User {
            email
            displayName
        }"""
        expected = {"select": {"email": True, "posts": {"select": {"title": True}}}}
        self.assertEqual(
            expected,
            _get_projection_for_query(query, registry=self.registry, model_name="User"),
        )

    def test_fragments_on_types_outside_the_registry_keep_the_model(self) -> None:
        query = """{
            users {
                ...NodeFields
                ... on Node {
                    name
                    displayName
                }
            }
        }

        fragment NodeFields on Node {
            id
        }"""
        expected = {"select": {"id": True, "name": True}}
        self.assertEqual(
            expected,
            _get_projection_for_query(query, registry=self.registry, model_name="User"),
        )

    def test_union_field_with_schema_registry(self) -> None:
        query = """{
            users {
                id
                feed {
                    __typename
                    ... on Post {
                        title
                        excerpt
                    }
                    ... on Comment {
                        body
                    }
                }
            }
        }"""
        expected = {
            "select": {
                "id": True,
                "feed": {"select": {"title": True, "excerpt": True, "body": True}},
            }
        }
        schema_registry = create_registry_from_graphql_schema(get_schema())
        self.assertEqual(
            expected,
            _get_projection_for_query(query, registry=schema_registry, model_name="User"),
        )

    def test_unknown_root_model_is_fatal(self) -> None:
        with self.assertRaises(UnknownRegistryTypeError):
            _get_projection_for_query("{ tags }", registry=self.registry, model_name="Tag")

    def test_excluded_fields_apply_with_registry(self) -> None:
        query = """{
            users {
                id
                email
                posts {
                    title
                    rating
                }
            }
        }"""
        expected = {"select": {"id": True, "posts": {"select": {"title": True}}}}
        self.assertEqual(
            expected,
            _get_projection_for_query(
                query,
                registry=self.registry,
                model_name="User",
                exclude_fields=frozenset({"email", "rating"}),
            ),
        )

    def test_inconsistent_options(self) -> None:
        with self.assertRaises(InvalidProjectionOptionsError):
            ProjectionOptions(registry=self.registry)
        with self.assertRaises(InvalidProjectionOptionsError):
            ProjectionOptions(model_name="User")
        with self.assertRaises(InvalidProjectionOptionsError):
            ProjectionOptions(exclude_fields="email")  # type: ignore[arg-type]
