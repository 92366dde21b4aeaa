"""
Unit tests for domain models and naming helpers.
"""
import unittest

from api_docs_generator.domain import (
    CompositeId,
    CustomOperation,
    OperationContext,
    RefTable,
    SingleId,
    item_path,
    last_static_segment,
    normalize_id,
    pluralize,
    singularize,
    split_route,
)
from api_docs_generator.exceptions import ConfigurationError


class TestNormalizeId(unittest.TestCase):

    def test_single(self):
        self.assertEqual(normalize_id("id", "integer"), SingleId("id", "integer"))

    def test_single_element_lists(self):
        self.assertEqual(normalize_id(["uuid"], ["string"]), SingleId("uuid", "string"))

    def test_composite(self):
        ids = normalize_id(["a", "b"], ["string", "integer"])

        self.assertIsInstance(ids, CompositeId)
        self.assertEqual(ids.pairs(), [("a", "string"), ("b", "integer")])

    def test_broadcast_type(self):
        self.assertEqual(normalize_id(["a", "b"], "string").pairs(), [("a", "string"), ("b", "string")])
        self.assertEqual(normalize_id(["a", "b"], ["string"]).pairs(), [("a", "string"), ("b", "string")])

    def test_mismatch_rejected(self):
        with self.assertRaises(ConfigurationError) as ctx:
            normalize_id(["a", "b", "c"], ["string", "integer"])
        self.assertEqual(ctx.exception.error_code, "CONFIG_ERROR")

    def test_single_name_with_many_types_rejected(self):
        with self.assertRaises(ConfigurationError):
            normalize_id("id", ["string", "integer"])

    def test_empty_rejected(self):
        with self.assertRaises(ConfigurationError):
            normalize_id([], "string")


class TestRefTable(unittest.TestCase):

    def test_absent_role_is_none(self):
        refs = RefTable({"getResponse": "User"})

        self.assertEqual(refs.get("getResponse"), "User")
        self.assertIsNone(refs.get("findResponse"))
        self.assertNotIn("findResponse", refs)

    def test_empty_values_count_as_absent(self):
        refs = RefTable({"getResponse": "", "findResponse": None})

        self.assertEqual(len(refs), 0)

    def test_custom_roles(self):
        refs = RefTable({"activateRequest": "ActivateReq", "activateResponse": "Activated"})

        self.assertEqual(refs.request_for("activate"), "ActivateReq")
        self.assertEqual(refs.response_for("activate"), "Activated")
        self.assertIsNone(refs.request_for("deactivate"))

    def test_with_defaults(self):
        refs = RefTable({"getResponse": "UserOut"}).with_defaults({"getResponse": "User", "createRequest": "User"})

        self.assertEqual(dict(refs), {"getResponse": "UserOut", "createRequest": "User"})

    def test_coerce(self):
        table = RefTable({"a": "b"})

        self.assertIs(RefTable.coerce(table), table)
        self.assertEqual(dict(RefTable.coerce(None)), {})


class TestOperationContext(unittest.TestCase):

    def test_refs_coerced_and_ids_normalized(self):
        context = OperationContext(tags=["t"], model_name="T", id_name=["a", "b"], refs={"getResponse": "T"})

        self.assertIsInstance(context.refs, RefTable)
        self.assertIsInstance(context.ids, CompositeId)

    def test_bad_ids_rejected_on_construction(self):
        with self.assertRaises(ConfigurationError):
            OperationContext(tags=["t"], model_name="T", id_name=["a", "b"], id_type=["x", "y", "z"])

    def test_custom_operation_lowercases_http_method(self):
        self.assertEqual(CustomOperation("go", "POST").http_method, "post")


class TestNaming(unittest.TestCase):

    def test_split_route(self):
        self.assertEqual(split_route("users"), ("/users", []))
        self.assertEqual(split_route("/users/:userId/posts/"), ("/users/{userId}/posts", ["userId"]))

    def test_last_static_segment(self):
        self.assertEqual(last_static_segment("users/:userId/posts"), "posts")
        self.assertEqual(last_static_segment("users/:userId"), "users")

    def test_item_path(self):
        self.assertEqual(item_path("/users", ["id"], ","), "/users/{id}")
        self.assertEqual(item_path("/members", ["orgId", "userId"], ","), "/members/{orgId},{userId}")

    def test_inflection(self):
        self.assertEqual(singularize("users"), "user")
        self.assertEqual(singularize("user"), "user")
        self.assertEqual(pluralize("User"), "Users")

