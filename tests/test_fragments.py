"""
Unit tests for the fragment helpers shared by the operation templates.
"""
import unittest

from api_docs_generator.domain.models import RefTable
from api_docs_generator.exceptions import ConfigurationError
from api_docs_generator.fragments import (
    api_key_security,
    filter_parameter,
    id_path_parameters,
    join_parameter,
    json_schema_ref,
    schema_ref,
)


class TestSchemaRef(unittest.TestCase):

    def test_schema_ref_prefix(self):
        self.assertEqual(schema_ref("User"), "#/components/schemas/User")

    def test_json_schema_ref_wraps_reference(self):
        expected = {
            "application/json": {
                "schema": {"$ref": "#/components/schemas/User_list"}
            }
        }
        self.assertEqual(json_schema_ref("User_list"), expected)


class TestApiKeySecurity(unittest.TestCase):

    def test_header_parameter(self):
        result = api_key_security()

        self.assertEqual(result["in"], "header")
        self.assertEqual(result["name"], "x-api-key")
        self.assertEqual(result["schema"], {"type": "string"})

    def test_fresh_object_each_call(self):
        first = api_key_security()
        first["schema"]["type"] = "integer"

        self.assertEqual(api_key_security()["schema"]["type"], "string")


class TestIdPathParameters(unittest.TestCase):

    def test_single_id(self):
        result = id_path_parameters("id", "integer", "ID of User to return")

        self.assertEqual(result, [{
            "in": "path",
            "name": "id",
            "description": "ID of User to return",
            "schema": {"type": "integer"},
            "required": True,
        }])

    def test_composite_ids_keep_order(self):
        result = id_path_parameters(["orgId", "userId"], ["string", "integer"], "ID of Member")

        self.assertEqual([param["name"] for param in result], ["orgId", "userId"])
        self.assertEqual([param["schema"]["type"] for param in result], ["string", "integer"])
        self.assertTrue(all(param["required"] and param["in"] == "path" for param in result))

    def test_single_type_is_broadcast(self):
        result = id_path_parameters(["a", "b", "c"], "string", "ID")

        self.assertEqual(len(result), 3)
        self.assertEqual({param["schema"]["type"] for param in result}, {"string"})

    def test_mismatched_lengths_rejected(self):
        with self.assertRaises(ConfigurationError):
            id_path_parameters(["a", "b"], ["string", "integer", "integer"], "ID")


class TestJoinParameter(unittest.TestCase):

    def test_with_resolver(self):
        result = join_parameter({"resolverParameter": "Foo"})

        self.assertEqual(result["name"], "$join")
        self.assertEqual(result["schema"]["type"], "array")
        self.assertEqual(result["schema"]["items"]["$ref"], "#/components/schemas/Foo")

    def test_without_resolver(self):
        result = join_parameter({})

        self.assertEqual(result["name"], "$join")
        self.assertEqual(result["in"], "query")
        self.assertNotIn("schema", result)
        self.assertIn("doesn't have any defined resolvers", result["description"])

    def test_accepts_ref_table(self):
        result = join_parameter(RefTable({"resolverParameter": "Joins"}))

        self.assertEqual(result["schema"]["items"]["$ref"], "#/components/schemas/Joins")


class TestFilterParameter(unittest.TestCase):

    def test_with_properties(self):
        result = filter_parameter({"properties": "UserProps"})

        self.assertEqual([param["name"] for param in result], ["filter", "$select[0]"])
        self.assertEqual(
            result[0]["schema"]["items"]["enum"],
            ["$gt", "$gte", "$lt", "$lte", "$ne", "$in", "$nin"],
        )
        self.assertTrue(result[0]["explode"])
        self.assertEqual(result[1]["schema"]["items"]["$ref"], "#/components/schemas/UserProps")

    def test_without_properties_omits_select(self):
        result = filter_parameter({})

        self.assertEqual([param["name"] for param in result], ["filter"])
