"""
Unit tests for the default document and operation skeletons.
"""
import unittest

from api_docs_generator.defaults import (
    get_default_specs,
    get_operation_spec_defaults,
    get_path_parameter_spec,
)


class TestDefaultSpecs(unittest.TestCase):

    def test_document_skeleton(self):
        self.assertEqual(get_default_specs(), {
            "openapi": "3.0.2",
            "info": {},
            "tags": [],
            "paths": {},
            "components": {"schemas": {}},
        })

    def test_document_skeleton_is_fresh(self):
        first = get_default_specs()
        second = get_default_specs()

        self.assertEqual(first, second)
        self.assertIsNot(first, second)

        first["paths"]["/users"] = {}
        first["components"]["schemas"]["User"] = {}
        first["tags"].append({"name": "users"})

        self.assertEqual(second["paths"], {})
        self.assertEqual(second["components"]["schemas"], {})
        self.assertEqual(get_default_specs()["tags"], [])

    def test_operation_skeleton_is_fresh(self):
        first = get_operation_spec_defaults()
        second = get_operation_spec_defaults()

        self.assertEqual(first, second)
        first["parameters"].append({"name": "id"})
        first["responses"]["200"] = {}

        self.assertEqual(second["parameters"], [])
        self.assertEqual(second["responses"], {})
        self.assertEqual(second["security"], [])
        self.assertEqual(second["description"], "")
        self.assertEqual(second["summary"], "")


class TestPathParameterSpec(unittest.TestCase):

    def test_route_parameter(self):
        self.assertEqual(get_path_parameter_spec("userId"), {
            "in": "path",
            "name": "userId",
            "schema": {"type": "string"},
            "required": True,
            "description": "userId parameter",
        })
