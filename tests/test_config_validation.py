"""
Unit tests for configuration loading and validation.
"""
import tempfile
import unittest
from argparse import Namespace
from pathlib import Path

import yaml

from api_docs_generator.config_validation import (
    GeneratorConfigSchema,
    ServiceConfigSchema,
    load_config,
    validate_and_parse_config,
)
from api_docs_generator.domain.models import CustomOperation
from api_docs_generator.exceptions import ConfigurationError


class TestServiceConfigSchema(unittest.TestCase):

    def test_defaults(self):
        service = ServiceConfigSchema(path="users")

        self.assertEqual(service.methods, ["find", "get", "create", "update", "patch", "remove"])
        self.assertEqual(service.multi, [])
        self.assertTrue(service.enabled)

    def test_schema_alias(self):
        service = ServiceConfigSchema.model_validate({"path": "users", "schema": {"type": "object"}})

        self.assertEqual(service.to_service_docs().schema, {"type": "object"})

    def test_to_service_docs(self):
        service = ServiceConfigSchema.model_validate({
            "path": "users",
            "model": "User",
            "id_name": ["orgId", "userId"],
            "id_type": "string",
            "multi": ["patch"],
            "refs": {"getResponse": "UserOut"},
            "custom_methods": [{"method": "activate", "http_method": "POST", "with_id": True}],
            "operations": {"remove": False},
        })

        docs = service.to_service_docs()

        self.assertEqual(docs.model, "User")
        self.assertEqual(docs.id_name, ["orgId", "userId"])
        self.assertEqual(docs.custom_methods, [CustomOperation("activate", "post", True)])
        self.assertEqual(docs.operations, {"remove": False})
        self.assertEqual(docs.refs, {"getResponse": "UserOut"})

    def test_rejects_unknown_method(self):
        with self.assertRaises(ValueError):
            ServiceConfigSchema(path="users", methods=["list"])

    def test_rejects_unknown_multi(self):
        with self.assertRaises(ValueError):
            ServiceConfigSchema(path="users", multi=["find"])

    def test_rejects_mismatched_ids(self):
        with self.assertRaises(ValueError):
            ServiceConfigSchema(path="users", id_name=["a", "b"], id_type=["x", "y", "z"])


class TestGeneratorConfigSchema(unittest.TestCase):

    def test_to_specs(self):
        config = GeneratorConfigSchema.model_validate({
            "openapi_title": "Shop",
            "servers": [{"url": "https://api.example.com"}],
            "security": [{"BearerAuth": []}],
            "security_schemes": {"BearerAuth": {"type": "http", "scheme": "bearer"}},
        })

        specs = config.to_specs()

        self.assertEqual(specs["info"]["title"], "Shop")
        self.assertEqual(specs["info"]["version"], "1.0.0")
        self.assertEqual(specs["servers"], [{"url": "https://api.example.com"}])
        self.assertEqual(specs["security"], [{"BearerAuth": []}])
        self.assertIn("BearerAuth", specs["components"]["securitySchemes"])

    def test_minimal_specs(self):
        specs = GeneratorConfigSchema().to_specs()

        self.assertEqual(set(specs), {"info"})

    def test_output_suffix(self):
        with self.assertRaises(ValueError):
            GeneratorConfigSchema(output_file="openapi.txt")

    def test_fields_are_attributes_only(self):
        config = GeneratorConfigSchema()

        self.assertEqual(config.id_separator, ",")
        with self.assertRaises(TypeError):
            config["id_separator"]

    def test_securities_without_security_warns(self):
        with self.assertLogs("api_docs_generator.config_validation", level="WARNING"):
            GeneratorConfigSchema.model_validate({"services": [{"path": "users", "securities": ["all"]}]})


class TestValidateAndParseConfig(unittest.TestCase):

    def test_invalid_config_raises(self):
        with self.assertRaises(ConfigurationError) as ctx:
            validate_and_parse_config({"services": [{"model": "User"}]}, config_file="api.yaml")

        self.assertEqual(ctx.exception.context["config_file"], "api.yaml")


class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, content: str) -> str:
        path = Path(self.tmp.name) / "api.yaml"
        path.write_text(content, encoding="utf-8")
        return str(path)

    def test_loads_yaml(self):
        path = self.write(yaml.safe_dump({
            "openapi_title": "Shop",
            "services": [{"path": "users"}, {"path": "orders", "multi": ["all"]}],
        }))

        config = load_config(path)

        self.assertEqual(config.openapi_title, "Shop")
        self.assertEqual([service.path for service in config.services], ["users", "orders"])

    def test_cli_overrides(self):
        path = self.write("output_file: openapi.yaml\n")
        args = Namespace(config=path, output_file="out/api.json", verbose=False, strict=None)

        config = load_config(path, args)

        self.assertEqual(config.output_file, "out/api.json")

    def test_missing_file(self):
        with self.assertRaises(ConfigurationError):
            load_config(str(Path(self.tmp.name) / "nope.yaml"))

    def test_invalid_yaml(self):
        path = self.write("services: [unclosed\n")

        with self.assertRaises(ConfigurationError):
            load_config(path)

    def test_non_mapping(self):
        path = self.write("- just\n- a list\n")

        with self.assertRaises(ConfigurationError):
            load_config(path)

    def test_empty_file_uses_defaults(self):
        path = self.write("")

        config = load_config(path)

        self.assertEqual(config.services, [])
