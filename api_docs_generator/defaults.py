"""
Fresh skeletons for the aggregate document and for single operations.

Every call returns a new object; callers mutate the result freely.
"""

from typing import Any, Dict

from .constants import DefaultConfig


def get_default_specs() -> Dict[str, Any]:
    """Return an empty aggregate OpenAPI document."""
    return {
        "openapi": DefaultConfig.OPENAPI_VERSION,
        "info": {},
        "tags": [],
        "paths": {},
        "components": {
            "schemas": {}
        },
    }


def get_operation_spec_defaults() -> Dict[str, Any]:
    """Return an empty Operation Object that templates fill in."""
    return {
        "parameters": [],
        "responses": {},
        "description": "",
        "summary": "",
        "tags": [],
        "security": [],
    }


def get_path_parameter_spec(name: str) -> Dict[str, Any]:
    """Parameter for a route placeholder such as ``:userId`` in ``users/:userId/posts``."""
    return {
        "in": "path",
        "name": name,
        "schema": {
            "type": "string"
        },
        "required": True,
        "description": f"{name} parameter",
    }
