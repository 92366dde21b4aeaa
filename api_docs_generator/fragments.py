"""
Builders for the OpenAPI sub-structures repeated across operations.
"""

from typing import Any, Dict, List, Mapping, Optional

from .constants import FILTER_OPERATORS, JSON_CONTENT_TYPE, SCHEMA_REF_PREFIX
from .domain.models import IdValue, normalize_id


def schema_ref(name: str) -> str:
    """Build the ``$ref`` pointer to a named schema in ``components.schemas``."""
    return f"{SCHEMA_REF_PREFIX}{name}"


def api_key_security() -> Dict[str, Any]:
    return {
        "description": "Authorization using an API Key",
        "in": "header",
        "name": "x-api-key",
        "style": "form",
        "schema": {
            "type": "string"
        }
    }


def json_schema_ref(ref: str) -> Dict[str, Any]:
    """Wrap a schema name into a JSON Media Type map."""
    return {
        JSON_CONTENT_TYPE: {
            "schema": {
                "$ref": schema_ref(ref)
            }
        }
    }


def id_path_parameters(id_name: IdValue, id_type: IdValue, description: str) -> List[Dict[str, Any]]:
    """
    Create one required path parameter per id, preserving id order.

    A single ``id_type`` applies to every name when ``id_name`` is a list.
    """
    return [
        {
            "in": "path",
            "name": name,
            "description": description,
            "schema": {
                "type": type_
            },
            "required": True
        }
        for name, type_ in normalize_id(id_name, id_type).pairs()
    ]


def join_parameter(refs: Mapping[str, str]) -> Dict[str, Any]:
    resolver = refs.get("resolverParameter")
    if resolver:
        return {
            "description": "Tables to join in query. Use SHIFT to select multiple",
            "in": "query",
            "name": "$join",
            "style": "form",
            "schema": {
                "type": "array",
                "items": {
                    "$ref": schema_ref(resolver)
                }
            }
        }
    return {
        "description": "Tables to join in query. This operation doesn't have any defined resolvers",
        "in": "query",
        "name": "$join",
    }


def filter_parameter(refs: Mapping[str, str]) -> List[Dict[str, Any]]:
    """
    Query parameters for filtering and field selection.

    The ``$select[0]`` parameter is only emitted when ``refs`` names a
    ``properties`` schema, so no dangling reference is ever produced.
    """
    parameters = [
        {
            "description": "Query parameters to filter. An example of this parameter: userId[$gt]=1000",
            "in": "query",
            "name": "filter",
            "style": "form",
            "explode": True,
            "schema": {
                "type": "array",
                "items": {
                    "enum": list(FILTER_OPERATORS)
                }
            }
        }
    ]

    properties: Optional[str] = refs.get("properties")
    if properties:
        parameters.append({
            "description": "Filter results to only selected parameters. An example of this parameter: $select[0]=userId",
            "in": "query",
            "name": "$select[0]",
            "style": "form",
            "explode": True,
            "schema": {
                "type": "array",
                "items": {
                    "$ref": schema_ref(properties)
                }
            }
        })

    return parameters
