"""
Centralized constants for the API docs generator.

Operation names, HTTP method bindings, fixed descriptions and default values
used by the operation templates and the generator session live here so the
templates stay free of magic strings.
"""

from typing import Dict, List


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    OPENAPI_VERSION = "3.0.2"
    OPENAPI_TITLE = "Resource API"
    OPENAPI_VERSION_NUMBER = "1.0.0"
    OPENAPI_DESCRIPTION = ""
    OUTPUT_FILE = "openapi.yaml"

    ID_NAME = "id"
    ID_TYPE = "integer"
    ID_SEPARATOR = ","


SCHEMA_REF_PREFIX = "#/components/schemas/"
LIST_SCHEMA_SUFFIX = "_list"
JSON_CONTENT_TYPE = "application/json"


# =============================================================================
# OPERATIONS
# =============================================================================

class OperationNames:
    """Canonical operation names, as passed to the security resolver."""

    FIND = "find"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    UPDATE_MULTI = "updateMulti"
    PATCH = "patch"
    PATCH_MULTI = "patchMulti"
    REMOVE = "remove"
    REMOVE_MULTI = "removeMulti"
    CUSTOM = "custom"

    STANDARD = [FIND, GET, CREATE, UPDATE, PATCH, REMOVE]
    MULTI = [UPDATE_MULTI, PATCH_MULTI, REMOVE_MULTI]

    # Single-item operation -> its multi-item variant
    MULTI_VARIANTS: Dict[str, str] = {
        UPDATE: UPDATE_MULTI,
        PATCH: PATCH_MULTI,
        REMOVE: REMOVE_MULTI,
    }

    # Operations addressed through the item path (/<path>/{id})
    ITEM = [GET, UPDATE, PATCH, REMOVE]


class HttpMethods:
    """HTTP verbs used as keys of an OpenAPI Path Item Object."""

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"
    HEAD = "head"
    OPTIONS = "options"

    ALL = [GET, POST, PUT, PATCH, DELETE, HEAD, OPTIONS]

    # Methods that may carry a request body on custom operations
    WITH_BODY = [POST, PUT, PATCH]


OPERATION_HTTP_METHODS: Dict[str, str] = {
    OperationNames.FIND: HttpMethods.GET,
    OperationNames.GET: HttpMethods.GET,
    OperationNames.CREATE: HttpMethods.POST,
    OperationNames.UPDATE: HttpMethods.PUT,
    OperationNames.UPDATE_MULTI: HttpMethods.PUT,
    OperationNames.PATCH: HttpMethods.PATCH,
    OperationNames.PATCH_MULTI: HttpMethods.PATCH,
    OperationNames.REMOVE: HttpMethods.DELETE,
    OperationNames.REMOVE_MULTI: HttpMethods.DELETE,
}


# =============================================================================
# RESPONSES
# =============================================================================

class ResponseDescriptions:
    """Fixed response descriptions shared by every operation."""

    SUCCESS = "success"
    CREATED = "created"
    NOT_AUTHENTICATED = "not authenticated"
    NOT_FOUND = "not found"
    GENERAL_ERROR = "general error"


FILTER_OPERATORS: List[str] = ["$gt", "$gte", "$lt", "$lte", "$ne", "$in", "$nin"]

SECURITY_ALL = "all"
