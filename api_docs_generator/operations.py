"""
Operation templates: one pure function per operation kind.

Each template maps an OperationContext to a complete OpenAPI Operation
Object. Templates never raise; a role missing from the ref table only drops
the matching ``content`` entry, the response or request body stays.
"""

from typing import Any, Callable, Dict, List, Optional

from .constants import HttpMethods, OperationNames, ResponseDescriptions
from .domain.models import CustomOperation, OperationContext
from .fragments import (
    api_key_security,
    filter_parameter,
    id_path_parameters,
    join_parameter,
    json_schema_ref,
)


OperationTemplate = Callable[..., Dict[str, Any]]


def _with_content(obj: Dict[str, Any], ref: Optional[str]) -> Dict[str, Any]:
    if ref:
        obj["content"] = json_schema_ref(ref)
    return obj


def _request_body(ref: Optional[str]) -> Dict[str, Any]:
    return _with_content({"required": True}, ref)


def _responses(ref: Optional[str], status: str = "200", not_found: bool = False) -> Dict[str, Any]:
    """Build the response map shared by every operation."""
    description = ResponseDescriptions.CREATED if status == "201" else ResponseDescriptions.SUCCESS
    responses = {
        status: _with_content({"description": description}, ref),
        "401": {"description": ResponseDescriptions.NOT_AUTHENTICATED},
    }
    if not_found:
        responses["404"] = {"description": ResponseDescriptions.NOT_FOUND}
    responses["500"] = {"description": ResponseDescriptions.GENERAL_ERROR}
    return responses


def _id_parameters(context: OperationContext, description: str) -> List[Dict[str, Any]]:
    names = [name for name, _ in context.ids.pairs()]
    types = [type_ for _, type_ in context.ids.pairs()]
    return id_path_parameters(names, types, description)


def find(context: OperationContext) -> Dict[str, Any]:
    refs = context.refs
    return {
        "tags": context.tags,
        "description": "Retrieves a list of all resources from the service.",
        "parameters": [
            {
                "description": "Number of results to return",
                "in": "query",
                "name": "$limit",
                "schema": {
                    "type": "integer"
                }
            },
            {
                "description": "Number of results to skip",
                "in": "query",
                "name": "$skip",
                "schema": {
                    "type": "integer"
                }
            },
            {
                "description": "Property to sort results",
                "in": "query",
                "name": "$sort[parameter]",
                "style": "deepObject",
                "schema": {
                    "type": "integer",
                    "enum": [1, -1]
                }
            },
            join_parameter(refs),
            *filter_parameter(refs),
            api_key_security(),
        ],
        "responses": _responses(refs.get("findResponse")),
        "security": context.security_for(OperationNames.FIND),
    }


def get(context: OperationContext) -> Dict[str, Any]:
    return {
        "tags": context.tags,
        "description": "Retrieves a single resource with the given id from the service.",
        "parameters": _id_parameters(context, f"ID of {context.model_name} to return"),
        "responses": _responses(context.refs.get("getResponse"), not_found=True),
        "security": context.security_for(OperationNames.GET),
    }


def create(context: OperationContext) -> Dict[str, Any]:
    refs = context.refs
    return {
        "tags": context.tags,
        "description": "Creates a new resource with data.",
        "requestBody": _request_body(refs.get("createRequest")),
        "responses": _responses(refs.get("createResponse"), status="201"),
        "security": context.security_for(OperationNames.CREATE),
    }


def update(context: OperationContext) -> Dict[str, Any]:
    refs = context.refs
    return {
        "tags": context.tags,
        "description": "Updates the resource identified by id using data.",
        "parameters": _id_parameters(context, f"ID of {context.model_name} to update"),
        "requestBody": _request_body(refs.get("updateRequest")),
        "responses": _responses(refs.get("updateResponse"), not_found=True),
        "security": context.security_for(OperationNames.UPDATE),
    }


def update_multi(context: OperationContext) -> Dict[str, Any]:
    refs = context.refs
    return {
        "tags": context.tags,
        "description": "Updates multiple resources.",
        "parameters": [],
        "requestBody": _request_body(refs.get("updateMultiRequest")),
        "responses": _responses(refs.get("updateMultiResponse")),
        "security": context.security_for(OperationNames.UPDATE_MULTI),
    }


def patch(context: OperationContext) -> Dict[str, Any]:
    refs = context.refs
    return {
        "tags": context.tags,
        "description": "Updates the resource identified by id using data.",
        "parameters": _id_parameters(context, f"ID of {context.model_name} to update"),
        "requestBody": _request_body(refs.get("patchRequest")),
        "responses": _responses(refs.get("patchResponse"), not_found=True),
        "security": context.security_for(OperationNames.PATCH),
    }


def patch_multi(context: OperationContext) -> Dict[str, Any]:
    refs = context.refs
    return {
        "tags": context.tags,
        "description": "Updates multiple resources queried by given filters.",
        "parameters": filter_parameter(refs),
        "requestBody": _request_body(refs.get("patchMultiRequest")),
        "responses": _responses(refs.get("patchMultiResponse")),
        "security": context.security_for(OperationNames.PATCH_MULTI),
    }


def remove(context: OperationContext) -> Dict[str, Any]:
    return {
        "tags": context.tags,
        "description": "Removes the resource with id.",
        "parameters": _id_parameters(context, f"ID of {context.model_name} to remove"),
        "responses": _responses(context.refs.get("removeResponse"), not_found=True),
        "security": context.security_for(OperationNames.REMOVE),
    }


def remove_multi(context: OperationContext) -> Dict[str, Any]:
    refs = context.refs
    return {
        "tags": context.tags,
        "description": "Removes multiple resources queried by given filters.",
        "parameters": filter_parameter(refs),
        "responses": _responses(refs.get("removeMultiResponse")),
        "security": context.security_for(OperationNames.REMOVE_MULTI),
    }


def custom(context: OperationContext, operation: CustomOperation) -> Dict[str, Any]:
    """
    Describe a custom service method.

    Path parameters are added only for ``with_id`` methods. A request body is
    added only for body-carrying HTTP methods with a ``<method>Request`` ref.
    Security is resolved with the custom method name as the operation name.
    """
    method = operation.method
    custom_doc = {
        "tags": context.tags,
        "description": f"A custom {method} method.",
        "responses": _responses(context.refs.response_for(method)),
        "security": context.security_for(method),
    }

    if operation.with_id:
        custom_doc["parameters"] = _id_parameters(context, f"ID of {context.model_name}")

    if operation.http_method in HttpMethods.WITH_BODY:
        request_ref = context.refs.request_for(method)
        if request_ref:
            custom_doc["requestBody"] = _request_body(request_ref)

    return custom_doc


OPERATION_TEMPLATES: Dict[str, OperationTemplate] = {
    OperationNames.FIND: find,
    OperationNames.GET: get,
    OperationNames.CREATE: create,
    OperationNames.UPDATE: update,
    OperationNames.UPDATE_MULTI: update_multi,
    OperationNames.PATCH: patch,
    OperationNames.PATCH_MULTI: patch_multi,
    OperationNames.REMOVE: remove,
    OperationNames.REMOVE_MULTI: remove_multi,
    OperationNames.CUSTOM: custom,
}
