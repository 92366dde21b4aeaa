import copy
import json
import logging
import threading
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .constants import (
    DefaultConfig,
    HttpMethods,
    OPERATION_HTTP_METHODS,
    OperationNames,
)
from .defaults import get_default_specs, get_operation_spec_defaults, get_path_parameter_spec
from .domain.models import OperationContext, RefTable, ServiceDocs
from .domain.naming import item_path, last_static_segment, pluralize, singularize, split_route
from .exceptions import OutputError, ServiceRegistrationError
from .operations import OPERATION_TEMPLATES, custom as custom_template
from .schemas import SchemasGenerator, apply_definitions_to_schemas, list_schema_name
from .security import security as default_security_resolver
from .validators import ValidationResult, validate_document_refs


logger = logging.getLogger(__name__)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into ``base`` in place; non-dict values are replaced."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def default_refs(model: str) -> Dict[str, str]:
    """Schema names wired to each operation role when a service does not override them."""
    model_list = list_schema_name(model)
    return {
        "findResponse": model_list,
        "getResponse": model,
        "createRequest": model,
        "createResponse": model,
        "updateRequest": model,
        "updateResponse": model,
        "updateMultiRequest": model_list,
        "updateMultiResponse": model_list,
        "patchRequest": model,
        "patchResponse": model,
        "patchMultiRequest": model,
        "patchMultiResponse": model_list,
        "removeResponse": model,
        "removeMultiResponse": model_list,
    }


@dataclass
class ServiceRegistration:
    """Everything one service adds to the document, built before any of it is committed."""

    path: str
    tag: Dict[str, str]
    operations: List[Tuple[str, str, Dict[str, Any]]] = field(default_factory=list)
    schemas: Dict[str, Any] = field(default_factory=dict)


class OpenApiV3Generator:
    """
    Accumulates the OpenAPI 3 document for a set of resource services.

    The aggregate document is only ever extended, and only through
    ``add_service``: a later registration overwrites same-named schemas and
    same path/method operations of an earlier one. A registration that fails
    leaves the document untouched.

    ``security_resolver`` and ``schemas_generator`` are called without the
    session lock held, so they may call back into ``to_dict``.
    """

    def __init__(
        self,
        specs: Optional[Dict[str, Any]] = None,
        security_resolver=default_security_resolver,
        schemas_generator: Optional[SchemasGenerator] = None,
        ignore_paths: Optional[List[str]] = None,
        ignore_tags: Optional[List[str]] = None,
        id_separator: str = DefaultConfig.ID_SEPARATOR,
    ):
        self._specs = get_default_specs()
        if specs:
            _deep_merge(self._specs, specs)
        self.security_resolver = security_resolver
        self.schemas_generator = schemas_generator
        self.ignore_paths = [path.strip("/") for path in (ignore_paths or [])]
        self.ignore_tags = list(ignore_tags or [])
        self.id_separator = id_separator
        self._lock = threading.Lock()

    # --- Registration ---

    def add_service(self, path: str, docs: Optional[ServiceDocs] = None, service: Any = None) -> bool:
        """
        Register a service mounted at ``path`` and document its operations.

        Returns:
            True if the service was added to the document, False if skipped.

        Raises:
            ServiceRegistrationError: for unknown operation or HTTP method names.
            ConfigurationError: for mismatched id name/type lists.
        """
        registration = self._prepare_service(path, docs or ServiceDocs(), service)
        if registration is None:
            return False
        with self._lock:
            self._commit(registration)
        logger.info(f"Service '{path}' documented")
        return True

    def _prepare_service(
        self, path: str, docs: ServiceDocs, service: Any = None
    ) -> Optional[ServiceRegistration]:
        """
        Build and validate everything ``path`` would add, without touching the document.

        Returns:
            The pending registration, or None if the service is skipped.
        """
        if not docs.enabled:
            logger.debug(f"Skipping service '{path}': documentation disabled")
            return None

        route = path.strip("/")
        segment = last_static_segment(route)
        tag = docs.tag or segment

        if self._is_ignored(route, tag):
            logger.info(f"Skipping ignored service '{path}' (tag '{tag}')")
            return None

        names = self._operation_names(path, docs)
        for custom in docs.custom_methods:
            if custom.http_method not in HttpMethods.ALL:
                raise ServiceRegistrationError(
                    f"Unknown HTTP method '{custom.http_method}' for custom method '{custom.method}'",
                    path=path,
                    operation=custom.method,
                )

        model = docs.model or singularize(segment)
        model_name = docs.model_name or model
        base_path, route_params = split_route(route)

        context = OperationContext(
            tags=[tag],
            model_name=model_name,
            id_name=docs.id_name if docs.id_name is not None else DefaultConfig.ID_NAME,
            id_type=docs.id_type if docs.id_type is not None else DefaultConfig.ID_TYPE,
            security=self._specs.get("security"),
            securities=docs.securities,
            refs=RefTable(docs.refs).with_defaults(default_refs(model)),
            resolve_security=self.security_resolver,
        )
        id_names = [name for name, _ in context.ids.pairs()]
        path_parameters = [get_path_parameter_spec(name) for name in route_params]
        item = item_path(base_path, id_names, self.id_separator)

        logger.debug(f"Registering service '{path}' as model '{model}' with tag '{tag}'")
        registration = ServiceRegistration(
            path=path,
            tag={"name": tag, "description": docs.description or f"{pluralize(model_name)} service"},
        )

        for name in names:
            operation = self._build_operation(name, OPERATION_TEMPLATES[name](context), docs)
            if operation is not None:
                operation_path = item if name in OperationNames.ITEM else base_path
                registration.operations.append(
                    (operation_path, OPERATION_HTTP_METHODS[name], _with_path_parameters(operation, path_parameters))
                )

        for custom in docs.custom_methods:
            operation = self._build_operation(custom.method, custom_template(context, custom), docs)
            if operation is not None:
                parent = item if custom.with_id else base_path
                registration.operations.append(
                    (f"{parent}/{custom.method}", custom.http_method, _with_path_parameters(operation, path_parameters))
                )

        registration.schemas = self._prepare_schemas(docs, model, model_name, service)
        return registration

    def _operation_names(self, path: str, docs: ServiceDocs) -> List[str]:
        """Standard operations the service exposes, followed by their requested multi variants."""
        names = []
        for method in docs.methods:
            if method not in OperationNames.STANDARD:
                raise ServiceRegistrationError(f"Unknown service method '{method}'", path=path, operation=method)
            names.append(method)

        multi = set(docs.multi)
        for base, variant in OperationNames.MULTI_VARIANTS.items():
            if not ({"all", base, variant} & multi):
                continue
            if base not in names:
                logger.debug(f"Service '{path}' requests {variant} without implementing {base}; skipping")
                continue
            names.append(variant)
        return names

    def _build_operation(
        self, name: str, template_output: Dict[str, Any], docs: ServiceDocs
    ) -> Optional[Dict[str, Any]]:
        """Layer the operation skeleton, the template output and per-operation overrides."""
        override = docs.operations.get(name)
        if override is False:
            logger.debug(f"Operation '{name}' disabled by service docs")
            return None

        operation = get_operation_spec_defaults()
        operation.update(copy.deepcopy(template_output))
        if isinstance(override, dict):
            _deep_merge(operation, override)
        return operation

    def _prepare_schemas(
        self, docs: ServiceDocs, model: str, model_name: str, service: Any
    ) -> Dict[str, Any]:
        """Schemas the service adds or replaces, computed against a snapshot of the current ones."""
        with self._lock:
            current = dict(self._specs["components"]["schemas"])
        staged = apply_definitions_to_schemas(
            dict(current),
            docs,
            model,
            model_name,
            schemas_generator=self.schemas_generator,
            service=service,
        )
        return {
            name: schema for name, schema in staged.items()
            if name not in current or current[name] is not schema
        }

    def _is_ignored(self, route: str, tag: str) -> bool:
        if tag in self.ignore_tags:
            return True
        return any(route == ignored or route.startswith(f"{ignored}/") for ignored in self.ignore_paths)

    def _commit(self, registration: ServiceRegistration) -> None:
        """Write a prepared registration into the document. Callers hold the lock."""
        tags = self._specs["tags"]
        if not any(existing.get("name") == registration.tag["name"] for existing in tags):
            tags.append(registration.tag)

        paths = self._specs["paths"]
        for path, http_method, operation in registration.operations:
            path_item = paths.setdefault(path, {})
            if http_method in path_item:
                logger.warning(f"Operation {http_method.upper()} {path} registered twice; keeping the latest")
            path_item[http_method] = operation

        self._specs["components"]["schemas"].update(registration.schemas)

    # --- Output ---

    def to_dict(self) -> Dict[str, Any]:
        """Return a deep copy of the aggregate document."""
        with self._lock:
            return copy.deepcopy(self._specs)

    def validate_refs(self, strict: bool = False) -> ValidationResult:
        """
        Check that every schema reference resolves.

        Raises:
            ReferenceValidationError: in strict mode, if any reference dangles.
        """
        result = validate_document_refs(self.to_dict())
        for warning in result.warnings:
            logger.debug(warning)
        for error in result.errors:
            logger.warning(error)
        if strict:
            result.raise_if_invalid()
        return result


def _with_path_parameters(operation: Dict[str, Any], path_parameters: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Prepend route placeholder parameters to the operation's own parameters."""
    if path_parameters:
        operation["parameters"] = copy.deepcopy(path_parameters) + operation.get("parameters", [])
    return operation


def save_openapi_spec(spec_dict: Dict[str, Any], output_path: Union[str, Path]) -> Path:
    """
    Save the OpenAPI document as YAML, or as JSON for a ``.json`` path.

    Raises:
        OutputError: if the file cannot be written.
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            if output_path.suffix.lower() == ".json":
                json.dump(spec_dict, f, indent=2, ensure_ascii=False)
            else:
                # sort_keys=False preserves registration order
                yaml.safe_dump(spec_dict, f, sort_keys=False, allow_unicode=True)
    except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
        logger.error(f"Failed to save OpenAPI specification to {output_path}: {e}")
        raise OutputError(f"Failed to save OpenAPI specification: {e}", output_path=str(output_path)) from e

    logger.info(f"OpenAPI specification saved to {output_path}")
    return output_path
