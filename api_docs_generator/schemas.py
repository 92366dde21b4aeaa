"""
Schema registrar: merges a service's schema definitions into
``components.schemas``.
"""

import logging
from typing import Any, Callable, Dict, Optional

from .constants import LIST_SCHEMA_SUFFIX
from .domain.models import ServiceDocs
from .fragments import schema_ref


logger = logging.getLogger(__name__)

SchemasGenerator = Callable[[Any, str, str, Dict[str, Any]], Dict[str, Any]]


def list_schema_name(model: str) -> str:
    return f"{model}{LIST_SCHEMA_SUFFIX}"


def add_definition_to_schemas(
    schemas: Dict[str, Any], definition: Any, model: str, model_name: str
) -> None:
    """Register ``definition`` under ``model`` together with its ``<model>_list`` array schema."""
    schemas[model] = definition
    schemas[list_schema_name(model)] = {
        "title": f"{model_name} list",
        "type": "array",
        "items": {"$ref": schema_ref(model)},
    }


def apply_definitions_to_schemas(
    schemas: Dict[str, Any],
    docs: ServiceDocs,
    model: str,
    model_name: str,
    schemas_generator: Optional[SchemasGenerator] = None,
    service: Any = None,
) -> Dict[str, Any]:
    """
    Merge every schema source of a service into ``schemas``, in place.

    Sources are applied in this order, later ones overwriting same-named keys:
    ``definition``, ``schema``, ``definitions``, ``schemas`` and finally the
    return value of ``schemas_generator(service, model, model_name, schemas)``.

    Returns:
        The same ``schemas`` mapping, for chaining.
    """
    if docs.definition is not None:
        add_definition_to_schemas(schemas, docs.definition, model, model_name)
    if docs.schema is not None:
        if docs.definition is not None:
            logger.debug(f"Both 'definition' and 'schema' given for {model}; 'schema' wins")
        add_definition_to_schemas(schemas, docs.schema, model, model_name)
    if docs.definitions is not None:
        schemas.update(docs.definitions)
    if docs.schemas is not None:
        schemas.update(docs.schemas)
    if callable(schemas_generator):
        generated = schemas_generator(service, model, model_name, schemas)
        if generated:
            schemas.update(generated)

    logger.debug(f"Schemas registered for {model}: {len(schemas)} total")
    return schemas
