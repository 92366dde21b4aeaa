"""
Domain module for the API docs generator.

This module contains the models the operation templates consume, separated
from document assembly and configuration concerns.
"""

from .models import (
    SingleId,
    CompositeId,
    IdSpec,
    normalize_id,
    RefTable,
    OperationContext,
    CustomOperation,
    ServiceDocs,
)

from .naming import (
    singularize,
    pluralize,
    split_route,
    last_static_segment,
    item_path,
)

__all__ = [
    # Core models
    'SingleId',
    'CompositeId',
    'IdSpec',
    'normalize_id',
    'RefTable',
    'OperationContext',
    'CustomOperation',
    'ServiceDocs',

    # Naming
    'singularize',
    'pluralize',
    'split_route',
    'last_static_segment',
    'item_path',
]
