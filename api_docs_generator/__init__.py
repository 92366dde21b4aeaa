"""
OpenAPI 3 documentation generator for resource-oriented services.
"""

from .domain.models import CustomOperation, OperationContext, RefTable, ServiceDocs
from .generator import OpenApiV3Generator, save_openapi_spec
from .operations import OPERATION_TEMPLATES

__version__ = "0.1.0"

__all__ = [
    'CustomOperation',
    'OperationContext',
    'RefTable',
    'ServiceDocs',
    'OpenApiV3Generator',
    'save_openapi_spec',
    'OPERATION_TEMPLATES',
]
