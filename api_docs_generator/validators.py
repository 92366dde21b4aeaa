"""
Validation utilities for generated documents.

Checks that every ``$ref`` into ``components.schemas`` points at a schema
that was actually registered.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List

from .constants import SCHEMA_REF_PREFIX
from .exceptions import ReferenceValidationError


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    is_valid: bool
    errors: List[str]
    warnings: List[str]
    missing_schemas: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Ensure consistency."""
        if self.errors and self.is_valid:
            self.is_valid = False

    def add_error(self, error: str) -> None:
        """Add an error."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning."""
        self.warnings.append(warning)

    def add_missing_schema(self, name: str) -> None:
        self.missing_schemas.append(name)
        self.add_error(f"Schema '{name}' is referenced but not defined")

    def raise_if_invalid(self) -> None:
        """Raise ReferenceValidationError if invalid."""
        if not self.is_valid:
            raise ReferenceValidationError(
                f"{len(self.errors)} dangling schema reference(s) in generated document",
                missing=self.missing_schemas,
                context={"errors": self.errors, "warnings": self.warnings}
            )


def find_schema_refs(node: Any) -> Iterator[str]:
    """Yield every ``$ref`` string found anywhere under ``node``."""
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "$ref" and isinstance(value, str):
                yield value
            else:
                yield from find_schema_refs(value)
    elif isinstance(node, list):
        for item in node:
            yield from find_schema_refs(item)


def validate_document_refs(document: Dict[str, Any]) -> ValidationResult:
    """
    Confirm every schema reference in ``document`` resolves.

    Missing schema names are collected in first-seen order. References
    outside ``#/components/schemas/`` are reported as warnings.
    """
    result = ValidationResult(True, [], [])
    schemas = document.get("components", {}).get("schemas", {})
    reported = set()

    for ref in find_schema_refs(document):
        if ref in reported:
            continue
        reported.add(ref)

        if not ref.startswith(SCHEMA_REF_PREFIX):
            result.add_warning(f"Reference '{ref}' is not a component schema and was not checked")
            continue

        name = ref[len(SCHEMA_REF_PREFIX):]
        if name not in schemas:
            result.add_missing_schema(name)

    return result
