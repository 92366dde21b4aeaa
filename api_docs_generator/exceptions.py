"""
Custom exception hierarchy for the API docs generator.

Operation templates never raise; everything here surfaces from configuration
loading, service registration, reference validation and output writing.
"""

from typing import Dict, Any, Optional, List


class ApiDocsGeneratorError(Exception):
    """
    Base exception for all API docs generator errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [self.message]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(ApiDocsGeneratorError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify all required fields are present",
                "Make sure id_name and id_type lists have the same length",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class ServiceRegistrationError(ApiDocsGeneratorError):
    """Raised when a service cannot be registered with the generator."""

    def __init__(self, message: str, path: str = None, operation: str = None, **kwargs):
        context = kwargs.get('context', {})
        if path:
            context['path'] = path
        if operation:
            context['operation'] = operation

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the service 'methods' and 'multi' lists for typos",
                "Verify custom methods use a known HTTP method",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="SERVICE_REGISTRATION_ERROR"
        )


class ReferenceValidationError(ApiDocsGeneratorError):
    """Raised when the document references schemas that were never registered."""

    def __init__(self, message: str, missing: List[str] = None, **kwargs):
        context = kwargs.get('context', {})
        if missing:
            context['missing_schemas'] = ", ".join(sorted(set(missing)))

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Supply a definition/schema for every referenced model",
                "Override the service 'refs' to point at registered schemas",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="REFERENCE_VALIDATION_ERROR"
        )


class OutputError(ApiDocsGeneratorError):
    """Raised when the generated document cannot be written."""

    def __init__(self, message: str, output_path: str = None, **kwargs):
        context = kwargs.get('context', {})
        if output_path:
            context['output_path'] = output_path

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the output directory is writable",
                "Use a .yaml, .yml or .json file extension",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="OUTPUT_ERROR"
        )


def raise_configuration_error(message: str, config_file: str = None, **kwargs):
    """Convenience function to raise configuration errors."""
    raise ConfigurationError(message, config_file=config_file, **kwargs)
