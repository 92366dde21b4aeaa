# File: api_docs_generator/config_validation.py
from argparse import Namespace
import sys
import logging
from typing import List, Optional, Dict, Any, Literal, Union, Self
import yaml
from pathlib import Path

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
    ConfigDict,
)

from .constants import DefaultConfig, HttpMethods, OperationNames
from .domain.models import CustomOperation, ServiceDocs, normalize_id
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

MULTI_CHOICES = {"all", *OperationNames.MULTI_VARIANTS.keys(), *OperationNames.MULTI}


# --- Pydantic Models for Configuration Schema ---
class CustomMethodSchema(BaseModel):
    """Schema for a custom (non-CRUD) service method."""

    method: str = Field(
        ..., min_length=1, pattern=r"^\w+$", description="Service method name, also the path suffix."
    )
    http_method: Literal["get", "post", "put", "patch", "delete", "head", "options"] = Field(
        default=HttpMethods.POST, description="HTTP method the custom method is exposed on."
    )
    with_id: bool = Field(
        default=False, description="Whether the method is addressed through the item path."
    )

    @field_validator("http_method", mode="before")
    @classmethod
    def lowercase_http_method(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    def to_custom_operation(self) -> CustomOperation:
        return CustomOperation(method=self.method, http_method=self.http_method, with_id=self.with_id)


class ServiceConfigSchema(BaseModel):
    """Schema for one documented service."""

    path: str = Field(..., min_length=1, description="Route the service is mounted on, e.g. 'users/:userId/posts'.")
    enabled: bool = Field(default=True, description="Set to false to leave the service out of the document.")
    model: Optional[str] = Field(default=None, description="Schema name; defaults to the singular path segment.")
    model_name: Optional[str] = Field(default=None, description="Human readable model name.")
    tag: Optional[str] = Field(default=None, description="Tag grouping the service's operations.")
    description: Optional[str] = Field(default=None, description="Tag description.")
    id_name: Optional[Union[str, List[str]]] = Field(default=None, description="Id field name(s).")
    id_type: Optional[Union[str, List[str]]] = Field(default=None, description="Id schema type(s).")
    methods: List[str] = Field(
        default_factory=lambda: list(OperationNames.STANDARD),
        description="Standard methods the service implements.",
    )
    multi: List[str] = Field(default_factory=list, description="Methods that also accept multiple items.")
    securities: List[str] = Field(default_factory=list, description="Operations requiring the global security.")
    refs: Dict[str, str] = Field(default_factory=dict, description="Role -> schema name overrides.")
    definition: Optional[Dict[str, Any]] = Field(default=None, description="Schema of the service model.")
    schema_definition: Optional[Dict[str, Any]] = Field(
        default=None, alias="schema", description="Alternative spelling of 'definition'."
    )
    definitions: Optional[Dict[str, Dict[str, Any]]] = Field(default=None, description="Extra named schemas.")
    schemas: Optional[Dict[str, Dict[str, Any]]] = Field(default=None, description="Extra named schemas.")
    custom_methods: List[CustomMethodSchema] = Field(default_factory=list)
    operations: Dict[str, Union[bool, Dict[str, Any]]] = Field(
        default_factory=dict, description="Per-operation overrides; false disables the operation."
    )

    model_config = ConfigDict(extra="ignore", populate_by_name=True, protected_namespaces=())

    @field_validator("methods")
    @classmethod
    def check_methods(cls, v: List[str]) -> List[str]:
        unknown = [method for method in v if method not in OperationNames.STANDARD]
        if unknown:
            raise ValueError(
                f"Unknown method(s) {', '.join(unknown)}. Supported: {', '.join(OperationNames.STANDARD)}"
            )
        return v

    @field_validator("multi")
    @classmethod
    def check_multi(cls, v: List[str]) -> List[str]:
        unknown = [method for method in v if method not in MULTI_CHOICES]
        if unknown:
            raise ValueError(f"Unknown multi method(s) {', '.join(unknown)}. Supported: {', '.join(sorted(MULTI_CHOICES))}")
        return v

    @model_validator(mode="after")
    def check_ids(self) -> Self:
        """Reject id_name/id_type lists of different lengths."""
        try:
            normalize_id(
                self.id_name if self.id_name is not None else DefaultConfig.ID_NAME,
                self.id_type if self.id_type is not None else DefaultConfig.ID_TYPE,
            )
        except ConfigurationError as e:
            raise ValueError(e.message) from e
        return self

    def to_service_docs(self) -> ServiceDocs:
        return ServiceDocs(
            enabled=self.enabled,
            model=self.model,
            model_name=self.model_name,
            tag=self.tag,
            description=self.description,
            id_name=self.id_name,
            id_type=self.id_type,
            methods=list(self.methods),
            multi=list(self.multi),
            securities=list(self.securities),
            refs=dict(self.refs),
            definition=self.definition,
            schema=self.schema_definition,
            definitions=self.definitions,
            schemas=self.schemas,
            custom_methods=[custom.to_custom_operation() for custom in self.custom_methods],
            operations=dict(self.operations),
        )


class GeneratorConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    openapi_title: str = Field(
        default=DefaultConfig.OPENAPI_TITLE,
        min_length=1,
        description="Title for the OpenAPI specification.",
    )
    openapi_version: str = Field(
        default=DefaultConfig.OPENAPI_VERSION_NUMBER,
        min_length=1,
        description="Version string of the documented API.",
    )
    openapi_description: str = Field(
        default=DefaultConfig.OPENAPI_DESCRIPTION,
        description="Description for the OpenAPI specification.",
    )
    servers: List[Dict[str, Any]] = Field(default_factory=list, description="OpenAPI Server Objects.")
    security: List[Dict[str, List[str]]] = Field(
        default_factory=list, description="Security requirements applied to secured operations."
    )
    security_schemes: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict, description="components.securitySchemes entries."
    )
    id_separator: str = Field(
        default=DefaultConfig.ID_SEPARATOR,
        min_length=1,
        description="Separator between composite id placeholders in item paths.",
    )
    ignore_paths: List[str] = Field(default_factory=list, description="Service paths to leave out.")
    ignore_tags: List[str] = Field(default_factory=list, description="Tags to leave out.")
    output_file: str = Field(
        default=DefaultConfig.OUTPUT_FILE,
        min_length=1,
        description="Where to write the document (.yaml, .yml or .json).",
    )
    services: List[ServiceConfigSchema] = Field(default_factory=list, description="Services to document, in order.")

    @field_validator("output_file")
    @classmethod
    def check_output_suffix(cls, v: str) -> str:
        if Path(v).suffix.lower() not in (".yaml", ".yml", ".json"):
            raise ValueError(f"output_file '{v}' must end in .yaml, .yml or .json")
        return v

    @model_validator(mode="after")
    def check_security_config(self) -> Self:
        """Warn about services that secure operations without any global security."""
        if not self.security:
            secured = [service.path for service in self.services if service.securities]
            if secured:
                logger.warning(
                    f"Services {', '.join(secured)} declare 'securities' but no top-level 'security' is configured; "
                    "their operations will be documented as open."
                )
        return self

    model_config = ConfigDict(
        extra="ignore",
    )

    def to_specs(self) -> Dict[str, Any]:
        """Document-level fields merged over the empty document skeleton."""
        specs: Dict[str, Any] = {
            "info": {
                "title": self.openapi_title,
                "version": self.openapi_version,
                "description": self.openapi_description,
            },
        }
        if self.servers:
            specs["servers"] = self.servers
        if self.security:
            specs["security"] = self.security
        if self.security_schemes:
            specs["components"] = {"securitySchemes": self.security_schemes}
        return specs


# --- Validation Function ---
def validate_and_parse_config(
    config_dict: Dict[str, Any], config_file: Optional[str] = None
) -> GeneratorConfigSchema:
    """
    Validates a raw configuration dictionary against the GeneratorConfigSchema.

    Raises:
        ConfigurationError: with every validation error listed on stderr.
    """
    try:
        validated_config = GeneratorConfigSchema.model_validate(config_dict)
        logger.debug("Configuration dictionary parsed and validated successfully against schema.")
        return validated_config
    except ValidationError as e:
        logger.critical("Configuration validation failed! Please check your config file or arguments.")
        print("\n--- Configuration Errors ---", file=sys.stderr)
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            msg = error.get("msg", "Unknown validation error")
            print(f"  - Location: '{loc_str}'", file=sys.stderr)
            print(f"    Error:    {msg}", file=sys.stderr)
        print("----------------------------", file=sys.stderr)
        raise ConfigurationError(
            f"Configuration validation failed with {e.error_count()} error(s)",
            config_file=config_file,
        ) from e


def load_config(config_path: Optional[str], cli_args: Optional[Namespace] = None) -> GeneratorConfigSchema:
    """
    Loads configuration from a YAML file, merges with CLI arguments,
    validates the result, and returns a validated Pydantic model instance.

    Raises:
        ConfigurationError: if the file is missing, unparsable or invalid.
    """
    raw_config: Dict[str, Any] = {}

    # 1. Load from YAML file if path is provided
    if config_path:
        config_file = Path(config_path)
        if not config_file.is_file():
            raise ConfigurationError(f"Config file not found at {config_path}", config_file=config_path)
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing YAML file {config_path}: {e}", config_file=config_path) from e

        if yaml_config and isinstance(yaml_config, dict):
            raw_config.update(yaml_config)
            logger.debug(f"Loaded configuration from {config_path}")
        elif yaml_config:
            raise ConfigurationError(
                f"Content in config file {config_path} is not a mapping", config_file=config_path
            )

    # 2. Override with CLI arguments (only those explicitly provided)
    if cli_args is not None:
        overridden_keys = set()
        for key, value in vars(cli_args).items():
            if value is not None and key in GeneratorConfigSchema.model_fields and key != "services":
                raw_config[key] = value
                overridden_keys.add(key)
        if overridden_keys:
            logger.debug(f"Overridden config keys from CLI arguments: {overridden_keys}")

    # 3. Validate
    logger.info("Validating final configuration...")
    validated_config = validate_and_parse_config(raw_config, config_file=config_path)

    logger.info(f"Configuration loaded: {len(validated_config.services)} service(s) to document.")
    return validated_config
