import argparse
import logging
import sys
from typing import List, Optional

from api_docs_generator.config_validation import GeneratorConfigSchema, load_config
from api_docs_generator.exceptions import ApiDocsGeneratorError
from api_docs_generator.generator import OpenApiV3Generator, save_openapi_spec

from api_docs_generator.colored_logging import (
    setup_colored_logging,
    get_colored_logger,
    log_success,
    log_progress,
    log_section,
)

logger = get_colored_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate an OpenAPI 3 document describing resource services declared in a YAML file."
    )
    parser.add_argument(
        "-c",
        "--config",
        required=True,
        help="Path to the YAML configuration file listing the services to document.",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output_file",
        help="File to write the document to (.yaml, .yml or .json). Overrides config file setting.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail if the document references schemas that were never defined.",
    )
    return parser


def build_generator(config: GeneratorConfigSchema) -> OpenApiV3Generator:
    """Create a generator and register every configured service in file order."""
    generator = OpenApiV3Generator(
        specs=config.to_specs(),
        ignore_paths=config.ignore_paths,
        ignore_tags=config.ignore_tags,
        id_separator=config.id_separator,
    )
    for service_config in config.services:
        log_progress(logger, f"Registering service '{service_config.path}'...")
        generator.add_service(service_config.path, service_config.to_service_docs())
    return generator


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)

    if args.verbose:
        logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    # --- Main Execution Pipeline ---
    try:
        # 1. Load Configuration
        log_progress(logger, "Loading configuration...")
        config = load_config(args.config, args)
        if not config.services:
            logger.warning("Configuration does not declare any services; the document will have no paths.")

        # 2. Register services
        log_section(logger, "Service Registration")
        generator = build_generator(config)

        # 3. Check schema references
        log_section(logger, "Reference Validation")
        log_progress(logger, "Validating schema references...")
        result = generator.validate_refs(strict=args.strict)
        if result.is_valid:
            log_success(logger, "All schema references resolve.")

        # 4. Save
        log_section(logger, "Output")
        output_path = save_openapi_spec(generator.to_dict(), config.output_file)
        log_success(logger, f"OpenAPI document generated at {output_path}")

    except ApiDocsGeneratorError as e:
        logger.error(str(e), exc_info=args.verbose)
        return 1
    except Exception as e:
        logger.error(f"An unexpected error occurred during generation: {e}", exc_info=True)
        return 1

    return 0


# --- Script Entry Point ---
if __name__ == "__main__":
    sys.exit(main())
