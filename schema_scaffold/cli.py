import argparse
import getpass
import logging
import sys
from typing import Callable, Optional

from schema_scaffold.codegen import TemplateRenderer
from schema_scaffold.config_validation import ScaffoldConfig, generate_secret_key, load_config
from schema_scaffold.constants import LOG_FORMAT, MASKED_VALUE
from schema_scaffold.domain.naming import is_blank
from schema_scaffold.exceptions import ConfigurationError, ScaffoldError
from schema_scaffold.generator import run_generation
from schema_scaffold.introspection import DjangoSchemaIntrospector, setup_django

from schema_scaffold.colored_logging import (
    setup_colored_logging,
    get_colored_logger,
    log_success,
    log_progress,
    log_section,
)

# Note: Colored logging will be configured after parsing args
logger = None

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_WARNINGS = 2

_TRUE_ANSWERS = ("y", "yes", "true", "1")
_FALSE_ANSWERS = ("n", "no", "false", "0")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schema-scaffold",
        description="Generate a layered Java/MyBatis service skeleton from existing database tables.",
    )
    parser.add_argument("-c", "--config", help="Path to the YAML configuration file.")
    parser.add_argument("-p", "--project-name", dest="project_name", help="Project (artifact) name.")
    parser.add_argument("-b", "--base-package", dest="base_package", help="Base package, e.g. com.acme.shop.")
    parser.add_argument("-t", "--tables", help="Comma-separated table names to generate.")
    parser.add_argument("--url", help="Database URL, e.g. jdbc:mysql://localhost:3306/shop.")
    parser.add_argument("--driver", help="Database driver name (informational).")
    parser.add_argument("--username", help="Database user.")
    parser.add_argument("--password", help="Database password.")
    parser.add_argument(
        "-o",
        "--output-root",
        dest="output_root",
        help="Directory the generated module paths are resolved against.",
    )
    parser.add_argument(
        "--step-in",
        dest="step_in",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Generate inside an existing project (default) or under a new project directory.",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        default=None,
        help="Re-render existing files. Application YAML files are never overwritten.",
    )
    parser.add_argument(
        "--template-dir",
        dest="template_dir",
        help="Directory with templates replacing the packaged ones.",
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
    return parser


# --- Interactive Prompts ---
def get_non_blank_input(prompt: str, current: Optional[str], input_func: Callable[[str], str] = input) -> str:
    """Return ``current`` if set, otherwise ask until a non-blank answer is given."""
    if not is_blank(current):
        return current
    answer = ""
    while is_blank(answer):
        answer = input_func(prompt).strip()
    return answer


def get_optional_input(
    prompt: str,
    current: Optional[str],
    default: Optional[str] = None,
    input_func: Callable[[str], str] = input,
) -> Optional[str]:
    if not is_blank(current):
        return current
    answer = input_func(prompt).strip()
    return default if is_blank(answer) else answer


def get_boolean_input(
    prompt: str,
    current: Optional[bool],
    default: bool = False,
    input_func: Callable[[str], str] = input,
) -> bool:
    """Ask a yes/no question; an empty answer gives ``default``, unknown answers re-prompt."""
    if current is not None:
        return current
    while True:
        answer = input_func(prompt).strip().lower()
        if not answer:
            return default
        if answer in _TRUE_ANSWERS:
            return True
        if answer in _FALSE_ANSWERS:
            return False


def prompt_for_missing_values(
    args: argparse.Namespace,
    input_func: Callable[[str], str] = input,
    password_func: Callable[[str], str] = getpass.getpass,
) -> argparse.Namespace:
    """Fill missing required options from the console."""
    required = (args.project_name, args.base_package, args.url, args.tables)
    if all(not is_blank(value) for value in required):
        return args

    args.project_name = get_non_blank_input("Project Name [required]: ", args.project_name, input_func)
    args.base_package = get_non_blank_input("Base Package [required]: ", args.base_package, input_func)
    args.url = get_non_blank_input("Database URL [required]: ", args.url, input_func)
    args.username = get_optional_input("Username [optional]: ", args.username, input_func=input_func)
    args.password = get_optional_input("Password [optional]: ", args.password, input_func=password_func)
    args.tables = get_non_blank_input("Table Names [required]: ", args.tables, input_func)
    args.overwrite = get_boolean_input(
        "Overwrite existing files? (y/N, default N): ", args.overwrite, False, input_func
    )
    return args


def log_configuration(config: ScaffoldConfig) -> None:
    """Log the effective configuration; the password is never printed."""
    database = config.database
    rows = [
        ("Project Name", config.project_name),
        ("Base Package", config.base_package),
        ("Database URL", database.url if database else None),
        ("Driver Class", database.driver if database else None),
        ("Database User", database.username if database else None),
        ("Password", MASKED_VALUE if database and database.password else None),
        ("Table Names", config.tables),
        ("Step In", config.step_in),
        ("Overwrite Files", config.overwrite),
        ("Output Root", config.output_root),
    ]
    log_section(logger, "Code Generation Configuration")
    for label, value in rows:
        logger.info(LOG_FORMAT % (label, value))


def main(argv=None) -> int:
    # --- Argument Parsing ---
    parser = build_parser()
    args = parser.parse_args(argv)

    # --- Logging Setup ---
    use_colors = not args.no_color
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=use_colors)

    global logger
    logger = get_colored_logger(__name__)

    if args.verbose:
        logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    # --- Main Execution Pipeline ---
    try:
        # 1. Collect missing values interactively
        if not args.config and sys.stdin.isatty():
            prompt_for_missing_values(args)

        # 2. Load Configuration
        log_progress(logger, "Loading configuration...")
        config = load_config(args.config, args)
        log_success(logger, "Configuration loaded and validated successfully.")
        log_configuration(config)

        if config.database is None or is_blank(config.database.url):
            raise ConfigurationError(
                "No database URL configured.",
                config_file=args.config,
                suggestions=["Pass --url or set 'database.url' in the config file"],
            )

        # 3. Setup Django for introspection
        setup_django({"default": config.database}, generate_secret_key())
        column_source = DjangoSchemaIntrospector()

        # 4. Generate
        log_section(logger, "Code Generation")
        log_progress(logger, "Starting code generation...")
        report = run_generation(
            config,
            column_source,
            renderer=TemplateRenderer(template_dir=config.template_dir),
        )

        # --- Summary ---
        log_section(logger, "Summary")
        logger.info(LOG_FORMAT % ("Tables", len(report.tables)))
        logger.info(LOG_FORMAT % ("Generated", report.generated))
        logger.info(LOG_FORMAT % ("Skipped", report.skipped))
        logger.info(LOG_FORMAT % ("Failed", report.failed))
        if not report.succeeded:
            for warning in report.warnings:
                logger.warning(warning)
            logger.warning(f"Code generation finished with {len(report.warnings)} warning(s).")
            return EXIT_WARNINGS
        log_success(logger, "Code generation completed successfully.")
        return EXIT_OK

    # --- Error Handling ---
    except ConfigurationError as e:
        logger.error(f"Configuration Error: {e}", exc_info=args.verbose)
        return EXIT_FAILURE
    except ScaffoldError as e:
        logger.error(f"Generation Error: {e}", exc_info=args.verbose)
        return EXIT_FAILURE
    except ImportError as e:
        logger.error(
            f"Import Error: {e}. Ensure Django and the database driver are installed.",
            exc_info=args.verbose,
        )
        logger.error("Example: pip install mysqlclient (for MySQL) or psycopg (for PostgreSQL)")
        return EXIT_FAILURE
    except Exception as e:
        logger.error(f"An unexpected error occurred during generation: {e}", exc_info=True)
        return EXIT_FAILURE


# --- Script Entry Point ---
if __name__ == "__main__":
    sys.exit(main())
