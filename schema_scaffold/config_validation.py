# File: schema_scaffold/config_validation.py
from argparse import Namespace
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import urlsplit

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from schema_scaffold.constants import DefaultConfig, SupportedDatabases
from schema_scaffold.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# --- Helper Functions for Validation ---

_PACKAGE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
_PROJECT_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")

DATABASE_KEYS = ("url", "driver", "username", "password")


def is_valid_package_name(name: str) -> bool:
    """Check if a string is a dotted package name such as 'com.acme.shop'."""
    return bool(_PACKAGE_RE.match(name))


def parse_database_url(url: Optional[str]) -> Tuple[str, str, int, str]:
    """
    Split a database URL into (scheme, host, port, database).

    A leading ``jdbc:`` prefix is ignored. Missing or unparsable parts fall
    back to the defaults from ``DefaultConfig`` instead of failing.

    Example:
        >>> parse_database_url("jdbc:mysql://db.local:3307/shop?useSSL=false")
        ('mysql', 'db.local', 3307, 'shop')
    """
    scheme, host, port, name = "", DefaultConfig.DB_HOST, DefaultConfig.DB_PORT, DefaultConfig.DB_NAME
    if not url or not url.strip():
        return scheme, host, port, name

    value = url.strip()
    if value.lower().startswith("jdbc:"):
        value = value[len("jdbc:"):]

    try:
        parts = urlsplit(value)
        scheme = parts.scheme.lower()
        host = parts.hostname or DefaultConfig.DB_HOST
        port = parts.port or DefaultConfig.DB_PORT
        path = parts.path or ""
        name = path[1:] if len(path) > 1 else DefaultConfig.DB_NAME
    except ValueError:
        logger.debug("Could not fully parse database URL; using defaults for the remaining parts.")
    return scheme, host, port, name


# --- Pydantic Models for Configuration Schema ---
class DatabaseSettings(BaseModel):
    """Connection settings of the database to introspect."""

    url: Optional[str] = Field(default=None, description="Database URL, e.g. 'jdbc:mysql://localhost:3306/shop'.")
    driver: Optional[str] = Field(default=None, description="Driver name, informational.")
    username: Optional[str] = Field(default=None, description="Database user.")
    password: Optional[str] = Field(default=None, description="Database password.")
    engine: Optional[str] = Field(
        default=None, description="Django database engine; derived from the URL scheme when omitted."
    )
    options: Dict[str, Any] = Field(default_factory=dict, description="Engine specific options.")

    # Derived from the URL
    host: str = Field(default=DefaultConfig.DB_HOST)
    port: int = Field(default=DefaultConfig.DB_PORT)
    name: str = Field(default=DefaultConfig.DB_NAME)
    scheme: str = Field(default="")

    @model_validator(mode="after")
    def derive_connection_parts(self) -> "DatabaseSettings":
        """Fill host, port, database name and engine from the URL."""
        self.scheme, self.host, self.port, self.name = parse_database_url(self.url)
        if self.engine is None:
            self.engine = SupportedDatabases.SCHEME_TO_ENGINE.get(self.scheme)
        return self

    def to_django_settings(self) -> Dict[str, Any]:
        """Build a Django DATABASES entry."""
        if not self.engine:
            raise ConfigurationError(
                f"Cannot determine a database engine for URL scheme '{self.scheme}'.",
                context={"supported_schemes": sorted(SupportedDatabases.SCHEME_TO_ENGINE)},
            )
        if self.engine == SupportedDatabases.SQLITE:
            return {"ENGINE": self.engine, "NAME": self.name, "OPTIONS": dict(self.options)}
        return {
            "ENGINE": self.engine,
            "NAME": self.name,
            "USER": self.username or "",
            "PASSWORD": self.password or "",
            "HOST": self.host,
            "PORT": str(self.port),
            "OPTIONS": dict(self.options),
        }


class ScaffoldConfig(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    project_name: str = Field(
        ...,
        min_length=1,
        description="Project (artifact) name; module directories are '<project_name>-api' etc.",
    )
    base_package: str = Field(
        ...,
        min_length=1,
        description="Base namespace of the generated code, e.g. 'com.acme.shop'.",
    )
    tables: str = Field(
        default="",
        description="Comma-separated table names to generate.",
    )
    step_in: bool = Field(
        default=DefaultConfig.STEP_IN,
        description="Generate inside an existing project without a project directory prefix.",
    )
    overwrite: bool = Field(
        default=DefaultConfig.OVERWRITE,
        description="Re-render existing non-empty files (user-owned files are always kept).",
    )
    output_root: str = Field(
        default=DefaultConfig.OUTPUT_ROOT,
        min_length=1,
        description="Directory that module paths are resolved against.",
    )
    project_root: Optional[str] = Field(
        default=None,
        description="Project directory used when step_in is false; defaults to project_name.",
    )
    author: str = Field(default=DefaultConfig.AUTHOR, description="Author stamped into generated files.")
    template_dir: Optional[str] = Field(default=None, description="Directory with replacement templates.")
    database: Optional[DatabaseSettings] = Field(default=None, description="Database to introspect.")

    @field_validator("project_name")
    @classmethod
    def check_project_name(cls, v: str) -> str:
        v = v.strip()
        if not _PROJECT_NAME_RE.match(v):
            raise ValueError(f"'{v}' is not a valid project name (letters, digits, '.', '_' and '-').")
        return v

    @field_validator("base_package")
    @classmethod
    def check_base_package(cls, v: str) -> str:
        v = v.strip()
        if not is_valid_package_name(v):
            raise ValueError(f"'{v}' is not a valid dotted package name.")
        return v

    @field_validator("tables", mode="before")
    @classmethod
    def join_table_list(cls, v: Union[None, str, List[Any]]) -> str:
        """Accept either a comma-separated string or a YAML list."""
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            for index, item in enumerate(v):
                if not isinstance(item, str):
                    raise ValueError(
                        f"Item at index {index} must be a string, found: {type(item).__name__}"
                    )
            return ",".join(v)
        return v

    model_config = ConfigDict(
        extra="ignore",  # Allow and ignore extra fields from input dict
    )


# --- Validation Function ---
def validate_and_parse_config(config_dict: Dict[str, Any], config_file: Optional[str] = None) -> ScaffoldConfig:
    """
    Validates a raw configuration dictionary against the ScaffoldConfig schema.
    Raises ConfigurationError listing every invalid location.
    """
    try:
        validated_config = ScaffoldConfig.model_validate(config_dict)
        logger.debug("Configuration dictionary parsed and validated successfully against schema.")
        return validated_config
    except ValidationError as e:
        logger.critical("Configuration validation failed! Please check your config file or arguments.")
        problems = {}
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            problems[loc_str] = error.get("msg", "Unknown validation error")
        raise ConfigurationError(
            "Invalid configuration", config_file=config_file, context=problems
        ) from e


def _read_yaml(config_path: str) -> Dict[str, Any]:
    config_file = Path(config_path)
    if not config_file.is_file():
        logger.warning(f"Config file not found at {config_path}. Using defaults and CLI arguments.")
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML file: {e}", config_file=config_path) from e

    if yaml_config is None:
        return {}
    if not isinstance(yaml_config, dict):
        raise ConfigurationError("Config file content must be a mapping.", config_file=config_path)
    logger.debug(f"Loaded configuration from {config_path}")
    return yaml_config


def merge_cli_args(raw_config: Dict[str, Any], cli_args: Optional[Namespace]) -> Dict[str, Any]:
    """Override raw config values with CLI arguments that were actually given."""
    if cli_args is None:
        return raw_config

    overridden_keys = set()
    database = dict(raw_config.get("database") or {})
    for key, value in vars(cli_args).items():
        if value is None:
            continue
        if key in DATABASE_KEYS:
            database[key] = value
            overridden_keys.add(f"database.{key}")
        elif key in ScaffoldConfig.model_fields and key != "database":
            raw_config[key] = value
            overridden_keys.add(key)
    if database:
        raw_config["database"] = database
    if overridden_keys:
        logger.debug(f"Overridden config keys from CLI arguments: {sorted(overridden_keys)}")
    return raw_config


def load_config(config_path: Optional[str], cli_args: Optional[Namespace] = None) -> ScaffoldConfig:
    """
    Loads configuration from YAML file, merges with CLI arguments,
    validates the result, and returns a validated Pydantic model instance.
    """
    raw_config: Dict[str, Any] = _read_yaml(config_path) if config_path else {}
    raw_config = merge_cli_args(raw_config, cli_args)

    logger.info("Validating final configuration...")
    validated_config = validate_and_parse_config(raw_config, config_file=config_path)

    validated_config.output_root = str(Path(validated_config.output_root).resolve())
    return validated_config


def generate_secret_key() -> str:
    """Throwaway secret key required by django.setup()."""
    return os.urandom(50).hex()
