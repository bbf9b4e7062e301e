"""
Centralized constants for Schema Scaffold.

This module contains the reserved column names, project layout constants,
type mappings and default values used across the generator. Keeping them in
one place makes it easy for contributors to adjust conventions.
"""

from typing import Dict, FrozenSet

from schema_scaffold.domain.models import ValueType


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    OUTPUT_ROOT = "."
    STEP_IN = True
    OVERWRITE = False
    AUTHOR = "Schema Scaffold"

    # Used when the database URL is missing or cannot be parsed
    DB_HOST = "localhost"
    DB_PORT = 3306
    DB_NAME = "test"


class SupportedDatabases:
    """URL schemes understood by the introspection layer."""

    MYSQL = "django.db.backends.mysql"
    POSTGRESQL = "django.db.backends.postgresql"
    SQLITE = "django.db.backends.sqlite3"

    SCHEME_TO_ENGINE: Dict[str, str] = {
        "mysql": MYSQL,
        "mariadb": MYSQL,
        "postgresql": POSTGRESQL,
        "postgres": POSTGRESQL,
        "sqlite": SQLITE,
        "sqlite3": SQLITE,
    }


# =============================================================================
# PROJECT LAYOUT
# =============================================================================

class ProjectLayout:
    """Directory and module conventions of the generated project."""

    JAVA_FILE_DIR = "src/main/java"
    RESOURCES_FILE_DIR = "src/main/resources"
    MAPPER_FILE_DIR = RESOURCES_FILE_DIR + "/mybatis/mapper"

    API_MODULE = "-api"
    BIZ_MODULE = "-biz"
    STARTUP_MODULE = "-startup"

    PATH_FORMAT = "{module}/{base_dir}/{package}/{file}"
    PATH_FORMAT_WITHOUT_PACKAGE = "{module}/{base_dir}/{file}"


# =============================================================================
# RESERVED COLUMNS
# =============================================================================

class ReservedColumns:
    """Reserved column names, compared case-insensitively."""

    PRIMARY_KEY: FrozenSet[str] = frozenset({"id"})
    BASE: FrozenSet[str] = frozenset({"create_time", "update_time"})
    DELETE_FLAG: FrozenSet[str] = frozenset({"delete_flag"})
    VERSION: FrozenSet[str] = frozenset({"version"})
    NOT_UPDATABLE: FrozenSet[str] = frozenset({"id", "create_time", "version"})


# =============================================================================
# TYPE MAPPINGS
# =============================================================================

# Normalized SQL type -> semantic value type.
# Temporal types resolve to date/time values and all fixed-point numbers to
# decimals.
SQL_TYPE_MAP: Dict[str, ValueType] = {
    # Strings
    "CHAR": ValueType.STRING,
    "NCHAR": ValueType.STRING,
    "VARCHAR": ValueType.STRING,
    "NVARCHAR": ValueType.STRING,
    "VARCHAR2": ValueType.STRING,
    "LONGVARCHAR": ValueType.STRING,
    "LONGNVARCHAR": ValueType.STRING,
    "TINYTEXT": ValueType.STRING,
    "TEXT": ValueType.STRING,
    "MEDIUMTEXT": ValueType.STRING,
    "LONGTEXT": ValueType.STRING,
    "CLOB": ValueType.STRING,
    "NCLOB": ValueType.STRING,
    "ENUM": ValueType.STRING,
    "SET": ValueType.STRING,
    "JSON": ValueType.STRING,
    "JSONB": ValueType.STRING,
    "UUID": ValueType.STRING,
    "CHARACTER": ValueType.STRING,

    # Integers
    "TINYINT": ValueType.BYTE,
    "SMALLINT": ValueType.SHORT,
    "MEDIUMINT": ValueType.INTEGER,
    "INT": ValueType.INTEGER,
    "INTEGER": ValueType.INTEGER,
    "SERIAL": ValueType.INTEGER,
    "BIGINT": ValueType.LONG,
    "BIGSERIAL": ValueType.LONG,

    # Floating and fixed point
    "REAL": ValueType.FLOAT,
    "FLOAT": ValueType.DOUBLE,
    "DOUBLE": ValueType.DOUBLE,
    "DECIMAL": ValueType.DECIMAL,
    "NUMERIC": ValueType.DECIMAL,
    "NUMBER": ValueType.DECIMAL,

    # Booleans
    "BIT": ValueType.BOOLEAN,
    "BOOL": ValueType.BOOLEAN,
    "BOOLEAN": ValueType.BOOLEAN,

    # Temporal
    "DATE": ValueType.DATE,
    "TIME": ValueType.TIME,
    "DATETIME": ValueType.DATETIME,
    "TIMESTAMP": ValueType.DATETIME,
    "TIMESTAMPTZ": ValueType.DATETIME,
    "YEAR": ValueType.DATE,

    # Binary
    "BINARY": ValueType.BINARY,
    "VARBINARY": ValueType.BINARY,
    "LONGVARBINARY": ValueType.BINARY,
    "TINYBLOB": ValueType.BINARY,
    "BLOB": ValueType.BINARY,
    "MEDIUMBLOB": ValueType.BINARY,
    "LONGBLOB": ValueType.BINARY,
    "BYTEA": ValueType.BINARY,
}

# Django introspection field types -> SQL type, used when a backend only
# reports numeric type codes.
DJANGO_FIELD_SQL_TYPES: Dict[str, str] = {
    "AutoField": "INTEGER",
    "BigAutoField": "BIGINT",
    "SmallAutoField": "SMALLINT",
    "IntegerField": "INTEGER",
    "BigIntegerField": "BIGINT",
    "SmallIntegerField": "SMALLINT",
    "PositiveIntegerField": "INTEGER",
    "PositiveBigIntegerField": "BIGINT",
    "PositiveSmallIntegerField": "SMALLINT",
    "FloatField": "DOUBLE",
    "DecimalField": "DECIMAL",
    "CharField": "VARCHAR",
    "TextField": "TEXT",
    "BooleanField": "BOOLEAN",
    "NullBooleanField": "BOOLEAN",
    "DateField": "DATE",
    "DateTimeField": "DATETIME",
    "TimeField": "TIME",
    "DurationField": "BIGINT",
    "UUIDField": "UUID",
    "JSONField": "JSON",
    "BinaryField": "BLOB",
    "GenericIPAddressField": "VARCHAR",
}

DJANGO_AUTO_FIELDS: FrozenSet[str] = frozenset({"AutoField", "BigAutoField", "SmallAutoField"})

# Semantic value type -> Java type name used by the bundled templates.
JAVA_TYPE_MAP: Dict[ValueType, str] = {
    ValueType.STRING: "String",
    ValueType.BYTE: "Byte",
    ValueType.SHORT: "Short",
    ValueType.INTEGER: "Integer",
    ValueType.LONG: "Long",
    ValueType.FLOAT: "Float",
    ValueType.DOUBLE: "Double",
    ValueType.DECIMAL: "BigDecimal",
    ValueType.BOOLEAN: "Boolean",
    ValueType.DATE: "LocalDate",
    ValueType.TIME: "LocalTime",
    ValueType.DATETIME: "LocalDateTime",
    ValueType.BINARY: "byte[]",
    ValueType.OBJECT: "Object",
}

# Java imports needed for the non-java.lang value types.
JAVA_IMPORT_MAP: Dict[ValueType, str] = {
    ValueType.DECIMAL: "java.math.BigDecimal",
    ValueType.DATE: "java.time.LocalDate",
    ValueType.TIME: "java.time.LocalTime",
    ValueType.DATETIME: "java.time.LocalDateTime",
}


# =============================================================================
# LOGGING
# =============================================================================

LOG_FORMAT = "%-15s: %s"
MASKED_VALUE = "******"
