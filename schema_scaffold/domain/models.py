"""
Core domain models for Schema Scaffold.

These models represent the essential concepts of the generator and are
independent of the database driver and of the template engine. Raw column
descriptors come in from introspection, are classified into ``ColumnInfo``
records and aggregated into a ``TableInfo`` that the templates consume.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


class ValueType(Enum):
    """Semantic value types resolved from declared SQL types."""

    STRING = "string"
    BYTE = "byte"
    SHORT = "short"
    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    BINARY = "binary"
    OBJECT = "object"


class ColumnCategory(Enum):
    """Mutually exclusive column categories, in classification order."""

    PRIMARY_KEY = "primary_key"
    BASE = "base"
    DELETE_FLAG = "delete_flag"
    VERSION = "version"
    PLAIN = "plain"


class UnitState(Enum):
    """Final state of one (table, artifact) generation unit."""

    SKIPPED = "skipped"
    RENDERED = "rendered"
    FAILED = "failed"


@dataclass(frozen=True)
class RawColumn:
    """Column descriptor as reported by schema introspection."""

    name: str
    sql_type: str = ""
    remarks: str = ""
    is_auto_increment: bool = False
    is_primary_key: bool = False


@dataclass(frozen=True)
class ColumnInfo:
    """
    A classified column, ready for template rendering.

    The role flags are derived from ``category`` so that a column can never
    hold two roles at once.
    """

    name: str
    sql_type: str
    comment: str
    property_name: str
    value_type: ValueType
    category: ColumnCategory = ColumnCategory.PLAIN
    is_auto_increment: bool = False
    is_updatable: bool = True

    @property
    def is_primary_key(self) -> bool:
        return self.category is ColumnCategory.PRIMARY_KEY

    @property
    def is_base_column(self) -> bool:
        return self.category is ColumnCategory.BASE

    @property
    def is_delete_flag(self) -> bool:
        return self.category is ColumnCategory.DELETE_FLAG

    @property
    def is_version(self) -> bool:
        return self.category is ColumnCategory.VERSION

    @property
    def is_plain(self) -> bool:
        return self.category is ColumnCategory.PLAIN

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "sql_type": self.sql_type,
            "comment": self.comment,
            "property_name": self.property_name,
            "value_type": self.value_type.value,
            "category": self.category.value,
            "is_auto_increment": self.is_auto_increment,
            "is_updatable": self.is_updatable,
        }


@dataclass(frozen=True)
class TableInfo:
    """
    Normalized, template-ready view of one table.

    ``columns`` keeps every classified column in source order; the other
    sequences partition it by category.
    """

    table_name: str
    comment: str
    entity_name: str
    entity_name_lower: str
    primary_key: Optional[ColumnInfo] = None
    plain_columns: Tuple[ColumnInfo, ...] = ()
    audit_columns: Tuple[ColumnInfo, ...] = ()
    delete_flag_column: Optional[ColumnInfo] = None
    version_column: Optional[ColumnInfo] = None
    columns: Tuple[ColumnInfo, ...] = ()

    @property
    def has_primary_key(self) -> bool:
        return self.primary_key is not None

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def updatable_columns(self) -> Tuple[ColumnInfo, ...]:
        """Plain columns that an update statement may set."""
        return tuple(col for col in self.plain_columns if col.is_updatable)

    @property
    def value_types(self) -> Tuple[ValueType, ...]:
        """Distinct value types across all columns, in first-seen order."""
        return tuple(dict.fromkeys(col.value_type for col in self.columns))

    def summary(self) -> str:
        """One-line description used in completion logs."""
        return (
            f"table={self.table_name} entity={self.entity_name} "
            f"columns={self.column_count} plain={len(self.plain_columns)} "
            f"audit={len(self.audit_columns)} "
            f"primary_key={self.primary_key.name if self.primary_key else None}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "table_name": self.table_name,
            "comment": self.comment,
            "entity_name": self.entity_name,
            "entity_name_lower": self.entity_name_lower,
            "primary_key": self.primary_key.to_dict() if self.primary_key else None,
            "plain_columns": [col.to_dict() for col in self.plain_columns],
            "audit_columns": [col.to_dict() for col in self.audit_columns],
            "delete_flag_column": self.delete_flag_column.to_dict() if self.delete_flag_column else None,
            "version_column": self.version_column.to_dict() if self.version_column else None,
        }


@dataclass(frozen=True)
class UnitOutcome:
    """Result of visiting one (table, artifact) unit."""

    table_name: str
    artifact: str
    output_path: Path
    state: UnitState
    message: Optional[str] = None


@dataclass
class GenerationReport:
    """
    Result of one generation run.

    Owned by the caller of the run; nothing is accumulated at module level.
    """

    tables: List[TableInfo] = field(default_factory=list)
    outcomes: List[UnitOutcome] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_outcome(self, outcome: UnitOutcome) -> None:
        self.outcomes.append(outcome)

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def _count(self, state: UnitState) -> int:
        return sum(1 for outcome in self.outcomes if outcome.state is state)

    @property
    def generated(self) -> int:
        return self._count(UnitState.RENDERED)

    @property
    def skipped(self) -> int:
        return self._count(UnitState.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(UnitState.FAILED)

    @property
    def succeeded(self) -> bool:
        """True when the run produced no warnings at all."""
        return not self.warnings

    def outcomes_for(self, table_name: str) -> List[UnitOutcome]:
        return [outcome for outcome in self.outcomes if outcome.table_name == table_name]
