"""
SQL type mapping for Schema Scaffold.

Declared SQL types vary wildly between backends (``varchar(32)``,
``bigint unsigned``, ``double precision``). This module normalizes them and
resolves a semantic ``ValueType``. The mapping table is pluggable; an
unrecognized type never fails, it resolves to the fallback type.
"""

import re
from typing import Mapping, Optional, Protocol

from schema_scaffold.constants import SQL_TYPE_MAP
from schema_scaffold.domain.models import ValueType


_PARAMS_RE = re.compile(r"\(.*?\)")
_MODIFIERS = {"UNSIGNED", "SIGNED", "ZEROFILL"}


def normalize_sql_type(declared: Optional[str]) -> str:
    """
    Reduce a declared SQL type to its base type keyword.

    Example:
        >>> normalize_sql_type("varchar(32)")
        'VARCHAR'
        >>> normalize_sql_type("bigint(20) unsigned")
        'BIGINT'
        >>> normalize_sql_type("double precision")
        'DOUBLE'
    """
    if not declared:
        return ""
    cleaned = _PARAMS_RE.sub(" ", declared).upper()
    words = [word for word in cleaned.split() if word not in _MODIFIERS]
    return words[0] if words else ""


class TypeMapperProtocol(Protocol):
    """Protocol for SQL type mappers."""

    def resolve(self, sql_type: Optional[str]) -> ValueType:
        """Resolve a declared SQL type to a value type."""
        ...


class SqlTypeMapper:
    """
    Table-driven SQL type mapper.

    Args:
        mapping: Normalized SQL type -> ValueType; defaults to SQL_TYPE_MAP
        fallback: Value type for unmapped SQL types
    """

    def __init__(
        self,
        mapping: Optional[Mapping[str, ValueType]] = None,
        fallback: ValueType = ValueType.OBJECT,
    ):
        source = SQL_TYPE_MAP if mapping is None else mapping
        self.mapping = {key.upper(): value for key, value in source.items()}
        self.fallback = fallback

    def resolve(self, sql_type: Optional[str]) -> ValueType:
        return self.mapping.get(normalize_sql_type(sql_type), self.fallback)

    def with_overrides(self, overrides: Mapping[str, ValueType]) -> "SqlTypeMapper":
        """Return a copy with some entries replaced."""
        merged = dict(self.mapping)
        merged.update({key.upper(): value for key, value in overrides.items()})
        return SqlTypeMapper(merged, self.fallback)


DEFAULT_TYPE_MAPPER = SqlTypeMapper()
