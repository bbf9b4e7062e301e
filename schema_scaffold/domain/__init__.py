"""
Domain module for Schema Scaffold.

This module contains the metadata model and naming rules, separated from the
introspection and rendering infrastructure. Column classification and type
mapping live in ``classifier`` and ``field_mapping``; they depend on
``schema_scaffold.constants`` and are imported from their modules directly.
"""

from .models import (
    ValueType,
    ColumnCategory,
    UnitState,
    RawColumn,
    ColumnInfo,
    TableInfo,
    UnitOutcome,
    GenerationReport,
)

from .naming import (
    NamingConventions,
    to_camel_or_pascal,
    to_camel_case,
    to_pascal_case,
    lower_first,
    upper_first,
    is_blank,
)

__all__ = [
    # Core models
    'ValueType',
    'ColumnCategory',
    'UnitState',
    'RawColumn',
    'ColumnInfo',
    'TableInfo',
    'UnitOutcome',
    'GenerationReport',

    # Naming
    'NamingConventions',
    'to_camel_or_pascal',
    'to_camel_case',
    'to_pascal_case',
    'lower_first',
    'upper_first',
    'is_blank',
]
