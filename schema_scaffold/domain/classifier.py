"""
Column classification for Schema Scaffold.

Turns a raw column descriptor into a ``ColumnInfo``. Roles are decided by
case-insensitive matches against the reserved name sets in
``ReservedColumns``, checked in a fixed order: primary key, audit/base,
delete flag, version, plain.
"""

from typing import AbstractSet, Iterable, Optional

from schema_scaffold.constants import ReservedColumns
from schema_scaffold.domain.field_mapping import DEFAULT_TYPE_MAPPER, TypeMapperProtocol
from schema_scaffold.domain.models import ColumnCategory, ColumnInfo, RawColumn, ValueType
from schema_scaffold.domain.naming import NamingConventions


def _matches(column_name: Optional[str], names: AbstractSet[str]) -> bool:
    if column_name is None:
        return False
    return column_name.lower() in names


def is_primary_key_name(column_name: Optional[str]) -> bool:
    return _matches(column_name, ReservedColumns.PRIMARY_KEY)


def is_base_column_name(column_name: Optional[str]) -> bool:
    return _matches(column_name, ReservedColumns.BASE)


def is_delete_flag_name(column_name: Optional[str]) -> bool:
    return _matches(column_name, ReservedColumns.DELETE_FLAG)


def is_version_name(column_name: Optional[str]) -> bool:
    return _matches(column_name, ReservedColumns.VERSION)


def is_updatable_name(column_name: Optional[str]) -> bool:
    if column_name is None:
        return False
    return not _matches(column_name, ReservedColumns.NOT_UPDATABLE)


def resolve_category(raw: RawColumn, table_primary_keys: AbstractSet[str] = frozenset()) -> ColumnCategory:
    """Pick the single category of a column; earlier checks win."""
    if raw.is_primary_key or raw.name in table_primary_keys or is_primary_key_name(raw.name):
        return ColumnCategory.PRIMARY_KEY
    if is_base_column_name(raw.name):
        return ColumnCategory.BASE
    if is_delete_flag_name(raw.name):
        return ColumnCategory.DELETE_FLAG
    if is_version_name(raw.name):
        return ColumnCategory.VERSION
    return ColumnCategory.PLAIN


def classify_column(
    raw: RawColumn,
    table_primary_keys: Iterable[str] = (),
    type_mapper: Optional[TypeMapperProtocol] = None,
) -> ColumnInfo:
    """
    Classify a raw column descriptor.

    Args:
        raw: Column descriptor from introspection
        table_primary_keys: Column names the table declares as primary key
        type_mapper: SQL type mapper; the delete-flag column is always boolean
            whichever mapper is used

    Returns:
        The classified, immutable ColumnInfo
    """
    mapper = type_mapper or DEFAULT_TYPE_MAPPER
    category = resolve_category(raw, frozenset(table_primary_keys))

    if is_delete_flag_name(raw.name):
        value_type = ValueType.BOOLEAN
    else:
        value_type = mapper.resolve(raw.sql_type)

    return ColumnInfo(
        name=raw.name,
        sql_type=raw.sql_type or "",
        comment=raw.remarks or "",
        property_name=NamingConventions.column_to_property(raw.name),
        value_type=value_type,
        category=category,
        is_auto_increment=bool(raw.is_auto_increment),
        is_updatable=is_updatable_name(raw.name),
    )
