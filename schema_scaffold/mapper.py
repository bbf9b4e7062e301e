"""
Table model building for Schema Scaffold.

This module turns a table's raw column descriptors into the normalized
``TableInfo`` consumed by the templates. Each column is classified once, in
source order, and partitioned into primary key, audit columns, the delete-flag
and version slots, and plain business columns.

Example:
    >>> from schema_scaffold.mapper import build_table_info
    >>> table = build_table_info("t_order", "Orders", raw_columns)
    >>> table.entity_name
    'TOrder'
"""

import dataclasses
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from schema_scaffold.domain.classifier import classify_column
from schema_scaffold.domain.field_mapping import TypeMapperProtocol
from schema_scaffold.domain.models import ColumnCategory, ColumnInfo, RawColumn, TableInfo
from schema_scaffold.domain.naming import NamingConventions


logger = logging.getLogger(__name__)


def _demote(column: ColumnInfo, table_name: str, reason: str) -> ColumnInfo:
    logger.warning(
        f"Table '{table_name}': column '{column.name}' {reason}; treating it as a plain column."
    )
    return dataclasses.replace(column, category=ColumnCategory.PLAIN)


def build_table_info(
    table_name: str,
    comment: Optional[str],
    columns: Iterable[RawColumn],
    type_mapper: Optional[TypeMapperProtocol] = None,
) -> TableInfo:
    """
    Build the normalized model of one table.

    Only one primary key, one delete-flag and one version column fit the
    model; later candidates for a taken slot are kept as plain columns.

    Args:
        table_name: Table identifier as stored in the database
        comment: Table remarks, may be None
        columns: Raw column descriptors in source order
        type_mapper: Optional SQL type mapper passed to the classifier

    Returns:
        The immutable TableInfo
    """
    raw_columns: Sequence[RawColumn] = list(columns)
    declared_keys = frozenset(col.name for col in raw_columns if col.is_primary_key)

    primary_key: Optional[ColumnInfo] = None
    delete_flag: Optional[ColumnInfo] = None
    version: Optional[ColumnInfo] = None
    plain: List[ColumnInfo] = []
    audit: List[ColumnInfo] = []
    ordered: List[ColumnInfo] = []

    for raw in raw_columns:
        column = classify_column(raw, declared_keys, type_mapper)

        if column.is_primary_key:
            if primary_key is None:
                primary_key = column
            else:
                column = _demote(column, table_name, f"is an extra primary key (kept '{primary_key.name}')")
        elif column.is_base_column:
            audit.append(column)
        elif column.is_delete_flag:
            if delete_flag is None:
                delete_flag = column
            else:
                column = _demote(column, table_name, "duplicates the delete flag")
        elif column.is_version:
            if version is None:
                version = column
            else:
                column = _demote(column, table_name, "duplicates the version column")

        if column.is_plain:
            plain.append(column)
        ordered.append(column)

    if primary_key is None:
        logger.debug(f"Table '{table_name}' has no primary key column.")

    return TableInfo(
        table_name=table_name,
        comment=comment or "",
        entity_name=NamingConventions.table_to_entity(table_name),
        entity_name_lower=NamingConventions.table_to_variable(table_name),
        primary_key=primary_key,
        plain_columns=tuple(plain),
        audit_columns=tuple(audit),
        delete_flag_column=delete_flag,
        version_column=version,
        columns=tuple(ordered),
    )


def build_intermediate_representation(
    tables: Iterable[Tuple[str, Optional[str], Iterable[RawColumn]]],
    type_mapper: Optional[TypeMapperProtocol] = None,
) -> List[TableInfo]:
    """Build a TableInfo for each (table_name, comment, columns) triple."""
    result = [build_table_info(name, comment, cols, type_mapper) for name, comment, cols in tables]
    logger.debug(f"Built table models for {len(result)} tables.")
    return result
