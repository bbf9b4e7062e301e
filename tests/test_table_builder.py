"""
Tests for building the normalized table model.
"""

import dataclasses
from unittest import TestCase

import pytest

from schema_scaffold.domain.models import ColumnCategory, RawColumn, ValueType
from schema_scaffold.mapper import build_intermediate_representation, build_table_info


class TestBuildTableInfo(TestCase):
    """Test cases for build_table_info"""

    def setUp(self):
        self.columns = [
            RawColumn("id", "bigint", "Primary key", is_auto_increment=True, is_primary_key=True),
            RawColumn("order_no", "varchar(32)", "Order number"),
            RawColumn("create_time", "datetime"),
            RawColumn("customer_id", "bigint"),
            RawColumn("update_time", "datetime"),
            RawColumn("delete_flag", "tinyint"),
            RawColumn("version", "int"),
        ]

    def test_entity_names(self):
        table = build_table_info("T_ORDER", "Orders", self.columns)

        assert table.table_name == "T_ORDER"
        assert table.entity_name == "TOrder"
        assert table.entity_name_lower == "tOrder"
        assert table.comment == "Orders"

    def test_partition(self):
        table = build_table_info("t_order", "Orders", self.columns)

        assert table.primary_key.name == "id"
        assert [c.name for c in table.plain_columns] == ["order_no", "customer_id"]
        assert [c.name for c in table.audit_columns] == ["create_time", "update_time"]
        assert table.delete_flag_column.name == "delete_flag"
        assert table.version_column.name == "version"

    def test_columns_keep_source_order(self):
        table = build_table_info("t_order", None, self.columns)

        assert [c.name for c in table.columns] == [c.name for c in self.columns]
        assert table.column_count == len(self.columns)
        assert table.comment == ""

    def test_every_column_lands_in_exactly_one_slot(self):
        table = build_table_info("t_order", "", self.columns)

        slots = list(table.plain_columns) + list(table.audit_columns)
        for single in (table.primary_key, table.delete_flag_column, table.version_column):
            if single is not None:
                slots.append(single)
        assert sorted(c.name for c in slots) == sorted(c.name for c in table.columns)

    def test_no_primary_key(self):
        table = build_table_info("audit_log", "", [RawColumn("message", "text")])

        assert table.primary_key is None
        assert not table.has_primary_key
        assert "primary_key=None" in table.summary()

    def test_extra_primary_keys_are_demoted(self):
        columns = [
            RawColumn("order_id", "bigint", is_primary_key=True),
            RawColumn("line_no", "int", is_primary_key=True),
            RawColumn("sku", "varchar(64)"),
        ]
        table = build_table_info("order_item", "", columns)

        assert table.primary_key.name == "order_id"
        assert [c.name for c in table.plain_columns] == ["line_no", "sku"]
        assert table.columns[1].category is ColumnCategory.PLAIN

    def test_id_column_without_flag_becomes_primary_key(self):
        table = build_table_info("tag", "", [RawColumn("ID", "int"), RawColumn("label", "varchar")])

        assert table.primary_key.name == "ID"
        assert table.primary_key.property_name == "id"

    def test_updatable_columns_and_value_types(self):
        table = build_table_info("t_order", "", self.columns)

        assert [c.name for c in table.updatable_columns] == ["order_no", "customer_id"]
        assert table.value_types == (
            ValueType.LONG,
            ValueType.STRING,
            ValueType.DATETIME,
            ValueType.BOOLEAN,
            ValueType.INTEGER,
        )

    def test_table_info_is_immutable(self):
        table = build_table_info("t_order", "", self.columns)
        with pytest.raises(dataclasses.FrozenInstanceError):
            table.entity_name = "Other"

    def test_to_dict(self):
        data = build_table_info("t_order", "Orders", self.columns).to_dict()

        assert data["entity_name"] == "TOrder"
        assert data["primary_key"]["name"] == "id"
        assert len(data["plain_columns"]) == 2
        assert data["delete_flag_column"]["value_type"] == "boolean"


def test_build_intermediate_representation(in_memory_tables):
    triples = [(name, comment, columns) for name, (comment, columns) in in_memory_tables.items()]

    tables = build_intermediate_representation(triples)

    assert [t.entity_name for t in tables] == ["TOrder", "OrderItem"]
    assert tables[1].primary_key.name == "id"
