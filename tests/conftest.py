# File: tests/conftest.py
# Contains pytest fixtures shared by the unit and integration tests.

import sqlite3
from pathlib import Path
from typing import Dict, List

import pytest
from faker import Faker

from schema_scaffold.config_validation import ScaffoldConfig
from schema_scaffold.domain.models import RawColumn


# --- Constants ---
ORDER_TABLE_DDL = """
CREATE TABLE t_order (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    order_no VARCHAR(32) NOT NULL,
    customer_id BIGINT,
    total_amount DECIMAL(10, 2),
    paid BOOLEAN,
    create_time DATETIME,
    update_time DATETIME,
    delete_flag TINYINT DEFAULT 0,
    version INTEGER DEFAULT 0
)
"""

ORDER_ITEM_TABLE_DDL = """
CREATE TABLE order_item (
    order_id BIGINT NOT NULL,
    line_no INTEGER NOT NULL,
    sku VARCHAR(64),
    quantity INTEGER,
    PRIMARY KEY (order_id, line_no)
)
"""


@pytest.fixture(scope="session")
def fake() -> Faker:
    fake = Faker()
    Faker.seed(4321)
    return fake


@pytest.fixture
def order_columns() -> List[RawColumn]:
    """Raw columns of a typical business table with every reserved role."""
    return [
        RawColumn("id", "bigint(20)", "Primary key", is_auto_increment=True, is_primary_key=True),
        RawColumn("order_no", "varchar(32)", "Order number"),
        RawColumn("total_amount", "decimal(10,2)", "Total"),
        RawColumn("create_time", "datetime", "Created at"),
        RawColumn("update_time", "datetime", "Updated at"),
        RawColumn("delete_flag", "tinyint(1)", "Soft delete"),
        RawColumn("version", "int", "Optimistic lock"),
    ]


@pytest.fixture
def in_memory_tables(order_columns) -> Dict[str, tuple]:
    return {
        "t_order": ("Orders", order_columns),
        "order_item": (
            "Order lines",
            [
                RawColumn("id", "bigint", is_primary_key=True),
                RawColumn("sku", "varchar(64)"),
                RawColumn("quantity", "int"),
            ],
        ),
    }


@pytest.fixture
def scaffold_config(tmp_path: Path) -> ScaffoldConfig:
    return ScaffoldConfig(
        project_name="shop",
        base_package="com.acme.shop",
        tables="t_order,order_item",
        output_root=str(tmp_path),
    )


# --- Fixture for the SQLite database used by introspection tests ---
@pytest.fixture(scope="session")
def sqlite_database(tmp_path_factory) -> Path:
    """Creates a SQLite database file with two tables for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "shop.sqlite3"
    connection = sqlite3.connect(str(db_path))
    try:
        connection.execute(ORDER_TABLE_DDL)
        connection.execute(ORDER_ITEM_TABLE_DDL)
        connection.commit()
    finally:
        connection.close()
    return db_path


@pytest.fixture(scope="session")
def django_sqlite(sqlite_database):
    """Configures Django once per session against the SQLite database."""
    from schema_scaffold.config_validation import DatabaseSettings, generate_secret_key
    from schema_scaffold.introspection import setup_django

    database = DatabaseSettings(url=f"sqlite:///{sqlite_database}")
    setup_django({"default": database}, generate_secret_key())
    return database
