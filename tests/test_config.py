"""
Tests for configuration loading and validation.
"""

from argparse import Namespace
from pathlib import Path
from unittest import TestCase

import pytest
import yaml

from schema_scaffold.config_validation import (
    DatabaseSettings,
    ScaffoldConfig,
    load_config,
    merge_cli_args,
    parse_database_url,
    validate_and_parse_config,
)
from schema_scaffold.exceptions import ConfigurationError


class TestParseDatabaseUrl(TestCase):
    """Test cases for parse_database_url"""

    def test_full_jdbc_url(self):
        assert parse_database_url("jdbc:mysql://db.local:3307/shop?useSSL=false") == (
            "mysql", "db.local", 3307, "shop"
        )

    def test_without_jdbc_prefix(self):
        assert parse_database_url("postgresql://pg:5432/orders") == ("postgresql", "pg", 5432, "orders")

    def test_missing_port_and_database(self):
        assert parse_database_url("jdbc:mysql://db.local") == ("mysql", "db.local", 3306, "test")

    def test_missing_host(self):
        assert parse_database_url("jdbc:mysql:///shop") == ("mysql", "localhost", 3306, "shop")

    def test_blank_url(self):
        assert parse_database_url(None) == ("", "localhost", 3306, "test")
        assert parse_database_url("   ") == ("", "localhost", 3306, "test")

    def test_unparsable_port_falls_back(self):
        scheme, host, port, name = parse_database_url("jdbc:mysql://db.local:notaport/shop")
        assert scheme == "mysql"
        assert port == 3306

    def test_sqlite_absolute_path(self):
        assert parse_database_url("sqlite:////tmp/shop.db")[3] == "/tmp/shop.db"


class TestDatabaseSettings(TestCase):
    """Test cases for DatabaseSettings"""

    def test_engine_from_scheme(self):
        settings = DatabaseSettings(url="jdbc:mysql://db.local:3306/shop", username="root", password="pw")

        django_settings = settings.to_django_settings()
        assert django_settings["ENGINE"] == "django.db.backends.mysql"
        assert django_settings["NAME"] == "shop"
        assert django_settings["HOST"] == "db.local"
        assert django_settings["PORT"] == "3306"
        assert django_settings["USER"] == "root"
        assert django_settings["PASSWORD"] == "pw"

    def test_sqlite_settings(self):
        settings = DatabaseSettings(url="sqlite:////tmp/shop.db")
        assert settings.to_django_settings() == {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": "/tmp/shop.db",
            "OPTIONS": {},
        }

    def test_explicit_engine_wins(self):
        settings = DatabaseSettings(url="jdbc:mysql://db/shop", engine="django.db.backends.postgresql")
        assert settings.to_django_settings()["ENGINE"] == "django.db.backends.postgresql"

    def test_unknown_scheme(self):
        settings = DatabaseSettings(url="jdbc:oracle://db/shop")
        with pytest.raises(ConfigurationError):
            settings.to_django_settings()


class TestValidateAndParseConfig(TestCase):
    """Test cases for validate_and_parse_config"""

    def test_defaults(self):
        config = validate_and_parse_config({"project_name": "shop", "base_package": "com.acme.shop"})

        assert config.step_in is True
        assert config.overwrite is False
        assert config.output_root == "."
        assert config.tables == ""
        assert config.project_name == "shop"

    def test_attribute_access_only(self):
        config = validate_and_parse_config(
            {"project_name": "shop", "base_package": "com.acme.shop", "database": {"url": "jdbc:mysql://db/shop"}}
        )

        assert not hasattr(config, "get")
        with pytest.raises(TypeError):
            config["project_name"]
        with pytest.raises(TypeError):
            config.database["url"]

    def test_table_list_is_joined(self):
        config = validate_and_parse_config(
            {"project_name": "shop", "base_package": "com.acme", "tables": ["t_user", "t_order"]}
        )
        assert config.tables == "t_user,t_order"

    def test_invalid_table_item(self):
        with pytest.raises(ConfigurationError) as excinfo:
            validate_and_parse_config({"project_name": "shop", "base_package": "com.acme", "tables": ["a", 1]})
        assert "tables" in excinfo.value.context

    def test_missing_required_fields(self):
        with pytest.raises(ConfigurationError) as excinfo:
            validate_and_parse_config({})

        assert "project_name" in excinfo.value.context
        assert "base_package" in excinfo.value.context
        assert excinfo.value.error_code == "CONFIG_ERROR"

    def test_invalid_base_package(self):
        for value in ("com..acme", "1com.acme", "com.acme-shop"):
            with pytest.raises(ConfigurationError):
                validate_and_parse_config({"project_name": "shop", "base_package": value})

    def test_invalid_project_name(self):
        with pytest.raises(ConfigurationError):
            validate_and_parse_config({"project_name": "my shop", "base_package": "com.acme"})

    def test_nested_database(self):
        config = validate_and_parse_config(
            {
                "project_name": "shop",
                "base_package": "com.acme",
                "database": {"url": "jdbc:mysql://db:3310/shop"},
            }
        )
        assert config.database.port == 3310


class TestMergeCliArgs(TestCase):
    """Test cases for merge_cli_args"""

    def test_cli_values_override(self):
        raw = {"project_name": "from-file", "tables": "a", "database": {"url": "jdbc:mysql://a/b"}}
        args = Namespace(
            config="x.yml", project_name="from-cli", tables=None, url=None, username="root", verbose=False
        )

        merged = merge_cli_args(raw, args)

        assert merged["project_name"] == "from-cli"
        assert merged["tables"] == "a"
        assert merged["database"] == {"url": "jdbc:mysql://a/b", "username": "root"}
        assert "config" not in merged
        assert "verbose" not in merged

    def test_no_cli_args(self):
        raw = {"project_name": "shop"}
        assert merge_cli_args(raw, None) is raw


def test_load_config_from_yaml_and_cli(tmp_path: Path):
    config_file = tmp_path / "scaffold.yml"
    config_file.write_text(
        yaml.safe_dump(
            {
                "project_name": "shop",
                "base_package": "com.acme.shop",
                "tables": ["t_order"],
                "output_root": str(tmp_path / "out"),
                "database": {"url": "jdbc:mysql://db:3306/shop", "username": "app", "password": "secret"},
            }
        )
    )
    args = Namespace(tables="t_user,t_order", overwrite=True, password=None, step_in=None)

    config = load_config(str(config_file), args)

    assert isinstance(config, ScaffoldConfig)
    assert config.tables == "t_user,t_order"
    assert config.overwrite is True
    assert config.step_in is True
    assert config.database.password == "secret"
    assert config.output_root == str((tmp_path / "out").resolve())


def test_load_config_missing_file_uses_cli(tmp_path: Path):
    args = Namespace(project_name="shop", base_package="com.acme", output_root=str(tmp_path))

    config = load_config(str(tmp_path / "absent.yml"), args)

    assert config.project_name == "shop"
    assert config.database is None


def test_load_config_invalid_yaml(tmp_path: Path):
    config_file = tmp_path / "broken.yml"
    config_file.write_text("project_name: [unclosed")

    with pytest.raises(ConfigurationError) as excinfo:
        load_config(str(config_file))
    assert excinfo.value.context["config_file"] == str(config_file)


def test_load_config_non_mapping(tmp_path: Path):
    config_file = tmp_path / "list.yml"
    config_file.write_text("- a\n- b\n")

    with pytest.raises(ConfigurationError):
        load_config(str(config_file))
