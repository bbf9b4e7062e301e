"""
Tests for the exception hierarchy.
"""

from unittest import TestCase

from schema_scaffold.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    SchemaIntrospectionError,
    ScaffoldError,
    TemplateRenderError,
    mask_credentials,
)


class TestScaffoldError(TestCase):
    """Test cases for the error hierarchy"""

    def test_all_errors_share_base(self):
        for error_class in (ConfigurationError, SchemaIntrospectionError, DatabaseConnectionError, TemplateRenderError):
            assert issubclass(error_class, ScaffoldError)

    def test_str_includes_context_and_suggestions(self):
        error = ConfigurationError("Invalid configuration", config_file="scaffold.yml", context={"tables": "empty"})
        text = str(error)

        assert text.startswith("Invalid configuration")
        assert "Error Code: CONFIG_ERROR" in text
        assert "config_file: scaffold.yml" in text
        assert "tables: empty" in text
        assert "Suggestions:" in text

    def test_custom_suggestions_replace_defaults(self):
        error = SchemaIntrospectionError("Table 'x' does not exist", table="x", suggestions=["Create it"])

        assert error.suggestions == ["Create it"]
        assert error.context == {"table": "x"}
        assert error.error_code == "INTROSPECTION_ERROR"

    def test_default_suggestions_are_not_shared(self):
        first = TemplateRenderError("a")
        first.suggestions.append("extra")
        assert "extra" not in TemplateRenderError("b").suggestions

    def test_caller_context_is_copied(self):
        context = {"key": "value"}
        ConfigurationError("bad", config_file="a.yml", context=context)
        assert context == {"key": "value"}

    def test_error_code_override(self):
        assert ScaffoldError("x", error_code="CUSTOM").error_code == "CUSTOM"
        assert ScaffoldError("x").error_code is None


class TestDatabaseConnectionError(TestCase):
    """Test cases for credential masking"""

    def test_credentials_are_masked(self):
        error = DatabaseConnectionError(
            "refused", database_url="mysql://root:s3cret@db:3306/shop", engine="django.db.backends.mysql"
        )

        assert error.context["database_url"] == "mysql://root:***@db:3306/shop"
        assert "s3cret" not in str(error)

    def test_mask_without_credentials(self):
        assert mask_credentials("/tmp/shop.sqlite3") == "/tmp/shop.sqlite3"
