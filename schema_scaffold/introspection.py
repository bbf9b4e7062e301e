import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Set, Tuple

import django
from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, connections

from schema_scaffold.constants import DJANGO_AUTO_FIELDS, DJANGO_FIELD_SQL_TYPES
from schema_scaffold.domain.models import RawColumn
from schema_scaffold.exceptions import DatabaseConnectionError, SchemaIntrospectionError


logger = logging.getLogger(__name__)

TableColumns = Tuple[str, Sequence[RawColumn]]


class ColumnSource(Protocol):
    """Supplies the comment and raw column descriptors of a table."""

    def fetch_table(self, table_name: str) -> TableColumns:
        """Return ``(comment, columns)``; raise SchemaIntrospectionError if unknown."""
        ...


class InMemoryColumnSource:
    """Column source backed by a mapping, for offline runs and tests."""

    def __init__(self, tables: Mapping[str, Any]):
        # Values are either a list of RawColumn or a (comment, columns) pair
        self._tables: Dict[str, TableColumns] = {}
        for name, value in tables.items():
            if isinstance(value, tuple):
                comment, columns = value
            else:
                comment, columns = "", value
            self._tables[name] = (comment or "", list(columns))

    def fetch_table(self, table_name: str) -> TableColumns:
        try:
            return self._tables[table_name]
        except KeyError:
            raise SchemaIntrospectionError(
                f"Table '{table_name}' does not exist", table=table_name
            ) from None


# --- Django Setup Helper ---
_django_setup_done = False


def setup_django(db_settings: Dict[str, Any], secret_key: str):
    """Configures minimal Django settings and runs django.setup()."""
    global _django_setup_done
    if _django_setup_done or settings.configured:
        logger.debug("Django setup already performed.")
        _django_setup_done = True
        return

    logger.info("Configuring Django settings for introspection...")
    try:
        plain_db_settings: Dict[str, Dict[str, Any]] = {}
        for alias, db_model in db_settings.items():
            if hasattr(db_model, "to_django_settings"):
                plain_db_settings[alias] = db_model.to_django_settings()
            elif isinstance(db_model, dict):
                plain_db_settings[alias] = db_model
            else:
                raise TypeError(f"Invalid database settings type for alias '{alias}'.")

        settings.configure(
            SECRET_KEY=secret_key,
            DATABASES=plain_db_settings,
            TIME_ZONE="UTC",
            USE_TZ=True,
            DEFAULT_AUTO_FIELD="django.db.models.BigAutoField",
        )
        django.setup()
        _django_setup_done = True
        logger.info("Django setup complete.")
    except Exception as e:
        logger.error(f"Failed to configure Django: {e}", exc_info=True)
        raise


def _resolve_sql_type(introspector, description) -> Tuple[str, Optional[str]]:
    """Best available SQL type name plus the Django field type, if any."""
    try:
        django_type = introspector.get_field_type(description.type_code, description)
    except Exception:
        django_type = None

    # MySQL reports the raw data type, SQLite the declared type string
    data_type = getattr(description, "data_type", None)
    if data_type:
        return str(data_type), django_type
    if isinstance(description.type_code, str):
        return description.type_code, django_type
    return DJANGO_FIELD_SQL_TYPES.get(django_type or "", ""), django_type


def _is_auto_increment(description, django_type: Optional[str]) -> bool:
    if getattr(description, "is_autofield", False):
        return True
    if "auto_increment" in (getattr(description, "extra", None) or ""):
        return True
    return django_type in DJANGO_AUTO_FIELDS


class DjangoSchemaIntrospector:
    """Column source reading table metadata through Django's introspection API."""

    def __init__(self, db_alias: str = DEFAULT_DB_ALIAS):
        if not _django_setup_done:
            raise RuntimeError("Django has not been set up. Call setup_django() first.")
        self.db_alias = db_alias
        self._table_comments: Optional[Dict[str, str]] = None

    @property
    def connection(self):
        return connections[self.db_alias]

    def _load_table_list(self, cursor) -> Dict[str, str]:
        if self._table_comments is None:
            items = self.connection.introspection.get_table_list(cursor)
            self._table_comments = {
                item.name: getattr(item, "comment", None) or ""
                for item in items
                if getattr(item, "type", "t") == "t"
            }
            logger.debug(f"Found {len(self._table_comments)} tables: {', '.join(self._table_comments)}")
        return self._table_comments

    def _primary_key_columns(self, cursor, table_name: str) -> Set[str]:
        introspector = self.connection.introspection
        try:
            constraints = introspector.get_constraints(cursor, table_name)
        except Exception as e:
            logger.warning(f"Could not get constraints for table '{table_name}': {e}.")
            constraints = {}

        pk_constraint = next((c for c in constraints.values() if c.get("primary_key")), None)
        if pk_constraint:
            return set(pk_constraint.get("columns") or [])

        try:
            single = introspector.get_primary_key_column(cursor, table_name)
        except NotImplementedError:
            single = None
        return {single} if single else set()

    def fetch_table(self, table_name: str) -> TableColumns:
        introspector = self.connection.introspection
        try:
            with self.connection.cursor() as cursor:
                comments = self._load_table_list(cursor)
                if table_name not in comments:
                    raise SchemaIntrospectionError(
                        f"Table '{table_name}' does not exist", table=table_name
                    )
                description = introspector.get_table_description(cursor, table_name)
                primary_keys = self._primary_key_columns(cursor, table_name)
        except SchemaIntrospectionError:
            raise
        except Exception as e:
            settings_dict = self.connection.settings_dict
            raise DatabaseConnectionError(
                f"Could not read table '{table_name}': {e}",
                database_url=str(settings_dict.get("NAME", "")),
                engine=settings_dict.get("ENGINE"),
            ) from e

        columns: List[RawColumn] = []
        for field in description:
            sql_type, django_type = _resolve_sql_type(introspector, field)
            columns.append(
                RawColumn(
                    name=field.name,
                    sql_type=sql_type,
                    remarks=getattr(field, "comment", None) or "",
                    is_auto_increment=_is_auto_increment(field, django_type),
                    is_primary_key=field.name in primary_keys,
                )
            )
        logger.debug(f"Introspected {len(columns)} columns for table '{table_name}'.")
        return comments[table_name], columns

    def fetch_tables(self, table_names: Iterable[str]) -> List[Tuple[str, str, Sequence[RawColumn]]]:
        """Fetch several tables as (table_name, comment, columns) triples."""
        result = []
        for name in table_names:
            comment, columns = self.fetch_table(name)
            result.append((name, comment, columns))
        return result
