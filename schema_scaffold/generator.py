"""
Generation orchestrator for Schema Scaffold.

Walks every (table, artifact) unit once: the column source describes the
table, the table model is built, and each artifact route is either skipped
(existing file kept) or rendered. Failures of one unit never stop the others;
they are collected as warnings on the returned ``GenerationReport``.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

from schema_scaffold.codegen import Renderer, TemplateRenderer
from schema_scaffold.colored_logging import log_progress, log_success
from schema_scaffold.domain.field_mapping import TypeMapperProtocol
from schema_scaffold.domain.models import GenerationReport, TableInfo, UnitOutcome, UnitState
from schema_scaffold.exceptions import ConfigurationError, SchemaIntrospectionError
from schema_scaffold.introspection import ColumnSource
from schema_scaffold.mapper import build_table_info
from schema_scaffold.routes import ARTIFACT_ROUTES, ArtifactRoute, package_map


logger = logging.getLogger(__name__)


def split_table_names(value: Optional[str]) -> List[str]:
    """
    Split a comma-separated table list.

    Blank entries are dropped and repeated names are kept once, in the order
    they first appear.

    Example:
        >>> split_table_names(" t_user, ,t_order,t_user")
        ['t_user', 't_order']
    """
    if not value:
        return []
    names = (part.strip() for part in value.split(","))
    return list(dict.fromkeys(name for name in names if name))


def should_skip(output_path: Path, route: ArtifactRoute, overwrite: bool) -> bool:
    """An existing non-empty file is kept if the route preserves it or overwrite is off."""
    path = Path(output_path)
    if not path.is_file() or path.stat().st_size == 0:
        return False
    return route.preserve_if_present or not overwrite


def _render_unit(
    table: TableInfo,
    route: ArtifactRoute,
    config: Any,
    renderer: Renderer,
    report: GenerationReport,
) -> None:
    output_path = None
    try:
        output_path = route.output_path(config, table.entity_name)

        if should_skip(output_path, route, config.overwrite):
            logger.debug(f"Skipping {route.name} for '{table.table_name}': {output_path} already exists.")
            report.add_outcome(UnitOutcome(table.table_name, route.name, output_path, UnitState.SKIPPED))
            return

        data_model = {
            "config": config,
            "table": table,
            "route": route,
            "packages": package_map(config.base_package),
            "author": config.author,
        }
        renderer.render(route.template_name, output_path, data_model)
    except Exception as e:
        # Path resolution, the skip check and rendering all fail only this unit
        message = f"Failed to generate {route.name} for table '{table.table_name}': {e}"
        logger.warning(message)
        report.add_warning(message)
        failed_path = output_path or Path(route.file_name(table.entity_name))
        report.add_outcome(
            UnitOutcome(table.table_name, route.name, failed_path, UnitState.FAILED, message=str(e))
        )
        return

    logger.info(f"Generated file: {output_path}")
    report.add_outcome(UnitOutcome(table.table_name, route.name, output_path, UnitState.RENDERED))


def run_generation(
    config: Any,
    column_source: ColumnSource,
    renderer: Optional[Renderer] = None,
    routes: Sequence[ArtifactRoute] = ARTIFACT_ROUTES,
    type_mapper: Optional[TypeMapperProtocol] = None,
) -> GenerationReport:
    """
    Generate every artifact for every configured table.

    Args:
        config: Validated ScaffoldConfig (or any object with the same attributes)
        column_source: Supplies (comment, raw columns) per table
        renderer: Rendering backend; the packaged Jinja2 templates by default
        routes: Artifact routes visited for each table, in order
        type_mapper: Optional SQL type mapper

    Returns:
        The GenerationReport of this run

    Raises:
        ConfigurationError: If no table names are configured
    """
    table_names = split_table_names(config.tables)
    if not table_names:
        raise ConfigurationError(
            "No tables configured for generation.",
            context={"tables": config.tables},
            suggestions=["Pass --tables or set 'tables' in the config file"],
        )

    if renderer is None:
        renderer = TemplateRenderer(template_dir=getattr(config, "template_dir", None))

    report = GenerationReport()
    for table_name in table_names:
        log_progress(logger, f"Processing table '{table_name}'...")
        try:
            comment, raw_columns = column_source.fetch_table(table_name)
        except SchemaIntrospectionError as e:
            message = f"Table '{table_name}' skipped: {e.message}"
            logger.warning(message)
            report.add_warning(message)
            continue

        table = build_table_info(table_name, comment, raw_columns, type_mapper)
        report.tables.append(table)

        for route in routes:
            _render_unit(table, route, config, renderer, report)

        log_success(logger, f"Table complete: {table.summary()}")

    return report
