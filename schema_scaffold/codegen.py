import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    select_autoescape,
)
from inflect import engine as inflect_engine

from schema_scaffold.constants import JAVA_IMPORT_MAP, JAVA_TYPE_MAP
from schema_scaffold.domain.models import ValueType
from schema_scaffold.domain.naming import upper_first
from schema_scaffold.exceptions import TemplateRenderError


logger = logging.getLogger(__name__)

# Define the path to the templates directory relative to this file
TEMPLATE_DIR = Path(__file__).parent / "templates"

_INFLECT_ENGINE_ = inflect_engine()


def jinja2_pluralize_filter(word):
    """
    Custom Jinja filter to pluralize a word using inflect.
    Includes error handling and fallback.
    """
    if not isinstance(word, str) or not word:
        return ""
    try:
        plural = _INFLECT_ENGINE_.plural(word)
        if plural:
            return plural
        return word + "s"
    except Exception as e:
        logger.error(f"Inflect pluralization failed for '{word}': {e}. Falling back to adding 's'.")
        return word + "s"


def jinja2_java_type_filter(value_type: ValueType) -> str:
    """Java type name of a semantic value type."""
    return JAVA_TYPE_MAP.get(value_type, JAVA_TYPE_MAP[ValueType.OBJECT])


def jinja2_java_imports_filter(columns) -> list:
    """Sorted java imports needed by the value types of the given columns."""
    imports = {JAVA_IMPORT_MAP[col.value_type] for col in columns if col.value_type in JAVA_IMPORT_MAP}
    return sorted(imports)


def setup_jinja_env(template_dir: Optional[Union[str, Path]] = None) -> Environment:
    """Sets up and returns the Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
        # Only the mapper XML needs escaping of interpolated comments
        autoescape=select_autoescape(
            enabled_extensions=("xml.j2",), default_for_string=False, default=False
        ),
        undefined=StrictUndefined,  # A malformed data model fails the unit
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["pluralize"] = jinja2_pluralize_filter
    env.filters["java_type"] = jinja2_java_type_filter
    env.filters["java_imports"] = jinja2_java_imports_filter
    env.filters["upper_first"] = upper_first
    return env


def write_atomically(output_path: Path, content: str) -> None:
    """
    Replace ``output_path`` with ``content``.

    The text goes to a temporary file in the target directory first, so the
    target is either fully replaced or left untouched.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=".tmp", suffix=".tmp", dir=str(output_path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, output_path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class Renderer(Protocol):
    """Rendering backend used by the generation orchestrator."""

    def render(self, template_name: str, output_path: Path, data_model: Dict[str, Any]) -> None:
        """Render ``template_name`` into ``output_path``; raise on failure."""
        ...


class TemplateRenderer:
    """Jinja2 rendering backend that fully replaces each target file."""

    def __init__(self, env: Optional[Environment] = None, template_dir: Optional[Union[str, Path]] = None):
        self.env = env or setup_jinja_env(template_dir)

    def render_to_string(self, template_name: str, data_model: Dict[str, Any]) -> str:
        template = self.env.get_template(template_name)
        return template.render(data_model)

    def render(self, template_name: str, output_path: Path, data_model: Dict[str, Any]) -> None:
        """Renders a Jinja template and saves the output to the specified path."""
        output_path = Path(output_path)
        try:
            rendered_content = self.render_to_string(template_name, data_model)
            write_atomically(output_path, rendered_content)
        except Exception as e:
            raise TemplateRenderError(
                f"Error generating file from template '{template_name}': {e}",
                template=template_name,
                output_path=str(output_path),
            ) from e
        logger.debug(f"Generated file: {output_path}")
