"""
Artifact routes for Schema Scaffold.

Every artifact kind the generator produces is one ``ArtifactRoute`` record:
which template renders it, which module and directory it lands in, how its
file is named, and whether a hand-edited copy must be preserved. The
orchestrator walks ``ARTIFACT_ROUTES`` in order; adding an artifact kind means
adding a record here.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from schema_scaffold.constants import ProjectLayout


@dataclass(frozen=True)
class ArtifactRoute:
    """Routing rules for one artifact kind."""

    name: str
    module_suffix: str
    template_name: str
    base_file_dir: str
    package_suffix: str
    file_name_pattern: str
    path_format: str = ProjectLayout.PATH_FORMAT
    preserve_if_present: bool = False

    def module_path(self, step_in: bool, project_name: str, project_root: Optional[str] = None) -> str:
        """
        Directory of the module the artifact belongs to.

        With ``step_in`` the generator runs inside an existing project, so the
        module directory is used as-is; otherwise it is nested under the
        project root (the project name unless given).
        """
        module = project_name + self.module_suffix
        if step_in:
            return module
        return f"{project_root or project_name}/{module}"

    def full_package(self, base_package: str) -> str:
        return base_package + self.package_suffix

    def package_path(self, base_package: str) -> str:
        return self.full_package(base_package).replace(".", os.sep)

    def file_name(self, entity_name: str) -> str:
        return self.file_name_pattern.format(entity=entity_name)

    def output_path(self, config: Any, entity_name: str) -> Path:
        """
        Absolute, normalized output path of this artifact for one entity.

        ``config`` needs ``project_name``, ``base_package`` and ``step_in``;
        ``output_root`` and ``project_root`` are optional.
        """
        relative = self.path_format.format(
            module=self.module_path(
                config.step_in, config.project_name, getattr(config, "project_root", None)
            ),
            base_dir=self.base_file_dir,
            package=self.package_path(config.base_package),
            file=self.file_name(entity_name),
        )
        root = getattr(config, "output_root", None) or "."
        return Path(os.path.abspath(os.path.join(root, relative)))


def _java(name: str, module: str, package_suffix: str, file_pattern: str) -> ArtifactRoute:
    return ArtifactRoute(
        name=name,
        module_suffix=module,
        template_name=f"{name}.java.j2",
        base_file_dir=ProjectLayout.JAVA_FILE_DIR,
        package_suffix=package_suffix,
        file_name_pattern=file_pattern,
    )


ARTIFACT_ROUTES: Tuple[ArtifactRoute, ...] = (
    _java("api", ProjectLayout.API_MODULE, ".api", "{entity}Api.java"),
    _java("select_dto", ProjectLayout.API_MODULE, ".dto", "{entity}SelectDto.java"),
    _java("vo", ProjectLayout.API_MODULE, ".vo", "{entity}Vo.java"),
    _java("dto", ProjectLayout.BIZ_MODULE, ".dto", "{entity}Dto.java"),
    _java("dao", ProjectLayout.BIZ_MODULE, ".dao", "{entity}Dao.java"),
    _java("po", ProjectLayout.BIZ_MODULE, ".dao.po", "{entity}Po.java"),
    _java("service", ProjectLayout.BIZ_MODULE, ".service", "{entity}Service.java"),
    _java("service_impl", ProjectLayout.BIZ_MODULE, ".service.impl", "{entity}ServiceImpl.java"),
    _java("controller", ProjectLayout.BIZ_MODULE, ".controller", "{entity}Controller.java"),
    _java("converter", ProjectLayout.BIZ_MODULE, ".converter", "{entity}Converter.java"),
    ArtifactRoute(
        name="mapper",
        module_suffix=ProjectLayout.BIZ_MODULE,
        template_name="mapper.xml.j2",
        base_file_dir=ProjectLayout.MAPPER_FILE_DIR,
        package_suffix="",
        file_name_pattern="{entity}Mapper.xml",
        path_format=ProjectLayout.PATH_FORMAT_WITHOUT_PACKAGE,
    ),
    ArtifactRoute(
        name="app_yml",
        module_suffix=ProjectLayout.STARTUP_MODULE,
        template_name="application.yml.j2",
        base_file_dir=ProjectLayout.RESOURCES_FILE_DIR,
        package_suffix="",
        file_name_pattern="application.yml",
        path_format=ProjectLayout.PATH_FORMAT_WITHOUT_PACKAGE,
        preserve_if_present=True,
    ),
    ArtifactRoute(
        name="app_dev_yml",
        module_suffix=ProjectLayout.STARTUP_MODULE,
        template_name="application-dev.yml.j2",
        base_file_dir=ProjectLayout.RESOURCES_FILE_DIR,
        package_suffix="",
        file_name_pattern="application-dev.yml",
        path_format=ProjectLayout.PATH_FORMAT_WITHOUT_PACKAGE,
        preserve_if_present=True,
    ),
)

_ROUTES_BY_NAME: Dict[str, ArtifactRoute] = {route.name: route for route in ARTIFACT_ROUTES}


def get_route(name: str) -> ArtifactRoute:
    """Look up a route by name; raises KeyError for unknown names."""
    return _ROUTES_BY_NAME[name]


def package_map(base_package: str) -> Dict[str, str]:
    """Full package of every route that declares one."""
    return {
        route.name: route.full_package(base_package)
        for route in ARTIFACT_ROUTES
        if route.package_suffix
    }
