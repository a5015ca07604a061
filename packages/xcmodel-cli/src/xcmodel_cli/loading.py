"""Shared project loading for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from xcmodel_cli.errors import handle_file_not_found, handle_validation_error

if TYPE_CHECKING:
    from xcmodel_core import DescriptionCatalog, ProjectSpec


def load_project(file_path: str) -> tuple[ProjectSpec, DescriptionCatalog, Path]:
    """Load xcmodel.yaml and its description catalog.

    Args:
        file_path: Path to xcmodel.yaml.

    Returns:
        Tuple of (project spec, catalog, project directory).

    Raises:
        CLIError: If the project file is missing or invalid.
        ConfigurationError: If a description file is invalid.
    """
    # Import here to keep CLI startup fast
    from xcmodel_core import ProjectSpec, load_catalog

    path = Path(file_path)
    if not path.exists():
        handle_file_not_found(file_path)

    try:
        spec = ProjectSpec.from_yaml(path)
    except PydanticValidationError as e:
        handle_validation_error(e, file_path)

    project_dir = path.parent
    catalog = load_catalog(project_dir / spec.descriptions_dir)
    return spec, catalog, project_dir
