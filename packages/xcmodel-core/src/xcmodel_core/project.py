"""Project configuration and description catalog loading.

A project is described by ``xcmodel.yaml``:

    current_version: "2.0.0"
    history_versions: ["1.0.0", "1.1.0"]
    naming: current
    descriptions_dir: descriptions
    output_dir: Model.xcdatamodel

The descriptions directory holds one snapshot per released version, named
after the version (``descriptions/1.0.0.yaml``), each with ``entities`` and
``subtypes`` lists.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from xcmodel_core.compiler.models import CompilerConfig
from xcmodel_core.compiler.naming import NamingMode
from xcmodel_core.errors import ConfigurationError
from xcmodel_core.schemas import DescriptionCatalog, Descriptions, Version

logger = structlog.get_logger(__name__)

PROJECT_FILE_NAME = "xcmodel.yaml"
DESCRIPTION_SUFFIXES = (".yaml", ".yml")


class ProjectSpec(BaseModel):
    """Root schema for xcmodel.yaml.

    Attributes:
        current_version: Version to compile.
        history_versions: Migration checkpoint versions.
        naming: Naming convention for generated names.
        descriptions_dir: Directory of version snapshots, relative to the project file.
        output_dir: Output directory, relative to the project file.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    current_version: Version = Field(..., description="Version to compile")
    history_versions: list[Version] = Field(
        default_factory=list,
        description="Versions that exist as migration checkpoints",
    )
    naming: NamingMode = Field(
        default=NamingMode.CURRENT,
        description="Naming convention (legacy or current)",
    )
    descriptions_dir: str = Field(
        default="descriptions",
        min_length=1,
        description="Directory of per-version description files",
    )
    output_dir: str = Field(
        default=".xcmodel",
        min_length=1,
        description="Directory the model artifact is written to",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> ProjectSpec:
        """Load and validate ProjectSpec from a YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ConfigurationError: If the YAML syntax is invalid.
            pydantic.ValidationError: If schema validation fails.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return cls.model_validate(_read_yaml(path))

    def compiler_config(self, naming: NamingMode | None = None) -> CompilerConfig:
        return CompilerConfig(
            current_version=self.current_version,
            history_versions=tuple(self.history_versions),
            naming=naming or self.naming,
        )


def load_catalog(descriptions_dir: str | Path) -> DescriptionCatalog:
    """Load every version snapshot from a directory.

    Args:
        descriptions_dir: Directory containing ``<version>.yaml`` files.

    Returns:
        DescriptionCatalog keyed by the version in each file name.

    Raises:
        ConfigurationError: If the directory is missing or a file is invalid.
    """
    directory = Path(descriptions_dir)
    if not directory.is_dir():
        raise ConfigurationError(
            "Descriptions directory not found",
            file_path=str(directory),
        )

    snapshots: list[Descriptions] = []
    for path in sorted(directory.iterdir()):
        if path.suffix not in DESCRIPTION_SUFFIXES:
            continue
        snapshots.append(load_descriptions(path))

    logger.info(
        "catalog_loaded",
        directory=str(directory),
        versions=[s.version.dot_description for s in snapshots],
    )
    return DescriptionCatalog(snapshots)


def load_descriptions(path: Path) -> Descriptions:
    """Load one snapshot; the version is taken from the file name."""
    try:
        version = Version.parse(path.stem)
    except PydanticValidationError:
        raise ConfigurationError(
            f"Description file name '{path.name}' is not a version",
            file_path=str(path),
        ) from None

    data = _read_yaml(path) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Descriptions must be a mapping", file_path=str(path))

    declared = data.pop("version", None)
    if declared is not None and not _is_same_version(declared, version):
        raise ConfigurationError(
            f"Declared version {declared} does not match file name",
            file_path=str(path),
            field_path="version",
        )

    try:
        return Descriptions.model_validate({**data, "version": version})
    except PydanticValidationError as e:
        first = e.errors()[0]
        field_path = ".".join(str(x) for x in first["loc"])
        raise ConfigurationError(
            f"Invalid descriptions: {first['msg']}",
            file_path=str(path),
            field_path=field_path,
            internal_details=str(e),
        ) from e


def _is_same_version(declared: Any, version: Version) -> bool:
    try:
        return Version.parse(str(declared)) == version
    except PydanticValidationError:
        return False


def _read_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML: {e}",
            file_path=str(path),
        ) from e
