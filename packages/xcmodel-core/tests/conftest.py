"""Shared pytest fixtures for xcmodel-core tests.

This module provides description snapshots and catalogs used across
unit and integration tests.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import structlog
import yaml

from xcmodel_core.schemas import DescriptionCatalog, Descriptions, Entity, Version


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def make_entity() -> Callable[..., Entity]:
    """Factory for entities from keyword arguments.

    Properties may be given as ``(name, property_type_dict)`` tuples or as
    full property dicts.
    """

    def _make(name: str, properties: list[Any] | None = None, **kwargs: Any) -> Entity:
        props = []
        for prop in properties or []:
            if isinstance(prop, tuple):
                prop_name, property_type = prop
                props.append({"name": prop_name, "property_type": property_type})
            else:
                props.append(prop)
        kwargs.setdefault("added_at_version", "1.0.0")
        return Entity.model_validate({"name": name, "properties": props, **kwargs})

    return _make


@pytest.fixture
def make_descriptions() -> Callable[..., Descriptions]:
    """Factory for a Descriptions snapshot."""

    def _make(
        version: str,
        entities: list[Entity] | None = None,
        subtypes: list[dict[str, Any]] | None = None,
    ) -> Descriptions:
        return Descriptions.model_validate(
            {
                "version": version,
                "entities": entities or [],
                "subtypes": subtypes or [],
            }
        )

    return _make


@pytest.fixture
def scalar() -> Callable[[str], dict[str, str]]:
    """Build a scalar property type dict."""

    def _scalar(name: str) -> dict[str, str]:
        return {"kind": "scalar", "scalar": name}

    return _scalar


@pytest.fixture
def to_one() -> Callable[[str], dict[str, Any]]:
    """Build a to-one relationship property type dict."""

    def _to_one(entity_name: str) -> dict[str, Any]:
        return {
            "kind": "relationship",
            "relationship": {"entity_name": entity_name, "association": "to_one"},
        }

    return _to_one


@pytest.fixture
def movie_catalog(
    make_entity: Callable[..., Entity],
    make_descriptions: Callable[..., Descriptions],
    scalar: Callable[[str], dict[str, str]],
) -> DescriptionCatalog:
    """Single version catalog with one Movie entity (title: string)."""
    movie = make_entity("Movie", [("title", scalar("string"))])
    return DescriptionCatalog([make_descriptions("1.0.0", [movie])])


@pytest.fixture
def genre_catalog(
    make_entity: Callable[..., Entity],
    make_descriptions: Callable[..., Descriptions],
    scalar: Callable[[str], dict[str, str]],
) -> DescriptionCatalog:
    """Two version catalog: Category (1.0.0) renamed to Genre (2.0.0)."""
    category = make_entity("Category", [("label", scalar("string"))])
    genre = make_entity(
        "Genre",
        [("name", scalar("string")), ("position", scalar("int"))],
        previous_name="Category",
        model_mapping_history=[{"to": "2.0.0"}],
    )
    return DescriptionCatalog(
        [
            make_descriptions("1.0.0", [category]),
            make_descriptions("2.0.0", [genre]),
        ]
    )


@pytest.fixture
def v() -> Callable[[str], Version]:
    """Parse a version string."""
    return Version.parse


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[..., Path]:
    """Write an xcmodel.yaml project with description snapshots.

    Returns:
        Function taking (project dict, {version: descriptions dict}) and
        returning the project file path.
    """

    def _write(project: dict[str, Any], snapshots: dict[str, dict[str, Any]]) -> Path:
        descriptions_dir = tmp_path / project.get("descriptions_dir", "descriptions")
        descriptions_dir.mkdir(parents=True, exist_ok=True)
        for version, data in snapshots.items():
            (descriptions_dir / f"{version}.yaml").write_text(yaml.safe_dump(data, sort_keys=False))
        project_path = tmp_path / "xcmodel.yaml"
        project_path.write_text(yaml.safe_dump(project, sort_keys=False))
        return project_path

    return _write
