"""Shared test fixtures for xcmodel-cli tests.

Provides CliRunner fixtures and a minimal project written to a
temporary directory.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path
import sys
from typing import Any

from click.testing import CliRunner
import pytest
import structlog
import yaml

PROJECT_FILENAME = "xcmodel.yaml"

GENRE_V1: dict[str, Any] = {
    "entities": [
        {
            "name": "Category",
            "added_at_version": "1.0.0",
            "properties": [{"name": "label", "property_type": {"kind": "scalar", "scalar": "string"}}],
        }
    ],
}

GENRE_V2: dict[str, Any] = {
    "entities": [
        {
            "name": "Genre",
            "added_at_version": "1.0.0",
            "previous_name": "Category",
            "model_mapping_history": [{"to": "2.0.0"}],
            "properties": [
                {"name": "name", "property_type": {"kind": "scalar", "scalar": "string"}},
                {"name": "sortOrder", "property_type": {"kind": "scalar", "scalar": "int"}},
            ],
        }
    ],
}


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Send structlog output to the captured stdout, not the CliRunner output."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem."""
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[..., Path]:
    """Write xcmodel.yaml and description snapshots into tmp_path."""

    def _write(project: dict[str, Any], snapshots: dict[str, dict[str, Any]]) -> Path:
        descriptions_dir = tmp_path / project.get("descriptions_dir", "descriptions")
        descriptions_dir.mkdir(parents=True, exist_ok=True)
        for version, data in snapshots.items():
            (descriptions_dir / f"{version}.yaml").write_text(yaml.safe_dump(data, sort_keys=False))
        project_path = tmp_path / PROJECT_FILENAME
        project_path.write_text(yaml.safe_dump(project, sort_keys=False))
        return project_path

    return _write


@pytest.fixture
def genre_project(write_project: Callable[..., Path]) -> Path:
    """Valid two-version project: Category renamed to Genre at 2.0.0.

    Returns:
        Path to xcmodel.yaml.
    """
    return write_project(
        {"current_version": "2.0.0", "history_versions": ["1.0.0"]},
        {"1.0.0": GENRE_V1, "2.0.0": GENRE_V2},
    )


@pytest.fixture
def broken_project(write_project: Callable[..., Path]) -> Path:
    """Project whose current snapshot references an unknown subtype."""
    return write_project(
        {"current_version": "1.0.0"},
        {
            "1.0.0": {
                "entities": [
                    {
                        "name": "Movie",
                        "added_at_version": "1.0.0",
                        "properties": [
                            {"name": "rating", "property_type": {"kind": "subtype", "name": "Rating"}},
                        ],
                    }
                ],
            }
        },
    )
