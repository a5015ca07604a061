"""xcmodel compile command - Generate the persisted model artifact."""

from __future__ import annotations

from pathlib import Path

import click

from xcmodel_cli.errors import reported_errors
from xcmodel_cli.loading import load_project
from xcmodel_cli.output import success


@click.command("compile")
@click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(exists=False),
    default="./xcmodel.yaml",
    help="Path to xcmodel.yaml [default: ./xcmodel.yaml]",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(),
    default=None,
    help="Output directory [default: output_dir from xcmodel.yaml]",
)
@click.option(
    "--naming",
    type=click.Choice(["legacy", "current"]),
    default=None,
    help="Naming convention override [default: naming from xcmodel.yaml]",
)
def compile_cmd(file_path: str, output_path: str | None, naming: str | None) -> None:
    """Generate the persisted model from versioned descriptions.

    Resolves the version lineage of every persisted entity and writes
    one model file containing each entity's historical shapes.

    Examples:

        xcmodel compile

        xcmodel compile --output Model.xcdatamodel

        xcmodel compile --naming legacy
    """
    from xcmodel_core import ModelCompiler, NamingMode

    with reported_errors("Compilation"):
        spec, catalog, project_dir = load_project(file_path)
        output = Path(output_path) if output_path else project_dir / spec.output_dir

        config = spec.compiler_config(NamingMode(naming) if naming else None)
        written = ModelCompiler(catalog, config).generate(output)

    success(f"Compiled {config.current_version} to {written}")
