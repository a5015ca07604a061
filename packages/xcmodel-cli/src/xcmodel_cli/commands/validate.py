"""xcmodel validate command - Resolve and type-check without writing."""

from __future__ import annotations

import click

from xcmodel_cli import output
from xcmodel_cli.errors import reported_errors
from xcmodel_cli.loading import load_project


@click.command()
@click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(exists=False),
    default="./xcmodel.yaml",
    help="Path to xcmodel.yaml [default: ./xcmodel.yaml]",
)
@click.option(
    "--show-steps/--no-show-steps",
    default=True,
    help="Print the resolved version lineage of every entity.",
)
def validate(file_path: str, show_steps: bool) -> None:
    """Validate descriptions and version lineage.

    Loads every description snapshot, resolves each persisted entity's
    version lineage and maps every property type, without writing.

    Examples:

        xcmodel validate

        xcmodel validate --file path/to/xcmodel.yaml
    """
    from xcmodel_core import ModelCompiler

    with reported_errors("Validation"):
        spec, catalog, _ = load_project(file_path)
        blocks = ModelCompiler(catalog, spec.compiler_config()).resolve_blocks()

    if show_steps:
        title = f"Version lineage ({spec.current_version})"
        output.console.print(output.lineage_table(blocks, title))

    output.success(f"Descriptions valid: {len(blocks)} entity blocks across {len(catalog)} versions")
