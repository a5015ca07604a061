"""Console output for xcmodel-cli.

All commands print through the module-level Rich console so that
``--no-color`` and ``NO_COLOR`` apply everywhere.
"""

from __future__ import annotations

from collections.abc import Sequence
import os
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from xcmodel_core import EntityBlock

NO_COLOR_ENV = "NO_COLOR"


def create_console(no_color: bool = False) -> Console:
    """Create the console, colorless if requested or if NO_COLOR is set."""
    colorless = no_color or os.environ.get(NO_COLOR_ENV) is not None
    return Console(force_terminal=False if colorless else None, no_color=colorless)


console = create_console()


def set_no_color(no_color: bool) -> None:
    """Replace the module console, used by the ``--no-color`` flag."""
    global console
    console = create_console(no_color=no_color)


def success(message: str, **kwargs: Any) -> None:
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    console.print(f"[red]✗[/red] {message}", **kwargs)


def lineage_table(blocks: Sequence[EntityBlock], title: str) -> Table:
    """Build a table with one row per entity block.

    Args:
        blocks: Blocks in emission order.
        title: Table title.

    Returns:
        Table with entity, version label, snapshot version and field count.
    """
    table = Table(title=title)
    table.add_column("Entity")
    table.add_column("Version")
    table.add_column("Snapshot")
    table.add_column("Fields", justify="right")
    for block in blocks:
        table.add_row(
            block.name,
            block.version.dot_description,
            block.snapshot_version.dot_description,
            str(len(block.attributes)),
        )
    return table
