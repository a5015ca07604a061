"""CLI entry point for xcmodel.

Subcommands are registered as ``"module:attribute"`` references and
imported on first use, so ``xcmodel --help`` never imports the compiler.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from xcmodel_cli import __version__
from xcmodel_cli.output import set_no_color

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True

COMMANDS: dict[str, str] = {
    "compile": "xcmodel_cli.commands.compile:compile_cmd",
    "validate": "xcmodel_cli.commands.validate:validate",
}


class LazyGroup(rclick.RichGroup):
    """Rich group whose subcommands are imported when first requested.

    Attributes:
        lazy_subcommands: Command name -> ``"module:attribute"`` reference.
    """

    def __init__(self, *args: Any, lazy_subcommands: dict[str, str] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = dict(lazy_subcommands or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*super().list_commands(ctx), *self.lazy_subcommands})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name in self.commands or cmd_name not in self.lazy_subcommands:
            return super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        command = self._load(cmd_name)
        self.add_command(command, cmd_name)
        return command

    def _load(self, cmd_name: str) -> click.Command:
        module_name, _, attribute = self.lazy_subcommands[cmd_name].partition(":")
        command = getattr(importlib.import_module(module_name), attribute)
        if not isinstance(command, click.Command):
            raise TypeError(f"{module_name}:{attribute} is not a click command")
        return command


def _disable_color(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if value:
        set_no_color(True)


@click.command(cls=LazyGroup, lazy_subcommands=COMMANDS)
@click.version_option(version=__version__, prog_name="xcmodel")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=_disable_color,
)
def cli() -> None:
    """xcmodel - Versioned persistence model compiler.

    Compile per-version entity descriptions into a persisted model that
    keeps every historical shape of every entity.

    **Getting Started:**

    - `xcmodel validate` - Resolve every entity's version lineage
    - `xcmodel compile` - Generate the model artifact
    """


if __name__ == "__main__":
    cli()
