"""Error reporting for xcmodel-cli.

Core and filesystem failures are translated into ``CLIError`` so that
click prints them through the Rich console and exits with:

- 0: success
- 1: invalid project, descriptions or schema (nothing was written)
- 2: missing project file or output that cannot be written
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError

from xcmodel_cli.output import error

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_SYSTEM_ERROR = 2


class CLIError(click.ClickException):
    """Click exception carrying an xcmodel exit code.

    Attributes:
        exit_code: Process exit code (EXIT_USER_ERROR or EXIT_SYSTEM_ERROR).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Render one line per invalid field.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - current_version: Value error, Invalid version 'x'..."
    """
    details: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]
    lines.extend(f"  - {'.'.join(str(part) for part in d['loc'])}: {d['msg']}" for d in details)
    return "\n".join(lines)


def handle_file_not_found(file_path: str) -> NoReturn:
    raise CLIError(
        f"File not found: {file_path}\n\nUse --file to specify the path to xcmodel.yaml.",
        exit_code=EXIT_SYSTEM_ERROR,
    )


def handle_validation_error(err: PydanticValidationError, file_path: str) -> NoReturn:
    raise CLIError(f"Invalid configuration in {file_path}:\n{format_pydantic_error(err)}")


@contextmanager
def reported_errors(action: str) -> Iterator[None]:
    """Translate core and filesystem errors raised by a command.

    Args:
        action: Label used in the message, e.g. ``"Compilation"``.

    Raises:
        CLIError: With EXIT_USER_ERROR for xcmodel errors and
            EXIT_SYSTEM_ERROR for filesystem errors.
    """
    # Import here to keep CLI startup fast
    from xcmodel_core import XcModelError

    try:
        yield
    except XcModelError as e:
        raise CLIError(f"{action} failed: {e.user_message}") from e
    except PermissionError as e:
        raise CLIError(
            f"Permission denied: cannot write {e.filename or 'output directory'}",
            exit_code=EXIT_SYSTEM_ERROR,
        ) from e
    except OSError as e:
        raise CLIError(f"{action} failed: {e}", exit_code=EXIT_SYSTEM_ERROR) from e
