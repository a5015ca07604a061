"""xcmodel-cli: Command-line interface for the xcmodel compiler."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
