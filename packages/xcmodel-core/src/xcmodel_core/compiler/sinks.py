"""Output sinks for generated artifacts.

A sink accepts a named artifact plus its text content. The compiler calls
a sink once, after the whole artifact has been rendered.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog

logger = structlog.get_logger(__name__)


@runtime_checkable
class ArtifactSink(Protocol):
    """Destination for generated artifacts."""

    def write(self, name: str, content: str, directory: Path) -> Path:
        """Write ``content`` as ``name`` under ``directory`` and return its path."""
        ...


class FileSystemSink:
    """Write artifacts to the local file system.

    Example:
        >>> FileSystemSink().write("contents", text, Path("Model.xcdatamodel"))
        PosixPath('Model.xcdatamodel/contents')
    """

    encoding = "utf-8"

    def write(self, name: str, content: str, directory: Path) -> Path:
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(content, encoding=self.encoding)
        logger.info("artifact_written", path=str(path), size=len(content))
        return path


class MemorySink:
    """Collect artifacts in memory, keyed by their would-be path."""

    def __init__(self) -> None:
        self.artifacts: dict[Path, str] = {}

    def write(self, name: str, content: str, directory: Path) -> Path:
        path = Path(directory) / name
        self.artifacts[path] = content
        return path
