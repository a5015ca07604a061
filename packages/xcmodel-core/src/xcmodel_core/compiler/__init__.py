"""Compiler module for xcmodel.

This module exports the ModelCompiler and its collaborators:
- ModelCompiler: Main compiler class
- VersionResolver / ResolutionStep: Entity version lineage resolution
- StorageType and type mapping functions
- NamingMode: Legacy or current naming convention
- Sinks: ArtifactSink protocol, FileSystemSink, MemorySink
- Models: CompilerConfig, EntityBlock, AttributeSpec, GeneratedArtifact
"""

from __future__ import annotations

from xcmodel_core.compiler.compiler import ModelCompiler
from xcmodel_core.compiler.models import (
    MODEL_FILENAME,
    AttributeSpec,
    CompilerConfig,
    EntityBlock,
    GeneratedArtifact,
)
from xcmodel_core.compiler.naming import NamingMode, snake_case
from xcmodel_core.compiler.sinks import ArtifactSink, FileSystemSink, MemorySink
from xcmodel_core.compiler.type_mapper import (
    SCALAR_STORAGE_TYPES,
    StorageType,
    identifier_storage_type,
    relationship_storage_type,
    scalar_storage_type,
    storage_type_for,
    subtype_storage_type,
)
from xcmodel_core.compiler.version_resolver import ResolutionStep, VersionResolver

__all__: list[str] = [
    # Compiler class
    "ModelCompiler",
    # Lineage resolution
    "VersionResolver",
    "ResolutionStep",
    # Type mapping
    "StorageType",
    "SCALAR_STORAGE_TYPES",
    "scalar_storage_type",
    "subtype_storage_type",
    "relationship_storage_type",
    "storage_type_for",
    "identifier_storage_type",
    # Naming
    "NamingMode",
    "snake_case",
    # Sinks
    "ArtifactSink",
    "FileSystemSink",
    "MemorySink",
    # Models
    "MODEL_FILENAME",
    "CompilerConfig",
    "AttributeSpec",
    "EntityBlock",
    "GeneratedArtifact",
]
