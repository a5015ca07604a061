"""xcmodel-core: Versioned persistence model compiler.

This package provides:
- Description schemas: Version, Descriptions, Entity, Subtype, ...
- ModelCompiler: Description catalog -> versioned persisted model artifact
- VersionResolver: Entity version lineage resolution
- Type mapping from abstract property types to storage types
- ProjectSpec / load_catalog: YAML project and snapshot loading
"""

from __future__ import annotations

__version__ = "0.1.0"

# Compiler
from xcmodel_core.compiler import (
    ArtifactSink,
    CompilerConfig,
    EntityBlock,
    FileSystemSink,
    GeneratedArtifact,
    MemorySink,
    ModelCompiler,
    NamingMode,
    ResolutionStep,
    StorageType,
    VersionResolver,
)

# Error types
from xcmodel_core.errors import (
    CannotPersistIdentifierError,
    CatalogIntegrityError,
    CompilationError,
    ConfigurationError,
    DescriptionLookupError,
    IdentifierCycleError,
    TypeMappingError,
    UnknownEntityError,
    UnknownPropertyError,
    UnknownSubtypeError,
    XcModelError,
)

# Project loading
from xcmodel_core.project import PROJECT_FILE_NAME, ProjectSpec, load_catalog

# Schema models
from xcmodel_core.schemas import (
    DescriptionCatalog,
    Descriptions,
    Entity,
    EntityProperty,
    Subtype,
    Version,
)

__all__ = [
    "__version__",
    # Compiler
    "ModelCompiler",
    "CompilerConfig",
    "VersionResolver",
    "ResolutionStep",
    "StorageType",
    "NamingMode",
    "EntityBlock",
    "GeneratedArtifact",
    "ArtifactSink",
    "FileSystemSink",
    "MemorySink",
    # Errors
    "XcModelError",
    "CatalogIntegrityError",
    "DescriptionLookupError",
    "UnknownEntityError",
    "UnknownPropertyError",
    "UnknownSubtypeError",
    "TypeMappingError",
    "CannotPersistIdentifierError",
    "IdentifierCycleError",
    "CompilationError",
    "ConfigurationError",
    # Project
    "PROJECT_FILE_NAME",
    "ProjectSpec",
    "load_catalog",
    # Schema models
    "Version",
    "Descriptions",
    "DescriptionCatalog",
    "Entity",
    "EntityProperty",
    "Subtype",
]
