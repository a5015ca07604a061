"""Compiler input and output models for xcmodel.

This module defines:
- CompilerConfig: Target version, history checkpoints, naming mode
- AttributeSpec: One stored field of an entity block
- EntityBlock: One entity at one resolved version
- GeneratedArtifact: Named text artifact handed to a sink
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from xcmodel_core.compiler.naming import NamingMode
from xcmodel_core.compiler.type_mapper import StorageType
from xcmodel_core.schemas import Version

MODEL_FILENAME = "contents"
"""Fixed name of the generated model artifact."""


class CompilerConfig(BaseModel):
    """Compilation settings.

    Attributes:
        current_version: Version whose snapshot defines the persisted entities.
        history_versions: Versions that exist as migration checkpoints.
        naming: Naming convention for generated names.

    Example:
        >>> config = CompilerConfig(current_version="2.0.0", history_versions=["1.0.0"])
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    current_version: Version
    history_versions: tuple[Version, ...] = Field(default_factory=tuple)
    naming: NamingMode = NamingMode.CURRENT


class AttributeSpec(BaseModel):
    """A single stored field.

    Attributes:
        name: Generated field name.
        storage_type: Concrete storage type.
        optional: Whether the field may be absent.
        uses_scalar_value_type: Stored as a primitive numeric value.
        element_id: Renaming identifier linking to the previous field name.
        default_attribute: Storage attribute carrying the default literal.
        default_literal: Serialized default value.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    storage_type: StorageType
    optional: bool = True
    uses_scalar_value_type: bool = False
    element_id: str | None = None
    default_attribute: str | None = None
    default_literal: str | None = None


class EntityBlock(BaseModel):
    """An entity rendered at one resolved version.

    Attributes:
        name: Generated entity name (includes the version label).
        class_name: Generated managed class name.
        version: Version label of this block.
        snapshot_version: Version of the snapshot the shape was read from.
        element_id: Renaming identifier linking to the previous entity name.
        attributes: Stored fields in emission order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    class_name: str
    version: Version
    snapshot_version: Version
    element_id: str | None = None
    attributes: tuple[AttributeSpec, ...] = Field(default_factory=tuple)

    def attribute(self, name: str) -> AttributeSpec:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        raise KeyError(name)

    @property
    def attribute_names(self) -> list[str]:
        return [attribute.name for attribute in self.attributes]


class GeneratedArtifact(BaseModel):
    """A named text artifact.

    Attributes:
        name: File name of the artifact.
        content: Full text content.
        blocks: Structured blocks the content was rendered from.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = MODEL_FILENAME
    content: str
    blocks: tuple[EntityBlock, ...] = Field(default_factory=tuple)
