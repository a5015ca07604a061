"""Entity models for xcmodel.

This module defines persisted schema objects:
- Identifier: Discriminated union describing how instances are identified
- EntityProperty: A typed property declared on an entity
- ModelMapping: A version at which an entity's stored shape changed
- Entity: A schema object type with identifier, flags and properties

Invariants:
    - A persisted entity must declare added_at_version
    - model_mapping_history is authored in chronological order
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field

from xcmodel_core.errors import UnknownPropertyError
from xcmodel_core.schemas.default_value import DefaultValue
from xcmodel_core.schemas.property_type import (
    ArrayPropertyType,
    PropertyType,
    RelationshipPropertyType,
    ScalarType,
)
from xcmodel_core.schemas.version import Version


class PropertyIdentifier(BaseModel):
    """Identifier value lives in one of the entity's properties."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["property"] = "property"
    property_name: str = Field(..., min_length=1)


class RelationshipsIdentifier(BaseModel):
    """Synthetic identifier shared with related entities."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["relationships"] = "relationships"
    scalar_type: ScalarType
    relationships: list[str] = Field(
        default_factory=list,
        description="Names of entities sharing this identifier",
    )


class ScalarTypeIdentifier(BaseModel):
    """Synthetic identifier of a given scalar type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["scalar_type"] = "scalar_type"
    scalar_type: ScalarType


class VoidIdentifier(BaseModel):
    """No real identifier; stored as a 64-bit integer placeholder."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["void"] = "void"


Identifier = Annotated[
    PropertyIdentifier | RelationshipsIdentifier | ScalarTypeIdentifier | VoidIdentifier,
    Discriminator("kind"),
]
"""Entity identifier with discriminated union on ``kind``."""


class EntityProperty(BaseModel):
    """A property declared on an entity.

    Attributes:
        name: Property name.
        property_type: Abstract property type.
        optional: Whether the value may be absent.
        extra: Sparse field that may be overridden; stored with a flag field.
        unused: Declared but no longer stored.
        previous_name: Name at the prior migration checkpoint, if renamed.
        default_value: Literal default, if any.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    property_type: PropertyType
    optional: bool = False
    extra: bool = False
    unused: bool = False
    previous_name: str | None = None
    default_value: DefaultValue | None = None

    @property
    def is_array(self) -> bool:
        return isinstance(self.property_type, ArrayPropertyType)

    @property
    def is_relationship(self) -> bool:
        return isinstance(self.property_type, RelationshipPropertyType)


class ModelMapping(BaseModel):
    """A version at which the entity's stored shape must be re-emitted."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    to: Version = Field(..., description="Version the mapping migrates to")
    from_version: Version | None = Field(
        default=None,
        alias="from",
        description="Version the mapping migrates from (informational)",
    )


class Entity(BaseModel):
    """A persisted schema object type.

    Attributes:
        name: Entity name.
        persist: Non-persisted entities are excluded from the model.
        remote: Adds a remote synchronization state field.
        last_remote_read: Adds a last remote read timestamp field.
        identifier: How instances are identified.
        added_at_version: First version in which the entity existed.
        previous_name: Name at the prior migration checkpoint, if renamed.
        model_mapping_history: Versions at which the stored shape changed.
        properties: Declared properties in authoring order.

    Example:
        >>> movie = Entity(
        ...     name="Movie",
        ...     added_at_version="1.0.0",
        ...     properties=[{"name": "title", "property_type": {"kind": "scalar", "scalar": "string"}}],
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    persist: bool = True
    remote: bool = False
    last_remote_read: bool = False
    identifier: Identifier = Field(default_factory=VoidIdentifier)
    added_at_version: Version | None = None
    previous_name: str | None = None
    model_mapping_history: list[ModelMapping] | None = None
    properties: list[EntityProperty] = Field(default_factory=list)

    @property
    def used_properties(self) -> list[EntityProperty]:
        """Properties that are stored, in declaration order."""
        return [p for p in self.properties if not p.unused]

    @property
    def has_void_identifier(self) -> bool:
        return isinstance(self.identifier, VoidIdentifier)

    def property_for(self, name: str, *, version: Version | None = None) -> EntityProperty:
        """Look up a declared property by name.

        Raises:
            UnknownPropertyError: If the entity declares no such property.
        """
        for prop in self.properties:
            if prop.name == name:
                return prop
        raise UnknownPropertyError(
            name,
            entity_name=self.name,
            version=version.dot_description if version else None,
        )
