"""Schema definitions for xcmodel.

This module exports the description data model:

Snapshot Models:
- Version: Ordered schema version label
- Descriptions: Schema snapshot for one version
- DescriptionCatalog: Immutable Version -> Descriptions mapping

Entity Models:
- Entity, EntityProperty, ModelMapping
- Identifier variants: PropertyIdentifier, RelationshipsIdentifier,
  ScalarTypeIdentifier, VoidIdentifier

Type Models:
- ScalarType, Association, Relationship
- PropertyType variants: ScalarPropertyType, ArrayPropertyType,
  SubtypePropertyType, RelationshipPropertyType
- Subtype and its items: CasesItems, OptionsItems, PropertiesItems
- DefaultValue variants
"""

from __future__ import annotations

from xcmodel_core.schemas.default_value import (
    BoolDefault,
    CurrentDateDefault,
    DateDefault,
    DefaultValue,
    EnumCaseDefault,
    FloatDefault,
    IntDefault,
    NilDefault,
    StringDefault,
)
from xcmodel_core.schemas.descriptions import DescriptionCatalog, Descriptions
from xcmodel_core.schemas.entity import (
    Entity,
    EntityProperty,
    Identifier,
    ModelMapping,
    PropertyIdentifier,
    RelationshipsIdentifier,
    ScalarTypeIdentifier,
    VoidIdentifier,
)
from xcmodel_core.schemas.property_type import (
    ArrayPropertyType,
    Association,
    PropertyType,
    PropertyTypeAdapter,
    Relationship,
    RelationshipPropertyType,
    ScalarPropertyType,
    ScalarType,
    SubtypePropertyType,
)
from xcmodel_core.schemas.subtype import (
    CasesItems,
    OptionsItems,
    PropertiesItems,
    Subtype,
    SubtypeItems,
    SubtypeProperty,
)
from xcmodel_core.schemas.version import Version

__all__: list[str] = [
    # Snapshots
    "Version",
    "Descriptions",
    "DescriptionCatalog",
    # Entities
    "Entity",
    "EntityProperty",
    "ModelMapping",
    "Identifier",
    "PropertyIdentifier",
    "RelationshipsIdentifier",
    "ScalarTypeIdentifier",
    "VoidIdentifier",
    # Property types
    "ScalarType",
    "Association",
    "Relationship",
    "PropertyType",
    "PropertyTypeAdapter",
    "ScalarPropertyType",
    "ArrayPropertyType",
    "SubtypePropertyType",
    "RelationshipPropertyType",
    # Subtypes
    "Subtype",
    "SubtypeItems",
    "SubtypeProperty",
    "CasesItems",
    "OptionsItems",
    "PropertiesItems",
    # Default values
    "DefaultValue",
    "BoolDefault",
    "FloatDefault",
    "IntDefault",
    "StringDefault",
    "DateDefault",
    "EnumCaseDefault",
    "CurrentDateDefault",
    "NilDefault",
]
