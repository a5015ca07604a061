"""Translate abstract property types into storage types.

Pure functions, no state. Every dispatch matches the full set of variants
of its union and ends in ``assert_never``.

Rules:
    - scalar        -> fixed table lookup
    - subtype       -> cases: String, options: Integer 64, properties: Binary
    - to-many       -> Binary (identifiers serialized as a blob)
    - to-one        -> storage type of the target entity's identifier
    - array         -> Binary regardless of element type

Example:
    >>> storage_type_for(ScalarPropertyType(scalar=ScalarType.DATE), descriptions)
    <StorageType.DATE: 'Date'>
"""

from __future__ import annotations

from enum import Enum

from typing_extensions import assert_never

from xcmodel_core.errors import CannotPersistIdentifierError, IdentifierCycleError
from xcmodel_core.schemas import (
    ArrayPropertyType,
    Association,
    CasesItems,
    Descriptions,
    Entity,
    OptionsItems,
    PropertiesItems,
    PropertyIdentifier,
    PropertyType,
    Relationship,
    RelationshipPropertyType,
    RelationshipsIdentifier,
    ScalarPropertyType,
    ScalarType,
    ScalarTypeIdentifier,
    Subtype,
    SubtypePropertyType,
    VoidIdentifier,
)


class StorageType(str, Enum):
    """Concrete attribute types supported by the persisted model."""

    STRING = "String"
    INTEGER_64 = "Integer 64"
    DOUBLE = "Double"
    FLOAT = "Float"
    DATE = "Date"
    BINARY = "Binary"


SCALAR_STORAGE_TYPES: dict[ScalarType, StorageType] = {
    ScalarType.STRING: StorageType.STRING,
    ScalarType.URL: StorageType.STRING,
    ScalarType.COLOR: StorageType.STRING,
    ScalarType.INT: StorageType.INTEGER_64,
    ScalarType.BOOL: StorageType.INTEGER_64,
    ScalarType.DOUBLE: StorageType.DOUBLE,
    ScalarType.SECONDS: StorageType.DOUBLE,
    ScalarType.MILLISECONDS: StorageType.DOUBLE,
    ScalarType.FLOAT: StorageType.FLOAT,
    ScalarType.DATE: StorageType.DATE,
}


def scalar_storage_type(scalar_type: ScalarType) -> StorageType:
    return SCALAR_STORAGE_TYPES[scalar_type]


def subtype_storage_type(subtype: Subtype) -> StorageType:
    items = subtype.items
    if isinstance(items, CasesItems):
        return StorageType.STRING
    if isinstance(items, OptionsItems):
        return StorageType.INTEGER_64
    if isinstance(items, PropertiesItems):
        return StorageType.BINARY
    assert_never(items)


def storage_type_for(property_type: PropertyType, descriptions: Descriptions) -> StorageType:
    """Return the storage type of a property type.

    Args:
        property_type: Abstract property type.
        descriptions: Snapshot used to resolve subtype and entity references.

    Returns:
        The concrete storage type.

    Raises:
        UnknownSubtypeError: If a referenced subtype is not in the snapshot.
        UnknownEntityError: If a to-one target entity is not in the snapshot.
        TypeMappingError: If a to-one target's identifier cannot be stored.
    """
    if isinstance(property_type, ScalarPropertyType):
        return scalar_storage_type(property_type.scalar)
    if isinstance(property_type, SubtypePropertyType):
        return subtype_storage_type(descriptions.subtype_for(property_type.name))
    if isinstance(property_type, RelationshipPropertyType):
        return relationship_storage_type(property_type.relationship, descriptions)
    if isinstance(property_type, ArrayPropertyType):
        return StorageType.BINARY
    assert_never(property_type)


def relationship_storage_type(relationship: Relationship, descriptions: Descriptions) -> StorageType:
    association = relationship.association
    if association is Association.TO_MANY:
        return StorageType.BINARY
    if association is Association.TO_ONE:
        target = descriptions.entity_for(relationship.entity_name)
        return identifier_storage_type(target, descriptions)
    assert_never(association)


def identifier_storage_type(
    entity: Entity,
    descriptions: Descriptions,
    _visited: tuple[str, ...] = (),
) -> StorageType:
    """Return the storage type of an entity's identifier.

    Follows to-one relationship chains until a scalar identifier is reached.
    Chains are tracked by entity name so a cycle raises instead of recursing
    without bound.

    Args:
        entity: Entity whose identifier is resolved.
        descriptions: Snapshot used to resolve related entities.

    Raises:
        UnknownPropertyError: If a property identifier names no property.
        UnknownEntityError: If a related entity is not in the snapshot.
        CannotPersistIdentifierError: If the identifier is an array or a subtype.
        IdentifierCycleError: If relationship identifiers form a cycle.
    """
    if entity.name in _visited:
        raise IdentifierCycleError((*_visited, entity.name))
    visited = (*_visited, entity.name)

    identifier = entity.identifier
    if isinstance(identifier, PropertyIdentifier):
        prop = entity.property_for(identifier.property_name, version=descriptions.version)
        property_type = prop.property_type
        if isinstance(property_type, ScalarPropertyType):
            return scalar_storage_type(property_type.scalar)
        if isinstance(property_type, RelationshipPropertyType):
            if not property_type.is_to_one:
                raise CannotPersistIdentifierError(entity.name)
            target = descriptions.entity_for(property_type.relationship.entity_name)
            return identifier_storage_type(target, descriptions, visited)
        if isinstance(property_type, (ArrayPropertyType, SubtypePropertyType)):
            raise CannotPersistIdentifierError(entity.name)
        assert_never(property_type)
    if isinstance(identifier, (RelationshipsIdentifier, ScalarTypeIdentifier)):
        return scalar_storage_type(identifier.scalar_type)
    if isinstance(identifier, VoidIdentifier):
        return StorageType.INTEGER_64
    assert_never(identifier)
