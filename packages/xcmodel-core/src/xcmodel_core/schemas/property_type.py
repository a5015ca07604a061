"""Property type models for xcmodel.

This module defines the abstract, recursive property types that the
TypeMapper translates into storage types:
- ScalarType: Fixed set of scalar value kinds
- Relationship: Reference to another entity (to-one or to-many)
- PropertyType: Discriminated union of scalar, array, subtype, relationship

Example:
    >>> PropertyTypeAdapter.validate_python({"kind": "scalar", "scalar": "string"})
    ScalarPropertyType(kind='scalar', scalar=<ScalarType.STRING: 'string'>)
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field, TypeAdapter


class ScalarType(str, Enum):
    """Scalar value kinds a property or identifier can hold."""

    STRING = "string"
    URL = "url"
    COLOR = "color"
    INT = "int"
    BOOL = "bool"
    DOUBLE = "double"
    FLOAT = "float"
    DATE = "date"
    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"


class Association(str, Enum):
    """Cardinality of a relationship."""

    TO_ONE = "to_one"
    TO_MANY = "to_many"


class Relationship(BaseModel):
    """Reference from a property to another entity.

    Attributes:
        entity_name: Name of the target entity.
        association: to_one or to_many.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    entity_name: str = Field(..., min_length=1, description="Target entity name")
    association: Association = Field(
        default=Association.TO_ONE,
        description="Relationship cardinality",
    )


class ScalarPropertyType(BaseModel):
    """A plain scalar value."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["scalar"] = "scalar"
    scalar: ScalarType


class ArrayPropertyType(BaseModel):
    """An ordered collection of values of ``element`` type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["array"] = "array"
    element: PropertyType


class SubtypePropertyType(BaseModel):
    """A value of a named Subtype."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["subtype"] = "subtype"
    name: str = Field(..., min_length=1)


class RelationshipPropertyType(BaseModel):
    """A reference to another entity."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["relationship"] = "relationship"
    relationship: Relationship

    @property
    def is_to_one(self) -> bool:
        return self.relationship.association is Association.TO_ONE


PropertyType = Annotated[
    ScalarPropertyType | ArrayPropertyType | SubtypePropertyType | RelationshipPropertyType,
    Discriminator("kind"),
]
"""Property type with discriminated union on ``kind``."""

ArrayPropertyType.model_rebuild()

PropertyTypeAdapter: TypeAdapter[PropertyType] = TypeAdapter(PropertyType)

NUMERIC_SCALAR_TYPES: frozenset[ScalarType] = frozenset(
    {
        ScalarType.INT,
        ScalarType.BOOL,
        ScalarType.DOUBLE,
        ScalarType.FLOAT,
        ScalarType.SECONDS,
        ScalarType.MILLISECONDS,
    }
)
"""Scalars stored as primitive numeric values (usesScalarValueType)."""
