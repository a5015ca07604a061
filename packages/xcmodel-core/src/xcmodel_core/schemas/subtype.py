"""Subtype models for xcmodel.

Subtypes are named non-entity value types referenced by properties:
- CasesItems: closed string enumeration
- OptionsItems: bit-flag set
- PropertiesItems: nested structured value
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field

from xcmodel_core.schemas.property_type import PropertyType


class CasesItems(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["cases"] = "cases"
    cases: list[str] = Field(..., min_length=1)


class OptionsItems(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["options"] = "options"
    options: list[str] = Field(..., min_length=1)


class SubtypeProperty(BaseModel):
    """A field of a structured subtype."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    property_type: PropertyType
    optional: bool = False


class PropertiesItems(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["properties"] = "properties"
    properties: list[SubtypeProperty] = Field(..., min_length=1)


SubtypeItems = Annotated[
    CasesItems | OptionsItems | PropertiesItems,
    Discriminator("kind"),
]


class Subtype(BaseModel):
    """A named value type.

    Attributes:
        name: Subtype name, unique within a Descriptions snapshot.
        items: Cases, options, or nested properties.

    Example:
        >>> Subtype(name="Gender", items={"kind": "cases", "cases": ["male", "female"]})
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    items: SubtypeItems
