"""Default value models for xcmodel.

A property may declare a literal default. Each variant knows which storage
attribute carries it and how its literal is serialized.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Discriminator

DEFAULT_VALUE_ATTRIBUTE = "defaultValueString"
DEFAULT_DATE_ATTRIBUTE = "defaultDateTimeInterval"


class _DefaultValueBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def storage_attribute_name(self) -> str:
        return DEFAULT_VALUE_ATTRIBUTE


class BoolDefault(_DefaultValueBase):
    kind: Literal["bool"] = "bool"
    value: bool

    @property
    def storage_literal(self) -> str:
        return "1" if self.value else "0"


class FloatDefault(_DefaultValueBase):
    kind: Literal["float"] = "float"
    value: float

    @property
    def storage_literal(self) -> str:
        return repr(float(self.value))


class IntDefault(_DefaultValueBase):
    kind: Literal["int"] = "int"
    value: int

    @property
    def storage_literal(self) -> str:
        return str(self.value)


class StringDefault(_DefaultValueBase):
    kind: Literal["string"] = "string"
    value: str

    @property
    def storage_literal(self) -> str:
        return self.value


class EnumCaseDefault(_DefaultValueBase):
    kind: Literal["enum_case"] = "enum_case"
    value: str

    @property
    def storage_literal(self) -> str:
        return self.value


class NilDefault(_DefaultValueBase):
    kind: Literal["nil"] = "nil"

    @property
    def storage_literal(self) -> str:
        return "nil"


class DateDefault(_DefaultValueBase):
    """A fixed date, serialized as seconds since the Unix epoch.

    Naive datetimes are interpreted as UTC so the literal does not depend on
    the machine's timezone.
    """

    kind: Literal["date"] = "date"
    value: datetime

    @property
    def storage_attribute_name(self) -> str:
        return DEFAULT_DATE_ATTRIBUTE

    @property
    def storage_literal(self) -> str:
        value = self.value
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return repr(value.timestamp())


class CurrentDateDefault(_DefaultValueBase):
    kind: Literal["current_date"] = "current_date"

    @property
    def storage_attribute_name(self) -> str:
        return DEFAULT_DATE_ATTRIBUTE

    @property
    def storage_literal(self) -> str:
        return "0"


DefaultValue = Annotated[
    BoolDefault
    | FloatDefault
    | IntDefault
    | StringDefault
    | DateDefault
    | EnumCaseDefault
    | CurrentDateDefault
    | NilDefault,
    Discriminator("kind"),
]
"""Default value with discriminated union on ``kind``."""
