"""Schema version model for xcmodel.

Versions label released schema snapshots. They are totally ordered,
hashable (usable as catalog keys), and parse from dotted strings.
"""

from __future__ import annotations

import re
from functools import total_ordering
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?$")
"""Accepts MAJOR.MINOR or MAJOR.MINOR.PATCH."""


@total_ordering
class Version(BaseModel):
    """A released schema version.

    Attributes:
        major: Major component.
        minor: Minor component.
        patch: Patch component.

    Example:
        >>> Version.parse("1.2.3") < Version.parse("1.10.0")
        True
        >>> Version.is_matching_release(Version.parse("1.2.0"), Version.parse("1.2.5"))
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    major: int = Field(..., ge=0, description="Major version component")
    minor: int = Field(..., ge=0, description="Minor version component")
    patch: int = Field(default=0, ge=0, description="Patch version component")

    @model_validator(mode="before")
    @classmethod
    def _parse_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            match = VERSION_PATTERN.match(data.strip())
            if match is None:
                msg = f"Invalid version '{data}'. Expected MAJOR.MINOR[.PATCH]"
                raise ValueError(msg)
            major, minor, patch = match.groups()
            return {"major": int(major), "minor": int(minor), "patch": int(patch or 0)}
        return data

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse a dotted version string."""
        return cls.model_validate(value)

    @property
    def dot_description(self) -> str:
        """Canonical dotted form, e.g. ``1.2.3``."""
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def underscored(self) -> str:
        """Identifier-safe form, e.g. ``1_2_3``."""
        return f"{self.major}_{self.minor}_{self.patch}"

    @staticmethod
    def is_matching_release(lhs: Version, rhs: Version) -> bool:
        """Return True if both versions differ only by patch level."""
        return lhs.major == rhs.major and lhs.minor == rhs.minor

    def as_tuple(self) -> tuple[int, int, int]:
        """Return (major, minor, patch)."""
        return (self.major, self.minor, self.patch)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.as_tuple() < other.as_tuple()

    def __str__(self) -> str:
        return self.dot_description
