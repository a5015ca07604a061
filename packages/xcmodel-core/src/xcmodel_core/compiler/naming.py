"""Naming conventions for generated entity and attribute names.

NamingMode is passed explicitly to every rendering call. It only changes
string formatting; it never changes which fields are emitted.
"""

from __future__ import annotations

import re
from enum import Enum

from xcmodel_core.schemas import Entity, Version

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def snake_case(name: str) -> str:
    """Convert camelCase to snake_case.

    Example:
        >>> snake_case("releaseDateURL")
        'release_date_url'
    """
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class NamingMode(str, Enum):
    """Convention for generated names.

    LEGACY keeps camelCase names and suffixes (``__typeUID``).
    CURRENT uses snake_case (``__type_uid``).
    """

    LEGACY = "legacy"
    CURRENT = "current"

    def field_name(self, name: str) -> str:
        if self is NamingMode.LEGACY:
            return name
        return snake_case(name)

    def _pick(self, legacy: str, current: str) -> str:
        return legacy if self is NamingMode.LEGACY else current

    @property
    def type_uid_field(self) -> str:
        return self._pick("__typeUID", "__type_uid")

    @property
    def remote_state_field(self) -> str:
        return self._pick("_remoteSynchronizationState", "_remote_synchronization_state")

    @property
    def last_remote_read_field(self) -> str:
        return self._pick("__lastRemoteRead", "__last_remote_read")

    @property
    def type_uid_suffix(self) -> str:
        return self._pick("TypeUID", "_type_uid")

    @property
    def extra_flag_suffix(self) -> str:
        return self._pick("ExtraFlag", "_extra_flag")


def entity_element_name(entity: Entity, version: Version) -> str:
    return f"{entity.name}_{version.underscored}"


def entity_class_name(entity: Entity, version: Version) -> str:
    return f"Managed{entity.name}_{version.underscored}"
