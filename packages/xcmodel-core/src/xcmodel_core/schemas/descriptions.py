"""Description snapshots and the version catalog.

This module defines:
- Descriptions: Immutable snapshot of the schema as authored for one version
- DescriptionCatalog: Read-only mapping from Version to Descriptions

Invariants:
    - Snapshots are keyed uniquely by version and never mutated
    - Entity and subtype names are unique within a snapshot
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, model_validator

from xcmodel_core.errors import CatalogIntegrityError, UnknownEntityError, UnknownSubtypeError
from xcmodel_core.schemas.entity import Entity
from xcmodel_core.schemas.subtype import Subtype
from xcmodel_core.schemas.version import Version


class Descriptions(BaseModel):
    """The entire schema as authored for one version.

    Attributes:
        version: Version this snapshot describes.
        entities: Entities in catalog-defined order.
        subtypes: Subtypes in catalog-defined order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: Version
    entities: list[Entity] = Field(default_factory=list)
    subtypes: list[Subtype] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_names(self) -> Descriptions:
        for label, names in (
            ("entity", [e.name for e in self.entities]),
            ("subtype", [s.name for s in self.subtypes]),
        ):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            if duplicates:
                msg = f"Duplicate {label} names in {self.version}: {', '.join(duplicates)}"
                raise ValueError(msg)
        return self

    def find_entity(self, name: str) -> Entity | None:
        return next((e for e in self.entities if e.name == name), None)

    def entity_for(self, name: str) -> Entity:
        """Look up an entity by name.

        Raises:
            UnknownEntityError: If no entity has this name.
        """
        entity = self.find_entity(name)
        if entity is None:
            raise UnknownEntityError(name, version=self.version.dot_description)
        return entity

    def subtype_for(self, name: str) -> Subtype:
        """Look up a subtype by name.

        Raises:
            UnknownSubtypeError: If no subtype has this name.
        """
        for subtype in self.subtypes:
            if subtype.name == name:
                return subtype
        raise UnknownSubtypeError(name, version=self.version.dot_description)

    def persisted_entities(self) -> list[Entity]:
        """Entities with persist=True, in catalog order."""
        return [e for e in self.entities if e.persist]


class DescriptionCatalog(Mapping[Version, Descriptions]):
    """Read-only mapping from Version to Descriptions.

    Built once from the full history and shared by every compilation.

    Example:
        >>> catalog = DescriptionCatalog([v1_descriptions, v2_descriptions])
        >>> catalog.descriptions_for(Version.parse("2.0.0"))
    """

    def __init__(self, snapshots: Iterable[Descriptions]) -> None:
        entries: dict[Version, Descriptions] = {}
        for snapshot in snapshots:
            if snapshot.version in entries:
                raise CatalogIntegrityError(
                    f"Duplicate descriptions for version {snapshot.version}",
                    version=snapshot.version.dot_description,
                )
            entries[snapshot.version] = snapshot
        self._entries = MappingProxyType(entries)

    def __getitem__(self, version: Version) -> Descriptions:
        return self._entries[version]

    def __iter__(self) -> Iterator[Version]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        versions = ", ".join(str(v) for v in sorted(self._entries))
        return f"DescriptionCatalog([{versions}])"

    def descriptions_for(self, version: Version, *, entity_name: str | None = None) -> Descriptions:
        """Return the snapshot for a version.

        Raises:
            CatalogIntegrityError: If the catalog has no snapshot for it.
        """
        try:
            return self._entries[version]
        except KeyError:
            raise CatalogIntegrityError(
                f"Could not find descriptions for version {version}",
                version=version.dot_description,
                entity_name=entity_name,
            ) from None
