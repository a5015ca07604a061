"""Resolve the version lineage of a persisted entity.

For each version at which an entity's stored shape must be emitted, the
VersionResolver decides which Descriptions snapshot describes that shape.

Algorithm:
    1. No model_mapping_history: a single step, current snapshot, labelled
       with added_at_version and carrying the entity's previous_name.
    2. Otherwise the boundaries are [added_at_version] + [m.to for m in history],
       in authored order (never re-sorted).
    3. A boundary equal to the current version uses the current snapshot.
       Any other boundary uses the latest history version strictly earlier
       than the next boundary (or the current version, for the last one)
       that is not release-equivalent to the boundary itself, falling back
       to added_at_version when none qualifies.
    4. A missing added_at_version or snapshot is a CatalogIntegrityError.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog
from pydantic import BaseModel, ConfigDict

from xcmodel_core.errors import CatalogIntegrityError
from xcmodel_core.schemas import DescriptionCatalog, Descriptions, Entity, Version

logger = structlog.get_logger(__name__)


class ResolutionStep(BaseModel):
    """One version at which an entity's shape is independently emitted.

    Attributes:
        entity_name: Current name of the entity.
        descriptions: Snapshot describing the entity's shape at this step.
        version: Version label of the emitted block.
        previous_name: Name to record as the block's renaming identifier.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    entity_name: str
    descriptions: Descriptions
    version: Version
    previous_name: str | None = None

    @property
    def snapshot_version(self) -> Version:
        return self.descriptions.version


class VersionResolver:
    """Resolve ResolutionSteps for entities against a read-only catalog.

    Example:
        >>> resolver = VersionResolver(catalog, Version.parse("2.0.0"), history_versions)
        >>> [step.version.dot_description for step in resolver.resolve(genre)]
        ['1.0.0', '2.0.0']
    """

    def __init__(
        self,
        catalog: DescriptionCatalog,
        current_version: Version,
        history_versions: Sequence[Version] = (),
    ) -> None:
        self.catalog = catalog
        self.current_version = current_version
        # Latest first, so the first qualifying entry is the latest one.
        self.history_versions: tuple[Version, ...] = tuple(sorted(history_versions, reverse=True))
        self._log = logger.bind(component="version_resolver", current_version=str(current_version))

    def resolve(self, entity: Entity) -> list[ResolutionStep]:
        """Return the resolution steps for an entity, oldest first.

        Raises:
            CatalogIntegrityError: If added_at_version is missing or a
                needed snapshot is absent from the catalog.
        """
        current_descriptions = self.catalog.descriptions_for(
            self.current_version, entity_name=entity.name
        )

        added_at_version = entity.added_at_version
        if added_at_version is None:
            raise CatalogIntegrityError(
                f"Could not find added_at_version for entity '{entity.name}'",
                entity_name=entity.name,
            )

        if entity.model_mapping_history is None:
            return [
                ResolutionStep(
                    entity_name=entity.name,
                    descriptions=current_descriptions,
                    version=added_at_version,
                    previous_name=entity.previous_name,
                )
            ]

        versions = [added_at_version] + [mapping.to for mapping in entity.model_mapping_history]

        steps: list[ResolutionStep] = []
        for index, version in enumerate(versions):
            if version == self.current_version:
                descriptions_version = version
            else:
                is_last = index == len(versions) - 1
                next_version = self.current_version if is_last else versions[index + 1]
                descriptions_version = self._snapshot_version(version, next_version, added_at_version)

            steps.append(
                ResolutionStep(
                    entity_name=entity.name,
                    descriptions=self.catalog.descriptions_for(
                        descriptions_version, entity_name=entity.name
                    ),
                    version=version,
                    previous_name=None,
                )
            )

        self._log.debug(
            "entity_lineage_resolved",
            entity=entity.name,
            steps=[(str(s.version), str(s.snapshot_version)) for s in steps],
        )
        return steps

    def _snapshot_version(
        self,
        version: Version,
        next_version: Version,
        added_at_version: Version,
    ) -> Version:
        for candidate in self.history_versions:
            if candidate < next_version and not Version.is_matching_release(candidate, version):
                return candidate
        return added_at_version
