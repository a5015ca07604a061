"""ModelCompiler: Transform a description catalog into a persisted model.

This module implements the ModelCompiler class that walks every persisted
entity of the current snapshot, resolves its version lineage and renders
one entity block per resolution step.

Compilation:
- Select persisted entities of the current snapshot, in catalog order
- Resolve each entity's lineage (VersionResolver)
- Render each step from that step's own snapshot (TypeMapper)
- Render all blocks into one deterministic text artifact
- Hand the artifact to a sink, once, only after everything succeeded
"""

from __future__ import annotations

from pathlib import Path

import structlog
from jinja2.sandbox import SandboxedEnvironment

from xcmodel_core.compiler.models import (
    MODEL_FILENAME,
    AttributeSpec,
    CompilerConfig,
    EntityBlock,
    GeneratedArtifact,
)
from xcmodel_core.compiler.naming import NamingMode, entity_class_name, entity_element_name
from xcmodel_core.compiler.sinks import ArtifactSink, FileSystemSink
from xcmodel_core.compiler.type_mapper import (
    StorageType,
    identifier_storage_type,
    scalar_storage_type,
    storage_type_for,
)
from xcmodel_core.compiler.version_resolver import ResolutionStep, VersionResolver
from xcmodel_core.errors import (
    CompilationError,
    DescriptionLookupError,
    TypeMappingError,
    UnknownEntityError,
)
from xcmodel_core.schemas import (
    DescriptionCatalog,
    Descriptions,
    Entity,
    EntityProperty,
    RelationshipPropertyType,
    ScalarPropertyType,
    ScalarType,
)
from xcmodel_core.schemas.default_value import DEFAULT_VALUE_ATTRIBUTE
from xcmodel_core.schemas.property_type import NUMERIC_SCALAR_TYPES

logger = structlog.get_logger(__name__)

MODEL_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<model type="com.apple.IDECoreDataModeler.DataModel" documentVersion="1.0" \
lastSavedToolsVersion="14460.32" systemVersion="18A391" minimumToolsVersion="Automatic" \
sourceLanguage="Swift" userDefinedModelVersionIdentifier="{{ version }}">
{% for block in blocks %}
    <entity name="{{ block.name }}" representedClassName="{{ block.class_name }}" \
syncable="YES" codeGenerationType="class"\
{% if block.element_id %} elementID="{{ block.element_id }}"{% endif %}>
{% for attribute in block.attributes %}
        <attribute name="{{ attribute.name }}" \
optional="{{ 'YES' if attribute.optional else 'NO' }}" \
attributeType="{{ attribute.storage_type.value }}"\
{% if attribute.uses_scalar_value_type %} usesScalarValueType="YES"{% endif %} syncable="YES"\
{% if attribute.element_id %} elementID="{{ attribute.element_id }}"{% endif %}\
{% if attribute.default_attribute %} {{ attribute.default_attribute }}="{{ attribute.default_literal }}"{% endif %}/>
{% endfor %}
    </entity>
{% endfor %}
</model>
"""

_environment = SandboxedEnvironment(
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)
_template = _environment.from_string(MODEL_TEMPLATE)


class ModelCompiler:
    """Compile a description catalog into a versioned persisted model.

    The catalog is never mutated; every call recomputes resolution steps
    and blocks from scratch.

    Example:
        >>> compiler = ModelCompiler(catalog, CompilerConfig(current_version="2.0.0"))
        >>> artifact = compiler.compile()
        >>> compiler.generate(Path("Model.xcdatamodel"))
    """

    def __init__(self, catalog: DescriptionCatalog, config: CompilerConfig) -> None:
        """Initialize the ModelCompiler.

        Args:
            catalog: Read-only Version -> Descriptions mapping.
            config: Target version, history versions and naming mode.
        """
        self.catalog = catalog
        self.config = config
        self.resolver = VersionResolver(
            catalog,
            config.current_version,
            config.history_versions,
        )
        self._log = logger.bind(
            component="model_compiler",
            current_version=str(config.current_version),
        )

    @property
    def naming(self) -> NamingMode:
        return self.config.naming

    def compile(self) -> GeneratedArtifact:
        """Compile the catalog into the model artifact.

        Returns:
            GeneratedArtifact with the rendered content and its blocks.

        Raises:
            CatalogIntegrityError: If the catalog is missing a snapshot or an
                entity has no added_at_version.
            CompilationError: If an entity block cannot be rendered.
        """
        self._log.info("compile_started")
        blocks = self.resolve_blocks()
        content = _template.render(
            version=self.config.current_version.dot_description,
            blocks=blocks,
        )
        self._log.info("compile_completed", blocks=len(blocks))
        return GeneratedArtifact(name=MODEL_FILENAME, content=content, blocks=tuple(blocks))

    def generate(self, directory: Path, sink: ArtifactSink | None = None) -> Path:
        """Compile and write the artifact through a sink.

        Nothing is written if compilation fails.

        Args:
            directory: Target directory.
            sink: Destination, defaults to FileSystemSink.

        Returns:
            Path reported by the sink.
        """
        artifact = self.compile()
        sink = sink or FileSystemSink()
        return sink.write(artifact.name, artifact.content, directory)

    def resolve_blocks(self) -> list[EntityBlock]:
        """Resolve and render every block, entities in catalog order."""
        current = self.catalog.descriptions_for(self.config.current_version)

        blocks: list[EntityBlock] = []
        for entity in current.persisted_entities():
            steps = self.resolver.resolve(entity)
            self._log.debug("entity_resolved", entity=entity.name, steps=len(steps))
            blocks.extend(self.render_step(step, entity) for step in steps)
        return blocks

    def render_step(self, step: ResolutionStep, entity: Entity) -> EntityBlock:
        """Render one entity block from the step's own snapshot.

        Args:
            step: Resolution step to render.
            entity: The entity as declared in the current snapshot.

        Raises:
            CompilationError: If a reference or type cannot be resolved.
        """
        version = step.version.dot_description
        try:
            snapshot_entity = self._entity_in_snapshot(step, entity)
        except UnknownEntityError as e:
            raise CompilationError(
                f"Failed to compile entity block: {e.user_message}",
                entity_name=entity.name,
                version=version,
            ) from e

        try:
            attributes = self._bookkeeping_attributes(snapshot_entity, step.descriptions)
        except (DescriptionLookupError, TypeMappingError) as e:
            raise CompilationError(
                f"Failed to compile identifier: {e.user_message}",
                entity_name=snapshot_entity.name,
                version=version,
            ) from e

        for prop in snapshot_entity.used_properties:
            try:
                attributes.extend(self._property_attributes(prop, step.descriptions))
            except (DescriptionLookupError, TypeMappingError) as e:
                raise CompilationError(
                    f"Failed to compile property: {e.user_message}",
                    entity_name=snapshot_entity.name,
                    version=version,
                    property_name=prop.name,
                ) from e

        return EntityBlock(
            name=entity_element_name(snapshot_entity, step.version),
            class_name=entity_class_name(snapshot_entity, step.version),
            version=step.version,
            snapshot_version=step.snapshot_version,
            element_id=step.previous_name,
            attributes=tuple(attributes),
        )

    def _entity_in_snapshot(self, step: ResolutionStep, entity: Entity) -> Entity:
        # Snapshots that predate a rename only know the previous name.
        found = step.descriptions.find_entity(step.entity_name)
        if found is None and entity.previous_name:
            found = step.descriptions.find_entity(entity.previous_name)
        if found is None:
            raise UnknownEntityError(
                step.entity_name,
                version=step.snapshot_version.dot_description,
            )
        return found

    def _bookkeeping_attributes(self, entity: Entity, descriptions: Descriptions) -> list[AttributeSpec]:
        naming = self.naming
        attributes = [
            AttributeSpec(
                name="_identifier",
                storage_type=identifier_storage_type(entity, descriptions),
                uses_scalar_value_type=True,
            ),
            AttributeSpec(
                name="__identifier",
                storage_type=StorageType.INTEGER_64 if entity.has_void_identifier else StorageType.STRING,
                uses_scalar_value_type=True,
            ),
            AttributeSpec(
                name=naming.type_uid_field,
                storage_type=StorageType.STRING,
                uses_scalar_value_type=True,
            ),
        ]
        if entity.remote:
            attributes.append(
                AttributeSpec(name=naming.remote_state_field, storage_type=StorageType.STRING)
            )
        if entity.last_remote_read:
            attributes.append(
                AttributeSpec(
                    name=naming.last_remote_read_field,
                    storage_type=StorageType.DATE,
                    optional=False,
                )
            )
        return attributes

    def _property_attributes(self, prop: EntityProperty, descriptions: Descriptions) -> list[AttributeSpec]:
        naming = self.naming
        name = naming.field_name(prop.name)
        previous = naming.field_name(prop.previous_name) if prop.previous_name else None
        storage_type = storage_type_for(prop.property_type, descriptions)

        attributes: list[AttributeSpec] = []
        property_type = prop.property_type
        if isinstance(property_type, RelationshipPropertyType) and property_type.is_to_one:
            # Polymorphic targets: record the concrete type next to the value.
            attributes.extend(
                [
                    AttributeSpec(
                        name=f"_{name}",
                        storage_type=storage_type,
                        element_id=f"_{previous}" if previous else None,
                    ),
                    AttributeSpec(
                        name=f"__{name}",
                        storage_type=StorageType.STRING,
                        element_id=f"__{previous}" if previous else None,
                    ),
                    AttributeSpec(
                        name=f"__{name}{naming.type_uid_suffix}",
                        storage_type=StorageType.STRING,
                        element_id=f"__{previous}{naming.type_uid_suffix}" if previous else None,
                    ),
                ]
            )
        else:
            default = prop.default_value
            attributes.append(
                AttributeSpec(
                    name=f"_{name}",
                    storage_type=storage_type,
                    optional=prop.optional or prop.extra,
                    uses_scalar_value_type=(
                        isinstance(property_type, ScalarPropertyType)
                        and property_type.scalar in NUMERIC_SCALAR_TYPES
                    ),
                    element_id=f"_{previous}" if previous else None,
                    default_attribute=default.storage_attribute_name if default else None,
                    default_literal=default.storage_literal if default else None,
                )
            )

        if prop.extra:
            attributes.append(
                AttributeSpec(
                    name=f"__{name}{naming.extra_flag_suffix}",
                    storage_type=scalar_storage_type(ScalarType.BOOL),
                    optional=False,
                    uses_scalar_value_type=True,
                    default_attribute=DEFAULT_VALUE_ATTRIBUTE,
                    default_literal="0",
                )
            )
        return attributes
