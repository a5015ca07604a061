"""Custom exception hierarchy for xcmodel-core.

This module defines the exception classes used throughout xcmodel:
- XcModelError: Base exception for all xcmodel errors
- CatalogIntegrityError: Description catalog is incomplete (unrecoverable)
- DescriptionLookupError: A reference cannot be resolved within a snapshot
- TypeMappingError: A property or identifier cannot be represented in storage
- CompilationError: Compilation of an entity block failed (with location)
- ConfigurationError: Project or catalog files cannot be loaded

User-facing messages carry enough context (entity, version, property) to
locate the offending declaration. Technical details are logged via structlog.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class XcModelError(Exception):
    """Base exception for xcmodel.

    Args:
        user_message: Message to display to the user.
        internal_details: Optional technical details, logged but not displayed.

    Example:
        >>> raise XcModelError(
        ...     "Compilation failed",
        ...     internal_details="Entity 'Movie' has no snapshot for 1.2.0",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize XcModelError with user message and optional internal details.

        Args:
            user_message: Message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "xcmodel_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class CatalogIntegrityError(XcModelError):
    """Raised when the description catalog is missing data it names.

    Use this exception when:
    - A version referenced by the compiler has no Descriptions snapshot
    - A persisted entity has no added_at_version

    These are configuration defects; the whole run is aborted.

    Attributes:
        version: Dotted version string involved (if known).
        entity_name: Entity involved (if known).
    """

    def __init__(
        self,
        user_message: str,
        *,
        version: str | None = None,
        entity_name: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message, internal_details=internal_details)
        self.version = version
        self.entity_name = entity_name


class DescriptionLookupError(XcModelError):
    """Base class for references that cannot be resolved within a snapshot.

    Attributes:
        name: The name that was looked up.
        version: Dotted version of the snapshot searched (if known).
    """

    kind = "Description"

    def __init__(
        self,
        name: str,
        *,
        version: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        message = f"{self.kind} '{name}' not found"
        if version:
            message = f"{message} in descriptions for version {version}"
        super().__init__(message, internal_details=internal_details)
        self.name = name
        self.version = version


class UnknownEntityError(DescriptionLookupError):
    """Raised when an entity name cannot be found in a snapshot."""

    kind = "Entity"


class UnknownSubtypeError(DescriptionLookupError):
    """Raised when a subtype name cannot be found in a snapshot."""

    kind = "Subtype"


class UnknownPropertyError(DescriptionLookupError):
    """Raised when an entity does not declare the requested property.

    Attributes:
        entity_name: Entity that was searched.
    """

    kind = "Property"

    def __init__(
        self,
        name: str,
        *,
        entity_name: str,
        version: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(f"{entity_name}.{name}", version=version, internal_details=internal_details)
        self.name = name
        self.entity_name = entity_name


class TypeMappingError(XcModelError):
    """Raised when a type cannot be translated into a storage type."""


class CannotPersistIdentifierError(TypeMappingError):
    """Raised when an entity's identifier cannot be stored as a scalar.

    Identifiers must be scalar values (or to-one relationships that
    eventually resolve to a scalar identifier).

    Attributes:
        entity_name: Entity whose identifier cannot be stored.
    """

    def __init__(self, entity_name: str, *, internal_details: str | None = None) -> None:
        super().__init__(
            f"Cannot persist identifier of entity '{entity_name}': "
            "identifiers must be scalars or to-one relationships",
            internal_details=internal_details,
        )
        self.entity_name = entity_name


class IdentifierCycleError(TypeMappingError):
    """Raised when identifier relationships form a cycle.

    Attributes:
        chain: Entity names visited, ending with the repeated entity.
    """

    def __init__(self, chain: tuple[str, ...], *, internal_details: str | None = None) -> None:
        super().__init__(
            f"Identifier relationship cycle detected: {' -> '.join(chain)}",
            internal_details=internal_details,
        )
        self.chain = chain


class CompilationError(XcModelError):
    """Raised when an entity block cannot be compiled.

    Wraps a lookup or type mapping error with the location of the offending
    declaration. The original error is available as ``__cause__``.

    Attributes:
        entity_name: Entity being compiled.
        version: Dotted version label of the block being compiled.
        property_name: Property being compiled (None for entity-level fields).
    """

    def __init__(
        self,
        user_message: str,
        *,
        entity_name: str | None = None,
        version: str | None = None,
        property_name: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        context_parts: list[str] = []
        if entity_name:
            context_parts.append(f"entity '{entity_name}'")
        if version:
            context_parts.append(f"version {version}")
        if property_name:
            context_parts.append(f"property '{property_name}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.entity_name = entity_name
        self.version = version
        self.property_name = property_name


class ConfigurationError(XcModelError):
    """Raised when project or description files cannot be loaded.

    Attributes:
        file_path: Path to the offending file (if known).
        field_path: Dot-separated path to the invalid field (if known).
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path
