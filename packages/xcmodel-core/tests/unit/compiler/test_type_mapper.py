"""Unit tests for type mapping.

Tests cover:
- Total scalar mapping
- Subtype, array and relationship storage types
- Identifier resolution through to-one relationship chains
- Cycle detection and unpersistable identifiers
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, get_args

import pytest

from xcmodel_core.compiler import (
    SCALAR_STORAGE_TYPES,
    StorageType,
    identifier_storage_type,
    scalar_storage_type,
    storage_type_for,
)
from xcmodel_core.errors import (
    CannotPersistIdentifierError,
    IdentifierCycleError,
    TypeMappingError,
    UnknownEntityError,
    UnknownPropertyError,
    UnknownSubtypeError,
)
from xcmodel_core.schemas import (
    Descriptions,
    Entity,
    Identifier,
    PropertyType,
    PropertyTypeAdapter,
    ScalarType,
    SubtypeItems,
)


def _union_kinds(annotated: Any) -> set[str]:
    union = get_args(annotated)[0]
    return {member.model_fields["kind"].default for member in get_args(union)}


def _property_type(data: dict[str, Any]) -> PropertyType:
    return PropertyTypeAdapter.validate_python(data)


@pytest.fixture
def subtypes() -> list[dict[str, Any]]:
    return [
        {"name": "Gender", "items": {"kind": "cases", "cases": ["male", "female"]}},
        {"name": "Permissions", "items": {"kind": "options", "options": ["read", "write"]}},
        {
            "name": "Location",
            "items": {
                "kind": "properties",
                "properties": [
                    {"name": "lat", "property_type": {"kind": "scalar", "scalar": "double"}},
                    {"name": "lon", "property_type": {"kind": "scalar", "scalar": "double"}},
                ],
            },
        },
    ]


class TestVariantCoverage:
    """Guard against union variants added without a mapping."""

    def test_property_type_variants(self) -> None:
        assert _union_kinds(PropertyType) == {"scalar", "array", "subtype", "relationship"}

    def test_identifier_variants(self) -> None:
        assert _union_kinds(Identifier) == {"property", "relationships", "scalar_type", "void"}

    def test_subtype_item_variants(self) -> None:
        assert _union_kinds(SubtypeItems) == {"cases", "options", "properties"}

    def test_scalar_mapping_is_total(self) -> None:
        assert set(SCALAR_STORAGE_TYPES) == set(ScalarType)


class TestScalarStorageType:
    """Tests for the fixed scalar table."""

    @pytest.mark.parametrize(
        ("scalar", "expected"),
        [
            (ScalarType.STRING, StorageType.STRING),
            (ScalarType.URL, StorageType.STRING),
            (ScalarType.COLOR, StorageType.STRING),
            (ScalarType.INT, StorageType.INTEGER_64),
            (ScalarType.BOOL, StorageType.INTEGER_64),
            (ScalarType.DOUBLE, StorageType.DOUBLE),
            (ScalarType.SECONDS, StorageType.DOUBLE),
            (ScalarType.MILLISECONDS, StorageType.DOUBLE),
            (ScalarType.FLOAT, StorageType.FLOAT),
            (ScalarType.DATE, StorageType.DATE),
        ],
    )
    def test_scalar(self, scalar: ScalarType, expected: StorageType) -> None:
        assert scalar_storage_type(scalar) is expected

    def test_storage_type_labels(self) -> None:
        assert StorageType.INTEGER_64.value == "Integer 64"
        assert StorageType.BINARY.value == "Binary"


class TestStorageTypeFor:
    """Tests for property type mapping against a snapshot."""

    @pytest.mark.parametrize(
        ("subtype_name", "expected"),
        [
            ("Gender", StorageType.STRING),
            ("Permissions", StorageType.INTEGER_64),
            ("Location", StorageType.BINARY),
        ],
    )
    def test_subtypes(
        self,
        make_descriptions: Callable[..., Descriptions],
        subtypes: list[dict[str, Any]],
        subtype_name: str,
        expected: StorageType,
    ) -> None:
        descriptions = make_descriptions("1.0.0", subtypes=subtypes)
        property_type = _property_type({"kind": "subtype", "name": subtype_name})
        assert storage_type_for(property_type, descriptions) is expected

    @pytest.mark.parametrize(
        "element",
        [
            {"kind": "scalar", "scalar": "int"},
            {"kind": "subtype", "name": "Gender"},
            {"kind": "relationship", "relationship": {"entity_name": "Movie"}},
            {"kind": "array", "element": {"kind": "scalar", "scalar": "string"}},
        ],
    )
    def test_arrays_are_binary(
        self,
        make_descriptions: Callable[..., Descriptions],
        element: dict[str, Any],
    ) -> None:
        property_type = _property_type({"kind": "array", "element": element})
        assert storage_type_for(property_type, make_descriptions("1.0.0")) is StorageType.BINARY

    def test_to_many_is_binary(self, make_descriptions: Callable[..., Descriptions]) -> None:
        property_type = _property_type(
            {"kind": "relationship", "relationship": {"entity_name": "Actor", "association": "to_many"}}
        )
        assert storage_type_for(property_type, make_descriptions("1.0.0")) is StorageType.BINARY

    def test_to_one_uses_target_identifier(
        self,
        make_entity: Callable[..., Entity],
        make_descriptions: Callable[..., Descriptions],
        scalar: Callable[[str], dict[str, str]],
        to_one: Callable[[str], dict[str, Any]],
    ) -> None:
        movie = make_entity(
            "Movie",
            [("slug", scalar("string"))],
            identifier={"kind": "property", "property_name": "slug"},
        )
        descriptions = make_descriptions("1.0.0", [movie])
        assert storage_type_for(_property_type(to_one("Movie")), descriptions) is StorageType.STRING

    def test_to_one_void_target_is_integer(
        self,
        make_entity: Callable[..., Entity],
        make_descriptions: Callable[..., Descriptions],
        to_one: Callable[[str], dict[str, Any]],
    ) -> None:
        descriptions = make_descriptions("1.0.0", [make_entity("Movie")])
        assert storage_type_for(_property_type(to_one("Movie")), descriptions) is StorageType.INTEGER_64

    def test_unknown_subtype(self, make_descriptions: Callable[..., Descriptions]) -> None:
        property_type = _property_type({"kind": "subtype", "name": "Missing"})
        with pytest.raises(UnknownSubtypeError):
            storage_type_for(property_type, make_descriptions("1.0.0"))

    def test_unknown_relationship_target(
        self,
        make_descriptions: Callable[..., Descriptions],
        to_one: Callable[[str], dict[str, Any]],
    ) -> None:
        with pytest.raises(UnknownEntityError) as exc_info:
            storage_type_for(_property_type(to_one("Studio")), make_descriptions("1.0.0"))
        assert exc_info.value.name == "Studio"


class TestIdentifierStorageType:
    """Tests for identifier resolution."""

    def test_void(
        self,
        make_entity: Callable[..., Entity],
        make_descriptions: Callable[..., Descriptions],
    ) -> None:
        movie = make_entity("Movie")
        assert identifier_storage_type(movie, make_descriptions("1.0.0", [movie])) is StorageType.INTEGER_64

    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            ({"kind": "scalar_type", "scalar_type": "string"}, StorageType.STRING),
            ({"kind": "scalar_type", "scalar_type": "int"}, StorageType.INTEGER_64),
            (
                {"kind": "relationships", "scalar_type": "double", "relationships": ["Movie"]},
                StorageType.DOUBLE,
            ),
        ],
    )
    def test_synthetic_identifiers(
        self,
        make_entity: Callable[..., Entity],
        make_descriptions: Callable[..., Descriptions],
        identifier: dict[str, Any],
        expected: StorageType,
    ) -> None:
        entity = make_entity("Review", identifier=identifier)
        assert identifier_storage_type(entity, make_descriptions("1.0.0", [entity])) is expected

    def test_scalar_property(
        self,
        make_entity: Callable[..., Entity],
        make_descriptions: Callable[..., Descriptions],
        scalar: Callable[[str], dict[str, str]],
    ) -> None:
        movie = make_entity(
            "Movie",
            [("releaseDate", scalar("date"))],
            identifier={"kind": "property", "property_name": "releaseDate"},
        )
        assert identifier_storage_type(movie, make_descriptions("1.0.0", [movie])) is StorageType.DATE

    def test_to_one_chain(
        self,
        make_entity: Callable[..., Entity],
        make_descriptions: Callable[..., Descriptions],
        scalar: Callable[[str], dict[str, str]],
        to_one: Callable[[str], dict[str, Any]],
    ) -> None:
        studio = make_entity(
            "Studio",
            [("code", scalar("int"))],
            identifier={"kind": "property", "property_name": "code"},
        )
        movie = make_entity(
            "Movie",
            [("studio", to_one("Studio"))],
            identifier={"kind": "property", "property_name": "studio"},
        )
        poster = make_entity(
            "Poster",
            [("movie", to_one("Movie"))],
            identifier={"kind": "property", "property_name": "movie"},
        )
        descriptions = make_descriptions("1.0.0", [studio, movie, poster])
        assert identifier_storage_type(poster, descriptions) is StorageType.INTEGER_64

    def test_cycle_is_detected(
        self,
        make_entity: Callable[..., Entity],
        make_descriptions: Callable[..., Descriptions],
        to_one: Callable[[str], dict[str, Any]],
    ) -> None:
        a = make_entity("A", [("b", to_one("B"))], identifier={"kind": "property", "property_name": "b"})
        b = make_entity("B", [("a", to_one("A"))], identifier={"kind": "property", "property_name": "a"})
        descriptions = make_descriptions("1.0.0", [a, b])

        with pytest.raises(IdentifierCycleError) as exc_info:
            identifier_storage_type(a, descriptions)

        assert exc_info.value.chain == ("A", "B", "A")
        assert "A -> B -> A" in str(exc_info.value)
        assert isinstance(exc_info.value, TypeMappingError)

    def test_self_reference_is_a_cycle(
        self,
        make_entity: Callable[..., Entity],
        make_descriptions: Callable[..., Descriptions],
        to_one: Callable[[str], dict[str, Any]],
    ) -> None:
        node = make_entity(
            "Node",
            [("parent", to_one("Node"))],
            identifier={"kind": "property", "property_name": "parent"},
        )
        with pytest.raises(IdentifierCycleError):
            identifier_storage_type(node, make_descriptions("1.0.0", [node]))

    @pytest.mark.parametrize(
        "property_type",
        [
            {"kind": "array", "element": {"kind": "scalar", "scalar": "int"}},
            {"kind": "subtype", "name": "Gender"},
            {"kind": "relationship", "relationship": {"entity_name": "Tag", "association": "to_many"}},
        ],
    )
    def test_unpersistable_identifiers(
        self,
        make_entity: Callable[..., Entity],
        make_descriptions: Callable[..., Descriptions],
        subtypes: list[dict[str, Any]],
        property_type: dict[str, Any],
    ) -> None:
        entity = make_entity(
            "Tagged",
            [("key", property_type)],
            identifier={"kind": "property", "property_name": "key"},
        )
        descriptions = make_descriptions("1.0.0", [entity, make_entity("Tag")], subtypes)

        with pytest.raises(CannotPersistIdentifierError) as exc_info:
            identifier_storage_type(entity, descriptions)

        assert exc_info.value.entity_name == "Tagged"
        assert "Tagged" in str(exc_info.value)

    def test_missing_identifier_property(
        self,
        make_entity: Callable[..., Entity],
        make_descriptions: Callable[..., Descriptions],
    ) -> None:
        entity = make_entity("Movie", identifier={"kind": "property", "property_name": "slug"})
        with pytest.raises(UnknownPropertyError) as exc_info:
            identifier_storage_type(entity, make_descriptions("2.1.0", [entity]))
        assert exc_info.value.version == "2.1.0"
