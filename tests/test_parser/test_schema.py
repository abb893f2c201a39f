"""Tests for opscatalog.parser.schema."""

from __future__ import annotations

import pytest

from opscatalog.models import SchemaKind
from opscatalog.parser.schema import parse_schema, parse_schema_table, ref_target


class TestParseSchema:
    def test_non_dict_is_no_schema(self) -> None:
        assert parse_schema(None) is None
        assert parse_schema(["string"]) is None

    def test_ref_wins_over_other_keys(self) -> None:
        node = parse_schema({"$ref": "#/components/schemas/Pet", "type": "string"})
        assert node.kind == SchemaKind.REFERENCE
        assert node.ref_name == "Pet"

    def test_all_of_members_in_order(self) -> None:
        node = parse_schema(
            {"allOf": [{"$ref": "#/components/schemas/Base"}, {"type": "object"}]}
        )
        assert node.kind == SchemaKind.COMPOSED_AND
        assert [m.kind for m in node.members] == [SchemaKind.REFERENCE, SchemaKind.OBJECT]

    def test_empty_all_of_falls_through_to_type(self) -> None:
        node = parse_schema({"allOf": [], "type": "integer"})
        assert node.kind == SchemaKind.INTEGER

    def test_enum_wins_over_type(self) -> None:
        node = parse_schema({"type": "string", "enum": ["A", "B", "C"]})
        assert node.kind == SchemaKind.ENUMERATED
        assert node.enum_values == ["A", "B", "C"]

    def test_object_keeps_declaration_order(self) -> None:
        node = parse_schema(
            {
                "type": "object",
                "properties": {"zeta": {"type": "string"}, "alpha": {"type": "integer"}},
            }
        )
        assert list(node.properties) == ["zeta", "alpha"]
        assert node.properties["alpha"].kind == SchemaKind.INTEGER

    def test_boolean_property_schema_becomes_unknown(self) -> None:
        node = parse_schema({"type": "object", "properties": {"anything": True}})
        assert node.properties["anything"].kind == SchemaKind.UNKNOWN

    def test_array_items(self) -> None:
        node = parse_schema({"type": "array", "items": {"type": "boolean"}})
        assert node.kind == SchemaKind.ARRAY
        assert node.items.kind == SchemaKind.BOOLEAN

    def test_array_without_items(self) -> None:
        node = parse_schema({"type": "array"})
        assert node.items is None

    def test_string_format(self) -> None:
        node = parse_schema({"type": "string", "format": "date-time"})
        assert node.kind == SchemaKind.STRING
        assert node.format == "date-time"

    def test_openapi_31_type_array(self) -> None:
        assert parse_schema({"type": ["null", "number"]}).kind == SchemaKind.NUMBER
        assert parse_schema({"type": ["null"]}).kind == SchemaKind.UNKNOWN

    @pytest.mark.parametrize("raw", [{}, {"type": "file"}, {"properties": {"a": {}}}])
    def test_unrecognized_is_unknown(self, raw: dict) -> None:
        assert parse_schema(raw).kind == SchemaKind.UNKNOWN


class TestRefTarget:
    @pytest.mark.parametrize(
        "ref, expected",
        [
            ("#/components/schemas/Pet", "Pet"),
            ("#/components/schemas/Foo~1Bar", "Foo/Bar"),
            ("#/components/schemas/a~0b", "a~b"),
            ("#/components/parameters/PageSize", None),
            ("other.json#/components/schemas/Pet", None),
            ("#/components/schemas/", None),
            ("#/components/schemas/Pet/properties/name", None),
            (42, None),
        ],
    )
    def test_ref_target(self, ref: object, expected: str | None) -> None:
        assert ref_target(ref) == expected

    def test_foreign_pointer_keeps_reference_kind(self) -> None:
        node = parse_schema({"$ref": "#/definitions/Pet"})
        assert node.kind == SchemaKind.REFERENCE
        assert node.ref_name is None


class TestParseSchemaTable:
    def test_converts_every_entry(self) -> None:
        table = parse_schema_table(
            {"Pet": {"type": "object"}, "Broken": "not a schema"}
        )
        assert table["Pet"].kind == SchemaKind.OBJECT
        assert table["Broken"].kind == SchemaKind.UNKNOWN
