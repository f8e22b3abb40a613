"""
Тесты встроенного компилятора JSON Schema -> TypeScript
"""

import pytest

from openapi_ts.internal.generator.json_schema_ts import (
    JsonSchemaToTsCompiler,
    compile_schema,
)

NO_INDEX = {"additionalProperties": False}


def root(properties, **extra):
    return {
        "title": "Root",
        "type": "object",
        "properties": properties,
        "additionalProperties": False,
        **extra,
    }


class TestInterfaces:
    """Тесты генерации интерфейсов"""

    def test_required_and_optional(self):
        schema = root(
            {"a": {"type": "string"}, "b": {"type": "integer"}},
            required=["a"],
        )
        assert compile_schema(schema) == (
            "export interface Root {\n  a: string;\n  b?: number;\n}\n"
        )

    def test_index_signature_by_default(self):
        schema = {"title": "Bag", "type": "object"}
        assert compile_schema(schema) == "export interface Bag {\n  [k: string]: unknown;\n}\n"

    def test_typed_additional_properties(self):
        schema = {"title": "Counts", "type": "object", "additionalProperties": {"type": "number"}}
        assert "[k: string]: number;" in compile_schema(schema)

    def test_strict_index_signatures(self):
        schema = {"title": "Counts", "type": "object", "additionalProperties": {"type": "number"}}
        result = compile_schema(schema, {"strictIndexSignatures": True})
        assert "[k: string]: number | undefined;" in result

    def test_quoted_property_names(self):
        schema = root({"content-type": {"type": "string"}})
        assert '  "content-type"?: string;' in compile_schema(schema)

    def test_descriptions_become_jsdoc(self):
        schema = root(
            {"a": {"type": "string", "description": "The a", "deprecated": True}},
            description="Root doc",
        )
        assert compile_schema(schema) == (
            "/**\n"
            " * Root doc\n"
            " */\n"
            "export interface Root {\n"
            "  /**\n"
            "   * The a\n"
            "   * @deprecated\n"
            "   */\n"
            "  a?: string;\n"
            "}\n"
        )

    def test_inline_object_is_indented(self):
        schema = root({"inner": {"type": "object", "properties": {"x": {"type": "boolean"}}, **NO_INDEX}})
        assert compile_schema(schema) == (
            "export interface Root {\n"
            "  inner?: {\n"
            "    x?: boolean;\n"
            "  };\n"
            "}\n"
        )

    def test_empty_closed_object(self):
        schema = root({"nothing": {"type": "object", **NO_INDEX}})
        assert "  nothing?: {};" in compile_schema(schema)


class TestTypes:
    """Тесты выражений типов"""

    @pytest.mark.parametrize(
        "property_schema, expected",
        [
            ({"type": "string", "enum": ["a", "b"]}, '"a" | "b"'),
            ({"enum": [1, None, True]}, "1 | null | true"),
            ({"const": "fixed"}, '"fixed"'),
            ({"type": ["string", "null"]}, "string | null"),
            ({"anyOf": [{"type": "string"}, {"type": "number"}]}, "string | number"),
            ({"oneOf": [{"type": "string"}, {"type": "string"}]}, "string"),
            ({"type": "array", "items": {"type": "string"}}, "string[]"),
            ({"type": "array", "items": {"type": ["string", "number"]}}, "(string | number)[]"),
            ({"type": "array"}, "unknown[]"),
            ({"type": "array", "items": [{"type": "string"}, {"type": "number"}], "additionalItems": False}, "[string, number]"),
            ({}, "unknown"),
            ({"type": "null"}, "null"),
            ({"tsType": "Date"}, "Date"),
        ],
    )
    def test_property_types(self, property_schema, expected):
        result = compile_schema(root({"p": property_schema}, required=["p"]))
        assert f"  p: {expected};\n" in result

    def test_all_of_intersection(self):
        schema = {
            "title": "Mixed",
            "allOf": [
                {"type": "object", "properties": {"a": {"type": "string"}}, **NO_INDEX},
                {"anyOf": [{"type": "string"}, {"type": "number"}]},
            ],
        }
        assert compile_schema(schema) == (
            "export type Mixed = {\n  a?: string;\n} & (string | number);\n"
        )

    def test_bounded_arrays(self):
        schema = root({"p": {"type": "array", "items": {"type": "string"}, "minItems": 1, "maxItems": 2}}, required=["p"])
        assert "  p: [string] | [string, string];" in compile_schema(schema)

    def test_min_items_only(self):
        schema = root({"p": {"type": "array", "items": {"type": "string"}, "minItems": 2}}, required=["p"])
        assert "  p: [string, string, ...string[]];" in compile_schema(schema)

    def test_ignore_min_and_max_items(self):
        schema = root({"p": {"type": "array", "items": {"type": "string"}, "minItems": 1, "maxItems": 2}}, required=["p"])
        result = compile_schema(schema, {"ignoreMinAndMaxItems": True})
        assert "  p: string[];" in result


class TestNamedDeclarations:
    """Тесты именованных объявлений и ссылок"""

    def test_titled_nested_schema_is_declared(self):
        schema = root({"pet": {"title": "Pet", "type": "object", "properties": {"name": {"type": "string"}}, **NO_INDEX}})
        assert compile_schema(schema) == (
            "export interface Root {\n"
            "  pet?: Pet;\n"
            "}\n"
            "export interface Pet {\n"
            "  name?: string;\n"
            "}\n"
        )

    def test_ref_resolves_to_declaration(self):
        pet = {"title": "Pet", "type": "string"}
        schema = root(
            {"a": {"$ref": "#/definitions/pet"}, "b": {"type": "array", "items": {"$ref": "#/definitions/pet"}}},
            definitions={"pet": pet},
        )
        assert compile_schema(schema) == (
            "export interface Root {\n"
            "  a?: Pet;\n"
            "  b?: Pet[];\n"
            "}\n"
            "export type Pet = string;\n"
        )

    def test_recursive_refs_terminate(self):
        a = {"title": "A", "type": "object", "properties": {"b": {"$ref": "#/definitions/b"}}, **NO_INDEX}
        b = {"title": "B", "type": "object", "properties": {"a": {"$ref": "#/definitions/a"}}, **NO_INDEX}
        schema = root({"a": {"$ref": "#/definitions/a"}}, definitions={"a": a, "b": b})

        result = compile_schema(schema)

        assert "export interface A {\n  b?: B;\n}" in result
        assert "export interface B {\n  a?: A;\n}" in result

    def test_unnamed_cycle_renders_unknown(self):
        node = {"type": "object", "properties": {}, **NO_INDEX}
        node["properties"]["self"] = node
        result = compile_schema(root({"n": node}))
        assert "self?: unknown;" in result

    def test_const_enum(self):
        schema = root(
            {"s": {"$ref": "#/definitions/status"}},
            definitions={"status": {"title": "Status", "enum": ["on", "off"], "tsEnumNames": ["On", "Off"]}},
        )
        assert 'export const enum Status {\n  On = "on",\n  Off = "off"\n}' in compile_schema(schema)

    def test_const_enums_disabled(self):
        schema = root(
            {"s": {"$ref": "#/definitions/status"}},
            definitions={"status": {"title": "Status", "enum": ["on", "off"], "tsEnumNames": ["On", "Off"]}},
        )
        result = compile_schema(schema, {"enableConstEnums": False})
        assert 'export type Status = "on" | "off";' in result

    def test_unreachable_definitions(self):
        schema = root({}, definitions={"lonely": {"title": "Lonely", "type": "string"}})

        assert "Lonely" not in compile_schema(schema)
        assert "export type Lonely = string;" in compile_schema(
            schema, {"unreachableDefinitions": True}
        )

    def test_external_references_not_declared(self):
        schema = root({"pet": {"title": "Pet", "type": "string"}})
        result = compile_schema(schema, {"declareExternallyReferenced": False})
        assert result == "export interface Root {\n  pet?: Pet;\n}\n"

    def test_duplicate_titles_are_suffixed(self):
        schema = root({"a": {"title": "Item", "type": "string"}, "b": {"title": "Item", "type": "number"}})
        result = compile_schema(schema)
        assert "export type Item = string;" in result
        assert "export type Item1 = number;" in result

    def test_root_requires_title(self):
        with pytest.raises(ValueError):
            compile_schema({"type": "object"})


class TestCompilerProtocol:
    @pytest.mark.asyncio
    async def test_compile_is_awaitable(self):
        result = await JsonSchemaToTsCompiler().compile({"title": "X", "type": "string"}, {})
        assert result == "export type X = string;\n"
