"""
Тесты извлечения моделей из сгенерированного TypeScript
"""

from openapi_ts.internal.generator.extractor import (
    extract_ts_models,
    mark_auto_generated,
    schema_dependencies,
)
from openapi_ts.internal.types.schema_resolver import SchemaNameResolver


def named(*schemas_with_titles, auto_generated=()):
    resolver = SchemaNameResolver(reserved=["_toplevelobject_"])
    for schema, title in schemas_with_titles:
        resolver.propose(schema, title, auto_generated=title in auto_generated)
    resolver.finalize()
    return resolver


class TestMarkAutoGenerated:
    """Тесты пометки автосгенерированных моделей"""

    def test_interface(self):
        assert mark_auto_generated("export interface Foo {\n}") == "export interface _Foo {\n}"

    def test_type_after_docstring(self):
        code = "/**\n * 200 response\n */\nexport type Foo = Bar[];"
        assert mark_auto_generated(code) == "/**\n * 200 response\n */\nexport type _Foo = Bar[];"

    def test_only_first_declaration(self):
        code = "export type A = string;\nexport type B = number;"
        assert mark_auto_generated(code) == "export type _A = string;\nexport type B = number;"


class TestSchemaDependencies:
    """Тесты вычисления зависимостей модели"""

    def test_cycle_without_self(self):
        a = {"type": "object", "properties": {}}
        b = {"type": "object", "properties": {"a": a}}
        a["properties"]["b"] = b
        resolver = named((a, "A"), (b, "B"))

        assert schema_dependencies(a, resolver, "a") == ["b"]
        assert schema_dependencies(b, resolver, "b") == ["a"]

    def test_transitive_dependencies(self):
        c = {"type": "string"}
        b = {"type": "array", "items": c}
        a = {"type": "object", "properties": {"b": b}}
        resolver = named((a, "A"), (b, "B"), (c, "C"))

        assert schema_dependencies(a, resolver, "a") == ["b", "c"]

    def test_unnamed_nested_schemas_are_not_dependencies(self):
        inner = {"title": "Inner", "type": "string"}
        a = {"type": "object", "properties": {"inner": inner}}
        resolver = named((a, "A"))

        assert schema_dependencies(a, resolver, "a") == []


class TestExtractTsModels:
    """Тесты сборки TsModel из исходника"""

    SOURCE = (
        "export interface _Toplevelobject_ {\n"
        "  a?: A;\n"
        "}\n"
        "export interface A {\n"
        "  b?: B;\n"
        "}\n"
        "/**\n"
        " * Request body\n"
        " */\n"
        "export type B = string[];\n"
    )

    def setup_schemas(self):
        b = {"type": "array", "items": {"type": "string"}}
        a = {"type": "object", "properties": {"b": b}}
        resolver = named((a, "A"), (b, "B"), auto_generated={"B"})
        return {"a": a, "b": b}, resolver

    def test_models(self):
        schemas, resolver = self.setup_schemas()

        models = extract_ts_models(
            self.SOURCE, schemas, resolver, {"b"}, excluded_ids={"_toplevelobject_"}
        )

        assert list(models) == ["a", "b"]
        assert models["a"].title == "A"
        assert models["a"].code == "export interface A {\n  b?: B;\n}\n"
        assert models["a"].dependencies == ["b"]
        assert not models["a"].auto_generated

        assert models["b"].auto_generated
        assert models["b"].title == "B"
        assert models["b"].code == "/**\n * Request body\n */\nexport type _B = string[];\n"
        assert models["b"].dependencies == []

    def test_top_level_is_excluded(self):
        schemas, resolver = self.setup_schemas()

        models = extract_ts_models(
            self.SOURCE, schemas, resolver, set(), excluded_ids={"_TopLevelObject_"}
        )

        assert "_toplevelobject_" not in models

    def test_declaration_without_schema(self, caplog):
        resolver = named()

        models = extract_ts_models("export type Extra = number;\n", {}, resolver, set())

        assert models["extra"].dependencies == []
        assert "Extra" in caplog.text
