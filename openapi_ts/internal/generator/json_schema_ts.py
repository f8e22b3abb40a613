"""
Компилятор JSON Schema -> TypeScript на чистом Python.

Повторяет соглашения json-schema-to-typescript: схема с title становится
отдельным объявлением, $ref выводится именем целевого типа, enum/const -
объединением литералов, allOf - пересечением, anyOf/oneOf - объединением.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from ..utils.identifiers import is_safe_identifier, to_safe_identifier

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS = {
    "declareExternallyReferenced": True,
    "enableConstEnums": True,
    "unreachableDefinitions": False,
    "strictIndexSignatures": False,
    "format": True,
    "ignoreMinAndMaxItems": False,
    "bannerComment": "",
}

PRIMITIVES = {
    "string": "string",
    "number": "number",
    "integer": "number",
    "boolean": "boolean",
    "null": "null",
}

INDENT = "  "


def _literal(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return json.dumps(value)
    return "unknown"


def _wrap(type_expression: str) -> str:
    """Скобки вокруг объединений и пересечений внутри массивов и пересечений"""
    depth = 0
    for char in type_expression:
        if char in "([{<":
            depth += 1
        elif char in ")]}>":
            depth -= 1
        elif char in "|&" and depth == 0:
            return f"({type_expression})"
    return type_expression


def _union(members: List[str]) -> str:
    unique = []
    for member in members:
        if member not in unique:
            unique.append(member)
    return " | ".join(unique) if unique else "never"


def _comment(schema: Mapping[str, Any], indent: str) -> str:
    lines = []
    description = schema.get("description")
    if isinstance(description, str) and description.strip():
        lines.extend(description.strip().replace("*/", "*\\/").splitlines())
    if schema.get("deprecated"):
        lines.append("@deprecated")
    if not lines:
        return ""
    body = "\n".join(f"{indent} * {line}".rstrip() for line in lines)
    return f"{indent}/**\n{body}\n{indent} */\n"


def _is_interface(schema: Mapping[str, Any]) -> bool:
    if any(key in schema for key in ("$ref", "enum", "const", "allOf", "anyOf", "oneOf", "tsType")):
        return False
    schema_type = schema.get("type")
    if schema_type == "object":
        return True
    return schema_type is None and (
        "properties" in schema or "additionalProperties" in schema
    )


class _Compilation:
    """Состояние одной компиляции: объявленные имена и готовый вывод"""

    def __init__(self, root: Mapping[str, Any], options: Dict[str, Any]):
        self.root = root
        self.options = options
        self.names: Dict[int, str] = {}
        self.used_names: set = set()
        self.output: List[Optional[str]] = []
        self.in_progress: set = set()

    def compile(self) -> str:
        if not isinstance(self.root.get("title"), str):
            raise ValueError("Root schema must have a title")
        self.declare(self.root)

        if self.options.get("unreachableDefinitions"):
            for definition in (self.root.get("definitions") or {}).values():
                if isinstance(definition, Mapping):
                    self.declare(definition, force_name=True)

        declarations = [code for code in self.output if code]
        banner = self.options.get("bannerComment") or ""
        return "\n".join(([banner] if banner else []) + declarations) + "\n"

    def _name_for(self, schema: Mapping[str, Any], fallback: str = "") -> str:
        base = to_safe_identifier(schema.get("title") or fallback) or "Interface"
        name = base
        counter = 0
        while name in self.used_names:
            counter += 1
            name = f"{base}{counter}"
        self.used_names.add(name)
        return name

    def declare(self, schema: Mapping[str, Any], force_name=False) -> str:
        """Имя объявления схемы, при первом обращении добавляет объявление"""
        if id(schema) in self.names:
            return self.names[id(schema)]

        name = self._name_for(schema, fallback="Definition" if force_name else "")
        self.names[id(schema)] = name
        slot = len(self.output)
        self.output.append(None)

        is_root = schema is self.root
        if is_root or self.options.get("declareExternallyReferenced", True):
            self.output[slot] = self._declaration(name, schema)
        return name

    def _declaration(self, name: str, schema: Mapping[str, Any]) -> str:
        comment = _comment(schema, "")
        if _is_interface(schema):
            body = self._object_body(schema, 1)
            return f"{comment}export interface {name} {body}"

        if (
            self.options.get("enableConstEnums")
            and "enum" in schema
            and isinstance(schema.get("tsEnumNames"), list)
        ):
            members = ",\n".join(
                f"{INDENT}{to_safe_identifier(str(member))} = {_literal(value)}"
                for member, value in zip(schema["tsEnumNames"], schema["enum"])
            )
            return f"{comment}export const enum {name} {{\n{members}\n}}"

        return f"{comment}export type {name} = {self.render(schema, 0, named=False)};"

    def resolve_ref(self, ref: str) -> Any:
        if not ref.startswith("#"):
            raise ValueError(f"Unsupported $ref: {ref}")
        node: Any = self.root
        for part in ref[1:].split("/"):
            if not part:
                continue
            part = part.replace("~1", "/").replace("~0", "~")
            if isinstance(node, list):
                node = node[int(part)]
            elif isinstance(node, Mapping) and part in node:
                node = node[part]
            else:
                raise ValueError(f"Unresolvable $ref: {ref}")
        return node

    def render(self, schema: Any, depth: int, named: bool = True) -> str:
        """TypeScript выражение типа для схемы"""
        if schema is True or schema == {}:
            return "unknown"
        if schema is False:
            return "never"
        if not isinstance(schema, Mapping):
            return "unknown"

        if "$ref" in schema:
            return self.render(self.resolve_ref(schema["$ref"]), depth)

        if named and isinstance(schema.get("title"), str):
            return self.declare(schema)

        if id(schema) in self.in_progress:
            logger.warning("Unnamed recursive schema rendered as unknown")
            return "unknown"

        self.in_progress.add(id(schema))
        try:
            return self._render_anonymous(schema, depth)
        finally:
            self.in_progress.discard(id(schema))

    def _render_anonymous(self, schema: Mapping[str, Any], depth: int) -> str:
        if "tsType" in schema:
            return str(schema["tsType"])
        if "const" in schema:
            return _literal(schema["const"])
        if isinstance(schema.get("enum"), list):
            return _union([_literal(value) for value in schema["enum"]])

        if isinstance(schema.get("allOf"), list):
            parts = [_wrap(self.render(member, depth)) for member in schema["allOf"]]
            if "properties" in schema:
                parts.append(self._object_body(schema, depth + 1))
            return " & ".join(parts) if parts else "unknown"

        for key in ("anyOf", "oneOf"):
            if isinstance(schema.get(key), list):
                return _union([self.render(member, depth) for member in schema[key]])

        schema_type = schema.get("type")
        if isinstance(schema_type, list):
            return _union(
                [self._render_typed(schema, single, depth) for single in schema_type]
            )
        return self._render_typed(schema, schema_type, depth)

    def _render_typed(self, schema: Mapping[str, Any], schema_type: Any, depth: int) -> str:
        if schema_type in PRIMITIVES:
            return PRIMITIVES[schema_type]
        if schema_type == "array":
            return self._array(schema, depth)
        if schema_type == "object" or "properties" in schema or "additionalProperties" in schema:
            return self._object_body(schema, depth + 1)
        if "items" in schema:
            return self._array(schema, depth)
        return "unknown"

    def _array(self, schema: Mapping[str, Any], depth: int) -> str:
        items = schema.get("items")
        if isinstance(items, list):
            members = [self.render(item, depth) for item in items]
            additional = schema.get("additionalItems", True)
            if additional is not False:
                members.append(f"...{_wrap(self.render(additional, depth))}[]")
            return f"[{', '.join(members)}]"

        item_type = self.render(items, depth) if items is not None else "unknown"
        if self.options.get("ignoreMinAndMaxItems"):
            return f"{_wrap(item_type)}[]"
        return self._bounded_array(item_type, schema.get("minItems"), schema.get("maxItems"))

    @staticmethod
    def _bounded_array(item_type: str, min_items: Any, max_items: Any) -> str:
        minimum = min_items if isinstance(min_items, int) else 0
        if not isinstance(max_items, int):
            if minimum <= 0:
                return f"{_wrap(item_type)}[]"
            return "[" + ", ".join([item_type] * minimum + [f"...{_wrap(item_type)}[]"]) + "]"
        return " | ".join(
            "[" + ", ".join([item_type] * size) + "]"
            for size in range(minimum, max_items + 1)
        )

    def _object_body(self, schema: Mapping[str, Any], depth: int) -> str:
        indent = INDENT * depth
        required = set(schema.get("required") or [])
        lines = []

        for name, property_schema in (schema.get("properties") or {}).items():
            key = name if is_safe_identifier(name) else json.dumps(name)
            optional = "" if name in required else "?"
            comment = (
                _comment(property_schema, indent)
                if isinstance(property_schema, Mapping) and "$ref" not in property_schema
                else ""
            )
            type_expression = self.render(property_schema, depth)
            lines.append(f"{comment}{indent}{key}{optional}: {type_expression};")

        index_types = [
            self.render(pattern_schema, depth)
            for pattern_schema in (schema.get("patternProperties") or {}).values()
        ]
        additional = schema.get("additionalProperties", True)
        if additional is True:
            index_types.append("unknown")
        elif isinstance(additional, Mapping):
            index_types.append(self.render(additional, depth))
        if index_types:
            index_type = _union(index_types)
            if self.options.get("strictIndexSignatures"):
                index_type = _union([index_type, "undefined"])
            lines.append(f"{indent}[k: string]: {index_type};")

        if not lines:
            return "{}"
        closing = INDENT * (depth - 1)
        return "{\n" + "\n".join(lines) + "\n" + closing + "}"


def compile_schema(schema: Mapping[str, Any], options: Optional[Dict[str, Any]] = None) -> str:
    """Компиляция JSON Schema с title в текст TypeScript объявлений"""
    merged = {**DEFAULT_OPTIONS, **(options or {})}
    return _Compilation(schema, merged).compile()


class JsonSchemaToTsCompiler:
    """Встроенный компилятор, не требует Node.js"""

    async def compile(self, schema: Mapping[str, Any], options: Dict[str, Any]) -> str:
        return compile_schema(schema, options)
