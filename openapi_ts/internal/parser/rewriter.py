"""
Построение графа схем для компилятора.

Каждая именованная схема копируется в новый граф: вложенные именованные схемы
заменяются на {"$ref": "#/definitions/<id>"}, у вложенных безымянных схем
удаляется title. Исходный документ не изменяется.
"""

from typing import Any, Dict

from ..types.schema_resolver import SchemaNameResolver
from .schema_graph import Schema, structural_dependencies

DEFINITIONS_POINTER = "#/definitions/"


def definition_ref(schema_id: str) -> Dict[str, str]:
    return {"$ref": DEFINITIONS_POINTER + schema_id}


class SchemaGraphRewriter:
    """Переписывает именованные схемы в ациклический граф ссылок"""

    def __init__(self, resolver: SchemaNameResolver):
        self.resolver = resolver

    def rewrite_all(self) -> Dict[str, Schema]:
        """{id: копия схемы} для всех именованных схем"""
        return {
            self.resolver.schema_id(schema): self.rewrite(schema)
            for schema in self.resolver.named_schemas()
        }

    def rewrite(self, root: Schema) -> Schema:
        nested = {id(node) for node in structural_dependencies(root)}
        memo: Dict[int, Any] = {}
        return self._copy(root, nested, memo, is_root=True)

    def _copy(self, value: Any, nested: set, memo: Dict[int, Any], is_root=False):
        if isinstance(value, dict):
            if not is_root and self.resolver.is_named(value):
                return definition_ref(self.resolver.schema_id(value))
            if id(value) in memo:
                return memo[id(value)]

            result = {}
            memo[id(value)] = result
            if self.resolver.is_named(value):
                result["title"] = self.resolver.name_of(value)
                description = self.resolver.description_of(value)
                if description and not value.get("description"):
                    result["description"] = description

            schema_node = id(value) in nested
            for key, item in value.items():
                if key == "title" and schema_node:
                    continue
                result[key] = self._copy(item, nested, memo)
            return result

        if isinstance(value, list):
            if id(value) in memo:
                return memo[id(value)]
            result = []
            memo[id(value)] = result
            result.extend(self._copy(item, nested, memo) for item in value)
            return result

        return value
