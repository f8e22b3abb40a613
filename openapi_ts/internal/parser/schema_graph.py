"""
Утилиты обхода графа схем разыменованного OpenAPI документа.

Идентичность узла определяется объектом (позицией в графе), а не значением:
две одинаковые схемы в разных местах документа - разные узлы.
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional

from ..types.models import HTTP_METHODS

Schema = Dict[str, Any]

COMPOSITION_KEYS = ("allOf", "anyOf", "oneOf")


def is_defined(node: Any) -> bool:
    """Узел существует и не является неразрешенной ссылкой"""
    return isinstance(node, Mapping) and "$ref" not in node


def is_open_api_v3(document: Mapping[str, Any]) -> bool:
    return "openapi" in document


def is_http_method(value: Any) -> bool:
    return value in HTTP_METHODS


class SchemaIdentity:
    """
    Карта идентичности узлов: объект схемы -> целочисленный ключ.

    Строится один раз на документ. Держит ссылки на узлы, поэтому id()
    остается стабильным все время обработки.
    """

    def __init__(self):
        self._keys: Dict[int, int] = {}
        self._nodes: List[Schema] = []

    def key(self, node: Schema) -> int:
        """Ключ узла, при первом обращении регистрирует его"""
        oid = id(node)
        if oid not in self._keys:
            self._keys[oid] = len(self._nodes)
            self._nodes.append(node)
        return self._keys[oid]

    def find(self, node: Any) -> Optional[int]:
        """Ключ узла без регистрации"""
        return self._keys.get(id(node))

    def node(self, key: int) -> Schema:
        return self._nodes[key]

    def __contains__(self, node: Any) -> bool:
        return id(node) in self._keys

    def __len__(self) -> int:
        return len(self._nodes)


def _children(schema: Schema) -> Iterator[Any]:
    """Структурные потомки схемы в порядке объявления"""
    properties = schema.get("properties")
    if isinstance(properties, Mapping):
        yield from properties.values()

    items = schema.get("items")
    if isinstance(items, list):
        yield from items
    elif items is not None:
        yield items

    additional = schema.get("additionalProperties")
    if isinstance(additional, Mapping):
        yield additional

    for key in COMPOSITION_KEYS:
        members = schema.get(key)
        if isinstance(members, list):
            yield from members


def structural_dependencies(schema: Schema) -> List[Schema]:
    """
    Все схемы, достижимые из schema через properties, items,
    additionalProperties и allOf/anyOf/oneOf, включая саму schema.

    Обход через стек, а не рекурсию: граф может быть глубоким и циклическим.
    Узел попадает в visited при первом обнаружении и больше не кладется в стек.
    """
    if not is_defined(schema):
        return []

    visited = {id(schema)}
    result = []
    stack = [schema]
    while stack:
        node = stack.pop()
        result.append(node)
        unseen = []
        for child in _children(node):
            if is_defined(child) and id(child) not in visited:
                visited.add(id(child))
                unseen.append(child)
        # Обратный порядок, чтобы pop() отдавал потомков в порядке объявления
        stack.extend(reversed(unseen))
    return result


def content_schema(content: Any) -> Optional[Schema]:
    """
    Схема из первого media type, у которого она есть.

    Обычно это content['application/json'].schema, но media type может быть
    vendor-specific, поэтому берется первый подходящий без предпочтений.
    """
    if not isinstance(content, Mapping):
        return None
    for media_type in content.values():
        if is_defined(media_type) and is_defined(media_type.get("schema")):
            return media_type["schema"]
    return None


def extract_request_schema(operation: Mapping[str, Any]) -> Optional[Schema]:
    """Схема тела запроса (OpenAPI 3.x requestBody или Swagger 2.0 in: body)"""
    if "requestBody" in operation:
        request_body = operation["requestBody"]
        if not is_defined(request_body):
            return None
        return content_schema(request_body.get("content"))

    for parameter in operation.get("parameters") or []:
        if (
            is_defined(parameter)
            and parameter.get("in") == "body"
            and is_defined(parameter.get("schema"))
        ):
            return parameter["schema"]
    return None


def extract_response_schemas(operation: Mapping[str, Any]) -> Dict[str, Schema]:
    """Схемы ответов в виде {status_code: schema}, ответы без схемы пропускаются"""
    schemas = {}
    responses = operation.get("responses")
    if not isinstance(responses, Mapping):
        return schemas

    for status_code, response in responses.items():
        if not is_defined(response):
            continue
        if "content" in response:
            schema = content_schema(response["content"])
        else:
            schema = response.get("schema")
        if is_defined(schema):
            schemas[str(status_code)] = schema
    return schemas
