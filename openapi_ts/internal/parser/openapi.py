import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set

from ..types.models import TsEndpoint
from ..types.schema_resolver import SchemaNameResolver
from ..utils.identifiers import to_safe_identifier
from .rewriter import SchemaGraphRewriter
from .schema_graph import (
    Schema,
    content_schema,
    extract_request_schema,
    extract_response_schemas,
    is_defined,
    is_http_method,
    is_open_api_v3,
)

logger = logging.getLogger(__name__)

TOP_LEVEL_TITLE = "_toplevelobject_"

# Префикс имени для путей без пригодных для имени символов, например "/"
ROOT_PATH_TITLE = "Root"


@dataclass
class _Operation:
    path: str
    method: str
    request_schema: Optional[Schema]
    response_schemas: Dict[str, Schema]


@dataclass
class NormalizedDocument:
    """Результат нормализации документа"""

    resolver: SchemaNameResolver
    # id -> исходный узел документа
    schemas: Dict[str, Schema] = field(default_factory=dict)
    # id -> переписанная копия для компилятора
    definitions: Dict[str, Schema] = field(default_factory=dict)
    endpoints: Dict[str, TsEndpoint] = field(default_factory=dict)
    auto_generated_ids: Set[str] = field(default_factory=set)


class OpenApiParser:
    """
    Нормализатор разыменованного OpenAPI документа.

    Назначает имена схемам из components/definitions, затем безымянным схемам
    тел запросов и ответов, строит индекс эндпоинтов и готовит ациклический
    граф схем для генерации кода. Не реентерабелен для одного документа.
    """

    def __init__(self, document: Mapping[str, Any]):
        self.document = document
        self.resolver = SchemaNameResolver(reserved=[TOP_LEVEL_TITLE])
        self._operations: List[_Operation] = []

    def parse(self) -> NormalizedDocument:
        self._name_components()
        self._name_operations()
        self.resolver.finalize()

        normalized = NormalizedDocument(resolver=self.resolver)
        for schema in self.resolver.named_schemas():
            schema_id = self.resolver.schema_id(schema)
            normalized.schemas[schema_id] = schema
            if self.resolver.is_auto_generated(schema):
                normalized.auto_generated_ids.add(schema_id)

        normalized.endpoints = self._build_endpoints()
        normalized.definitions = SchemaGraphRewriter(self.resolver).rewrite_all()

        logger.debug(
            f"Normalized {len(normalized.schemas)} schemas "
            f"({len(normalized.auto_generated_ids)} anonymous), "
            f"{len(normalized.endpoints)} endpoints"
        )
        return normalized

    def _name_components(self):
        """Схемы, явно названные документом"""
        if not is_open_api_v3(self.document):
            for name, schema in self._defined_entries(self.document.get("definitions")):
                self.resolver.propose(schema, name)
            return

        components = self.document.get("components") or {}
        for name, schema in self._defined_entries(components.get("schemas")):
            self.resolver.propose(schema, name)

        # Именованные ответы и тела запросов
        for section in ("responses", "requestBodies"):
            for name, component in self._defined_entries(components.get(section)):
                schema = content_schema(component.get("content"))
                if schema is not None:
                    self.resolver.propose(schema, name)

    def _name_operations(self):
        """Безымянные схемы тел запросов и ответов"""
        paths = self.document.get("paths")
        if not isinstance(paths, Mapping):
            logger.debug("Document has no paths object")
            return

        for path, path_item in self._defined_entries(paths):
            prefix = path if to_safe_identifier(path) else ROOT_PATH_TITLE
            for method, operation in path_item.items():
                if not is_http_method(method) or not is_defined(operation):
                    continue

                request_schema = extract_request_schema(operation)
                if request_schema is not None:
                    self.resolver.propose(
                        request_schema,
                        f"{prefix}_RequestBody",
                        auto_generated=True,
                        description=f"Request body for {method.upper()} {path}",
                    )

                response_schemas = extract_response_schemas(operation)
                for status_code, response_schema in response_schemas.items():
                    self.resolver.propose(
                        response_schema,
                        f"{prefix}_{status_code}_ResponseBody",
                        auto_generated=True,
                        description=(
                            f"{status_code} response body for {method.upper()} {path}"
                        ),
                    )

                self._operations.append(
                    _Operation(path, method, request_schema, response_schemas)
                )

    def _build_endpoints(self) -> Dict[str, TsEndpoint]:
        endpoints = {}
        for operation in self._operations:
            endpoint_id = f"{operation.path}::{operation.method}".lower()
            endpoints[endpoint_id] = TsEndpoint(
                id=endpoint_id,
                title=operation.path,
                path=operation.path,
                method=operation.method,
                request_model=(
                    self.resolver.schema_id(operation.request_schema)
                    if operation.request_schema is not None
                    else None
                ),
                response_models={
                    status_code: self.resolver.schema_id(schema)
                    for status_code, schema in operation.response_schemas.items()
                },
            )
        return endpoints

    @staticmethod
    def _defined_entries(section: Any):
        if not isinstance(section, Mapping):
            return []
        return [(str(name), value) for name, value in section.items() if is_defined(value)]
