import logging
import re
from typing import Dict, Iterable, List, Set

from ..parser.schema_graph import Schema, structural_dependencies
from ..types.models import TsModel
from ..types.schema_resolver import SchemaNameResolver
from .splitter import TsFileParser

logger = logging.getLogger(__name__)

TITLE_PATTERN = re.compile(
    r"^(?P<prefix>\s*export\s+(?:interface|type)\s+)(?P<title>\w+)(?P<suffix>\s+)",
    re.MULTILINE,
)


def mark_auto_generated(code: str) -> str:
    """`export interface Foo` -> `export interface _Foo`"""
    return TITLE_PATTERN.sub(r"\g<prefix>_\g<title>\g<suffix>", code, count=1)


def schema_dependencies(
    schema: Schema, resolver: SchemaNameResolver, own_id: str
) -> List[str]:
    """id именованных схем, от которых структурно зависит schema"""
    dependencies = []
    for node in structural_dependencies(schema):
        schema_id = resolver.schema_id(node)
        if schema_id and schema_id != own_id and schema_id not in dependencies:
            dependencies.append(schema_id)
    return dependencies


def extract_ts_models(
    source: str,
    schemas: Dict[str, Schema],
    resolver: SchemaNameResolver,
    auto_generated_ids: Set[str],
    excluded_ids: Iterable[str] = (),
) -> Dict[str, TsModel]:
    """Разбор вывода компилятора в {id: TsModel}"""
    excluded = {schema_id.lower() for schema_id in excluded_ids}
    models = {}

    for definition in TsFileParser(source):
        model_id = definition.title.lower()
        if model_id in excluded:
            continue

        code = definition.code
        auto_generated = model_id in auto_generated_ids
        if auto_generated:
            code = mark_auto_generated(code)
        code = code.rstrip("\n") + "\n"

        schema = schemas.get(model_id)
        if schema is None:
            logger.warning(
                f"Declaration {definition.title} has no matching schema, "
                "dependencies are left empty"
            )
            dependencies = []
        else:
            dependencies = schema_dependencies(schema, resolver, model_id)

        models[model_id] = TsModel(
            id=model_id,
            title=definition.title,
            code=code,
            auto_generated=auto_generated,
            dependencies=dependencies,
        )

    return models
