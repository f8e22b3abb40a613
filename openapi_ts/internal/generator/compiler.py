"""
Драйвер генерации кода: одна синтетическая JSON Schema со всеми
именованными схемами и один вызов компилятора с фиксированными опциями.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Protocol

from ..parser.openapi import TOP_LEVEL_TITLE
from .json_schema_ts import JsonSchemaToTsCompiler

logger = logging.getLogger(__name__)

COMPILER_OPTIONS = {
    "declareExternallyReferenced": True,
    "enableConstEnums": True,
    "unreachableDefinitions": False,
    "strictIndexSignatures": False,
    # Форматирование - забота вызывающей стороны
    "format": False,
    # https://github.com/bcherny/json-schema-to-typescript/issues/372
    "ignoreMinAndMaxItems": True,
    "bannerComment": "",
}


class SchemaCompiler(Protocol):
    """Компилятор JSON Schema -> TypeScript"""

    async def compile(self, schema: Mapping[str, Any], options: Dict[str, Any]) -> str:
        ...


def build_root_schema(definitions: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Корневая схема, ссылающаяся на каждую именованную схему по id"""
    return {
        "title": TOP_LEVEL_TITLE,
        "type": "object",
        "definitions": dict(definitions),
        "properties": dict(definitions),
        "additionalProperties": False,
    }


async def generate_source(
    definitions: Dict[str, Dict[str, Any]],
    compiler: Optional[SchemaCompiler] = None,
) -> str:
    """Текст TypeScript со всеми объявлениями в порядке, выбранном компилятором"""
    compiler = compiler or JsonSchemaToTsCompiler()
    logger.debug(
        f"Compiling {len(definitions)} schemas with {type(compiler).__name__}"
    )
    return await compiler.compile(build_root_schema(definitions), dict(COMPILER_OPTIONS))
