"""
Главный модуль генератора - чистый интерфейс
"""

import logging
from typing import Optional

from .internal.generator.compiler import SchemaCompiler, generate_source
from .internal.generator.extractor import extract_ts_models
from .internal.parser.loader import ApiSource, resolve
from .internal.parser.openapi import TOP_LEVEL_TITLE, OpenApiParser
from .internal.types.models import TsApiDocs

logger = logging.getLogger(__name__)


class TsApiGenerator:
    """Генерация TypeScript моделей и индекса эндпоинтов из OpenAPI"""

    def __init__(self, api: ApiSource, compiler: Optional[SchemaCompiler] = None):
        self.api = api
        self.compiler = compiler

    async def generate(self) -> TsApiDocs:
        document = await resolve(self.api)
        normalized = OpenApiParser(document).parse()

        source = await generate_source(normalized.definitions, self.compiler)
        models = extract_ts_models(
            source,
            normalized.schemas,
            normalized.resolver,
            normalized.auto_generated_ids,
            excluded_ids={TOP_LEVEL_TITLE},
        )
        logger.debug(f"Extracted {len(models)} models")
        return TsApiDocs(models=models, endpoints=normalized.endpoints)


async def parse_openapi(
    api: ApiSource, compiler: Optional[SchemaCompiler] = None
) -> TsApiDocs:
    """
    Разбор OpenAPI 3.x / Swagger 2.0 документа (или пути/URL к нему)
    в TypeScript модели и эндпоинты.
    """
    return await TsApiGenerator(api, compiler).generate()
