"""OpenAPI/Swagger -> TypeScript модели и индекс эндпоинтов"""

from .errors import CompilerError, OpenApiTsError, ResolutionError, SplitterError
from .generator import TsApiGenerator, parse_openapi
from .internal.types.models import HttpMethod, TsApiDocs, TsEndpoint, TsModel

__all__ = [
    "CompilerError",
    "HttpMethod",
    "OpenApiTsError",
    "ResolutionError",
    "SplitterError",
    "TsApiDocs",
    "TsApiGenerator",
    "TsEndpoint",
    "TsModel",
    "parse_openapi",
]
