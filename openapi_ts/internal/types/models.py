from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class HttpMethod(str, Enum):
    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


HTTP_METHODS = frozenset(method.value for method in HttpMethod)


class Entity(BaseModel):
    """Сущность с lowercase идентификатором"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str


class TsModel(Entity):
    """Объявление TypeScript типа для одной именованной схемы"""

    code: str
    auto_generated: bool = False
    dependencies: List[str] = []


class TsEndpoint(Entity):
    """HTTP эндпоинт со ссылками на модели запроса и ответов"""

    path: str
    method: HttpMethod
    request_model: Optional[str] = None
    response_models: Dict[str, str] = {}


class TsApiDocs(BaseModel):
    """Результат разбора: модели и эндпоинты по id"""

    models: Dict[str, TsModel] = {}
    endpoints: Dict[str, TsEndpoint] = {}

    def model_code(self) -> str:
        """Код всех моделей одним текстом в порядке генерации"""
        return "\n".join(model.code for model in self.models.values())
