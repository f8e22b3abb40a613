"""Исключения генератора TypeScript моделей"""

from typing import Optional


class OpenApiTsError(Exception):
    """Базовое исключение пакета"""


class ResolutionError(OpenApiTsError):
    """Документ не удалось загрузить или разобрать"""

    def __init__(self, message: str, locator: Optional[str] = None):
        self.locator = locator
        full_message = message if not locator else f"[{locator}] {message}"
        super().__init__(full_message)


class CompilerError(OpenApiTsError):
    """Ошибка внешнего компилятора JSON Schema -> TypeScript"""


class SplitterError(OpenApiTsError, ValueError):
    """Сгенерированный TypeScript не удалось разбить на объявления"""

    def __init__(self, message: str, position: Optional[int] = None):
        self.position = position
        full_message = message if position is None else f"{message} (offset {position})"
        super().__init__(full_message)
