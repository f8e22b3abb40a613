"""
Разбиение сгенерированного TypeScript на отдельные объявления.

Генератор отдает один текст со всеми объявлениями, структурированного вывода
у него нет. Сканер пропускает комментарии и строки, балансирует фигурные
скобки и находит границы `export interface` / `export type`. Это не парсер
TypeScript и синтаксис он не проверяет.
"""

import re
from dataclasses import dataclass
from typing import Iterator, Tuple

from ...errors import SplitterError

DECLARATION_PATTERN = re.compile(
    r"^export\s+(?P<keyword>interface|type)\s+(?P<title>\w+)", re.MULTILINE
)

QUOTES = ('"', "'")


@dataclass
class TsDefinition:
    title: str
    code: str


def _skip_string(text: str, index: int) -> int:
    """Индекс закрывающей кавычки строки, начинающейся в index"""
    quote = text[index]
    i = index + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == quote:
            return i
        i += 1
    return len(text)


def get_bracket_indices(text: str, start: int = 0) -> Tuple[int, int]:
    """
    Позиции первой '{' и парной ей '}' начиная с start.

    Содержимое комментариев // и /* */, а также строк в кавычках
    пропускается целиком.

    Raises:
        SplitterError: сбалансированная пара скобок не найдена
    """
    open_index = None
    depth = 0
    i = start
    while i < len(text):
        char = text[i]
        if text.startswith("//", i):
            end = text.find("\n", i)
            i = len(text) if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = len(text) if end == -1 else end + 1
        elif char in QUOTES:
            i = _skip_string(text, i)
        elif char == "{":
            if open_index is None:
                open_index = i
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0 and open_index is not None:
                return open_index, i
        i += 1
    raise SplitterError("could not find balanced braces", start)


def backtrack_to_start_of_docstring(text: str, index: int) -> int:
    """Начало блочного комментария прямо перед index, иначе сам index"""
    if not text[:index].rstrip().endswith("*/"):
        return index
    start = text.rfind("/*", 0, index)
    return index if start == -1 else start


class TsFileParser(Iterator[TsDefinition]):
    """
    Однопроходный итератор по объявлениям TypeScript исходника.

    Каждый шаг отрезает разобранную часть от остатка текста, поэтому
    объявления выдаются в порядке появления и повторно не посещаются.
    """

    def __init__(self, source: str):
        self.source = source

    def __iter__(self) -> "TsFileParser":
        return self

    def __next__(self) -> TsDefinition:
        declaration = DECLARATION_PATTERN.search(self.source)
        if declaration is None:
            raise StopIteration

        if declaration.group("keyword") == "type":
            following = DECLARATION_PATTERN.search(self.source, declaration.end())
            end_of_code = (
                backtrack_to_start_of_docstring(self.source, following.start())
                if following
                else len(self.source)
            )
        else:
            _, close = get_bracket_indices(self.source, declaration.end())
            end_of_code = close + 1

        start = backtrack_to_start_of_docstring(self.source, declaration.start())
        code = self.source[start:end_of_code].strip()
        self.source = self.source[end_of_code:]
        return TsDefinition(title=declaration.group("title"), code=code)
