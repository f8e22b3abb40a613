"""Утилиты для построения имен TypeScript типов"""

import re
import unicodedata

_ILLEGAL_CHARS = re.compile(r"(^\s*[^a-zA-Z_$])|([^a-zA-Z_$0-9])")
_LEADING_SNAKE = re.compile(r"^_[a-z]")
_SNAKE = re.compile(r"_[a-z]")
_AFTER_DIGIT = re.compile(r"[0-9$]+[a-zA-Z]")
_AFTER_SPACE = re.compile(r"\s+[a-zA-Z]")
_SPACE = re.compile(r"\s")

_SAFE_IDENTIFIER = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_$]*$")


def deburr(value: str) -> str:
    """Удаляет диакритику: 'Ünïcödé' -> 'Unicode'"""
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def to_safe_identifier(raw: str) -> str:
    """
    Преобразует произвольную строку в допустимое имя TypeScript типа.

    Недопустимые символы заменяются пробелами, snake_case складывается
    в camelCase, буква после цифры или '$' поднимается в верхний регистр,
    пробелы удаляются с заглавной буквой после них.

    Examples:
        >>> to_safe_identifier("user_profile")
        'UserProfile'
        >>> to_safe_identifier("/pets/{petId}_200_ResponseBody")
        'PetsPetId_200_ResponseBody'
        >>> to_safe_identifier("v2model")
        'V2Model'
        >>> to_safe_identifier("/2fa/verify_RequestBody")
        'FaVerify_RequestBody'
    """
    value = deburr(raw)
    # Один проход может оставить цифру первым символом: "/2fa" -> "2Fa"
    while True:
        converted = _convert(value)
        if converted == value:
            return converted
        value = converted


def _convert(value: str) -> str:
    value = _ILLEGAL_CHARS.sub(" ", value)
    value = _LEADING_SNAKE.sub(lambda m: m.group(0).upper(), value)
    value = _SNAKE.sub(lambda m: m.group(0)[1:].upper(), value)
    value = _AFTER_DIGIT.sub(lambda m: m.group(0).upper(), value)
    value = _AFTER_SPACE.sub(lambda m: m.group(0).upper().strip(), value)
    value = _SPACE.sub("", value)
    return value[:1].upper() + value[1:]


def is_safe_identifier(value: str) -> bool:
    return bool(_SAFE_IDENTIFIER.match(value))
