"""Утилиты для генератора"""

from .identifiers import deburr, is_safe_identifier, to_safe_identifier

__all__ = [
    "deburr",
    "is_safe_identifier",
    "to_safe_identifier",
]
