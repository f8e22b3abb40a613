import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..parser.schema_graph import Schema, SchemaIdentity
from ..utils.identifiers import to_safe_identifier

DEFAULT_SCHEMA_NAME = "Schema"

# '_' зарезервирован под пометку автосгенерированных моделей
_LEADING_MARKER = re.compile(r"^_+(?=[a-zA-Z$])")


@dataclass
class _Candidate:
    key: int
    title: str
    auto_generated: bool
    description: Optional[str] = None


class SchemaNameResolver:
    """
    Реестр имен схем документа.

    Имена и синтезированные описания хранятся в таблице по ключу идентичности
    узла, сами узлы документа не изменяются. Порядок предложения имен - это
    порядок обхода документа, от него зависит, какая схема получит суффикс.
    """

    def __init__(self, reserved: Iterable[str] = ()):
        self.identity = SchemaIdentity()
        self._candidates: Dict[int, _Candidate] = {}
        self._names: Dict[int, str] = {}
        self._reserved = {name.lower() for name in reserved}

    def propose(
        self,
        schema: Schema,
        title: str,
        auto_generated: bool = False,
        description: Optional[str] = None,
    ) -> bool:
        """Предложение имени для схемы. Первое предложение выигрывает"""
        key = self.identity.key(schema)
        if key in self._candidates:
            return False
        self._candidates[key] = _Candidate(key, title, auto_generated, description)
        return True

    def is_proposed(self, schema: Schema) -> bool:
        key = self.identity.find(schema)
        return key is not None and key in self._candidates

    def finalize(self) -> None:
        """Превращение кандидатов в уникальные безопасные имена"""
        for key, candidate in self._candidates.items():
            if key in self._names:
                continue
            self._names[key] = self._reserve(self._clean_name(candidate.title))

    def _reserve(self, name: str) -> str:
        unique_name = name
        suffix = 0
        while unique_name.lower() in self._reserved:
            suffix += 1
            unique_name = f"{name}{suffix}"
        self._reserved.add(unique_name.lower())
        return unique_name

    @staticmethod
    def _clean_name(title: str) -> str:
        name = _LEADING_MARKER.sub("", to_safe_identifier(title))
        return name or DEFAULT_SCHEMA_NAME

    def name_of(self, schema: Schema) -> Optional[str]:
        key = self.identity.find(schema)
        return None if key is None else self._names.get(key)

    def schema_id(self, schema: Schema) -> Optional[str]:
        name = self.name_of(schema)
        return name.lower() if name else None

    def is_named(self, schema: Schema) -> bool:
        return self.name_of(schema) is not None

    def description_of(self, schema: Schema) -> Optional[str]:
        key = self.identity.find(schema)
        candidate = self._candidates.get(key) if key is not None else None
        return candidate.description if candidate else None

    def is_auto_generated(self, schema: Schema) -> bool:
        key = self.identity.find(schema)
        candidate = self._candidates.get(key) if key is not None else None
        return bool(candidate and candidate.auto_generated)

    def named_schemas(self) -> List[Schema]:
        """Именованные схемы в порядке назначения имен"""
        return [self.identity.node(key) for key in self._names]
