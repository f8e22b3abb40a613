"""
Конфигурация генерации TypeScript моделей
"""

import os
from dataclasses import dataclass
from typing import Optional

import toml

from .internal.generator.compiler import SchemaCompiler
from .internal.generator.json2ts_cli import Json2TsCliCompiler
from .internal.generator.json_schema_ts import JsonSchemaToTsCompiler

CONFIG_FILE_NAME = "openapi_ts.toml"

COMPILERS = {
    "builtin": JsonSchemaToTsCompiler,
    "json2ts": Json2TsCliCompiler,
}


@dataclass
class OpenApiTsConfig:
    """Конфигурация генератора"""

    url: Optional[str] = None
    output: Optional[str] = None
    endpoints: Optional[str] = None
    compiler: str = "builtin"

    @classmethod
    def from_file(
        cls, config_path: str = CONFIG_FILE_NAME, search_dir: str = None
    ) -> Optional["OpenApiTsConfig"]:
        """Загрузка конфигурации из файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, CONFIG_FILE_NAME)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except (OSError, toml.TomlDecodeError):
            return None

        return cls(
            url=config_data.get("url"),
            output=config_data.get("output"),
            endpoints=config_data.get("endpoints"),
            compiler=config_data.get("compiler", "builtin"),
        )

    def save_to_file(self, config_path: str = CONFIG_FILE_NAME) -> None:
        """Сохранение конфигурации в файл"""
        config_data = {
            key: value
            for key, value in {
                "url": self.url,
                "output": self.output,
                "endpoints": self.endpoints,
                "compiler": self.compiler,
            }.items()
            if value is not None
        }

        with open(config_path, "w") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "OpenApiTsConfig":
        """Объединение с аргументами командной строки"""
        return OpenApiTsConfig(
            url=args.url or self.url,
            output=args.output or self.output,
            endpoints=args.endpoints or self.endpoints,
            compiler=args.compiler or self.compiler,
        )

    def create_compiler(self) -> SchemaCompiler:
        if self.compiler not in COMPILERS:
            raise ValueError(
                f"Unknown compiler '{self.compiler}', expected one of {sorted(COMPILERS)}"
            )
        return COMPILERS[self.compiler]()
