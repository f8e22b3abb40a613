import argparse
import asyncio
import json
import logging
import os
import sys

import jsonref

from .config import COMPILERS, OpenApiTsConfig
from .errors import OpenApiTsError
from .generator import parse_openapi
from .internal.types.models import TsApiDocs


def _write_file(path: str, content: str):
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def _save_results(docs: TsApiDocs, config: OpenApiTsConfig):
    """Сохранение моделей и индекса эндпоинтов"""
    if config.output:
        _write_file(config.output, docs.model_code())
        print(f"💾 {len(docs.models)} моделей сохранено в {config.output}")
    else:
        print(docs.model_code())

    if config.endpoints:
        endpoints = {
            endpoint_id: endpoint.model_dump(mode="json", by_alias=True)
            for endpoint_id, endpoint in docs.endpoints.items()
        }
        _write_file(config.endpoints, json.dumps(endpoints, indent=2) + "\n")
        print(f"💾 {len(docs.endpoints)} эндпоинтов сохранено в {config.endpoints}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Генерация TypeScript моделей из OpenAPI"
    )
    parser.add_argument("--url", type=str, help="URL или путь к OpenAPI документу")
    parser.add_argument("--output", type=str, help="Файл для TypeScript моделей")
    parser.add_argument("--endpoints", type=str, help="JSON файл для индекса эндпоинтов")
    parser.add_argument(
        "--compiler", choices=sorted(COMPILERS), help="Компилятор JSON Schema -> TypeScript"
    )
    parser.add_argument(
        "--init-config", action="store_true", help="Создать конфиг файл openapi_ts.toml"
    )
    parser.add_argument("--verbose", action="store_true", help="Подробный лог")
    return parser


def generate(argv=None):
    """Генерация TypeScript моделей из OpenAPI"""
    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.init_config:
        config = OpenApiTsConfig(
            url=args.url,
            output=args.output or "models.ts",
            endpoints=args.endpoints,
            compiler=args.compiler or "builtin",
        )
        config.save_to_file()
        print("✅ Создан конфиг файл openapi_ts.toml")
        return

    file_config = OpenApiTsConfig.from_file()
    if file_config:
        print("📋 Используется конфиг из openapi_ts.toml")
        config = file_config.merge_with_args(args)
    else:
        config = OpenApiTsConfig().merge_with_args(args)

    if not config.url:
        print("❌ Ошибка: Укажите --url или создайте конфиг с --init-config")
        sys.exit(1)

    print(f"🚀 Генерация моделей из {config.url}")
    try:
        docs = asyncio.run(parse_openapi(config.url, config.create_compiler()))
        _save_results(docs, config)
    except (OpenApiTsError, jsonref.JsonRefError, ValueError) as e:
        print(f"❌ Ошибка генерации: {e}")
        sys.exit(1)

    print("✅ Генерация завершена успешно!")


if __name__ == "__main__":
    generate()
