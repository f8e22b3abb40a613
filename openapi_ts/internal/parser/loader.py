"""Загрузка и разыменование OpenAPI документов"""

import asyncio
import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Union
from urllib.parse import urlparse

import httpx
import jsonref
import yaml

from ...errors import ResolutionError

logger = logging.getLogger(__name__)

Locator = Union[str, Path]
ApiSource = Union[Locator, Mapping[str, Any]]


def is_url(locator: str) -> bool:
    return urlparse(locator).scheme in ("http", "https")


def parse_document(text: str, locator: str = None) -> Dict[str, Any]:
    """JSON или YAML текст в словарь"""
    try:
        document = json.loads(text)
    except ValueError:
        # Не JSON, разбираем как YAML
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ResolutionError(f"Invalid JSON/YAML document: {exc}", locator) from exc

    if not isinstance(document, dict):
        raise ResolutionError("Document root must be an object", locator)
    return document


def _read_file(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as exc:
        raise ResolutionError(f"Cannot read file: {exc}", path) from exc


def load_uri(uri: str) -> Dict[str, Any]:
    """Загрузчик для внешних $ref: http(s) и file URI"""
    parsed = urlparse(uri)
    if parsed.scheme in ("http", "https"):
        try:
            response = httpx.get(uri, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ResolutionError(f"Cannot fetch document: {exc}", uri) from exc
        return parse_document(response.text, uri)

    if parsed.scheme == "file":
        path = parsed.path
        if os.name == "nt" and path.startswith("/"):
            path = path[1:]
        return parse_document(_read_file(path), uri)

    return parse_document(_read_file(uri), uri)


async def load_document(locator: Locator) -> Dict[str, Any]:
    """Загрузка документа по URL или пути к файлу"""
    locator = str(locator)
    if is_url(locator):
        logger.debug(f"Fetching {locator}")
        try:
            async with httpx.AsyncClient(follow_redirects=True) as client:
                response = await client.get(locator)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ResolutionError(f"Cannot fetch document: {exc}", locator) from exc
        return parse_document(response.text, locator)

    logger.debug(f"Reading {locator}")
    return parse_document(_read_file(locator), locator)


def base_uri_for(locator: Locator) -> str:
    locator = str(locator)
    if is_url(locator):
        return locator
    return Path(locator).resolve().as_uri()


def has_refs(document: Any) -> bool:
    """Есть ли в графе хотя бы один $ref (обход устойчив к циклам)"""
    seen = set()
    stack = [document]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        if isinstance(node, Mapping):
            if "$ref" in node:
                return True
            stack.extend(node.values())
        elif isinstance(node, list):
            stack.extend(node)
    return False


def dereference(document: Mapping[str, Any], base_uri: str = "") -> Dict[str, Any]:
    """
    Разрешение всех $ref документа.

    Ссылки заменяются самими целевыми объектами (proxies=False), поэтому
    все ссылки на одну схему указывают на один и тот же dict, а рекурсивные
    схемы становятся циклами в графе объектов.
    """
    if not has_refs(document):
        # Уже разыменован: deepcopy сохраняет и общие узлы, и циклы
        return copy.deepcopy(dict(document))

    # Копия через JSON, чтобы не трогать словарь вызывающей стороны
    document = json.loads(json.dumps(document))
    return jsonref.replace_refs(
        document,
        base_uri=base_uri,
        loader=load_uri,
        proxies=False,
        lazy_load=False,
    )


async def resolve(api: ApiSource) -> Dict[str, Any]:
    """
    Документ или путь/URL -> полностью разыменованный документ.

    Разыменование идет в отдельном потоке: jsonref загружает внешние $ref
    синхронно.
    """
    if isinstance(api, Mapping):
        return await asyncio.to_thread(dereference, api)

    document = await load_document(api)
    return await asyncio.to_thread(dereference, document, base_uri_for(api))
