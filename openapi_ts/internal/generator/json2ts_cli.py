"""Адаптер к Node.js CLI json-schema-to-typescript (json2ts)"""

import asyncio
import json
import logging
import shutil
from typing import Any, Dict, Mapping, Sequence

from ...errors import CompilerError

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = ("npx", "--yes", "json-schema-to-typescript")


def options_to_args(options: Dict[str, Any]) -> list:
    """{"format": False, "cwd": "."} -> ["--no-format", "--cwd", "."]"""
    args = []
    for name, value in options.items():
        if isinstance(value, bool):
            args.append(f"--{name}" if value else f"--no-{name}")
        else:
            args.extend([f"--{name}", str(value)])
    return args


class Json2TsCliCompiler:
    """
    Компиляция через внешний процесс: схема в stdin, TypeScript из stdout.

    Граф схем должен быть ацикличным, иначе его не сериализовать в JSON.
    """

    def __init__(self, command: Sequence[str] = DEFAULT_COMMAND):
        self.command = list(command)

    async def compile(self, schema: Mapping[str, Any], options: Dict[str, Any]) -> str:
        executable = shutil.which(self.command[0])
        if not executable:
            raise CompilerError(
                f"'{self.command[0]}' not found. Install Node.js and json-schema-to-typescript"
            )

        args = [executable, *self.command[1:], *options_to_args(options)]
        logger.debug(f"Running: {' '.join(args)}")

        try:
            payload = json.dumps(schema).encode("utf-8")
        except ValueError as exc:
            raise CompilerError(f"Schema is not serializable: {exc}") from exc

        process = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate(payload)

        if process.returncode != 0:
            raise CompilerError(
                f"json2ts exited with code {process.returncode}: "
                f"{stderr.decode('utf-8', errors='replace').strip()}"
            )
        return stdout.decode("utf-8")
