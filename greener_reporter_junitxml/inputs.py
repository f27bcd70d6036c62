"""Acquire raw report bytes from a file or standard input."""

import asyncio
import sys
from pathlib import Path
from typing import BinaryIO

from greener_reporter_junitxml.errors import InputError

STDIN_SENTINEL = "-"


async def read_input(source: str, stdin: BinaryIO | None = None) -> bytes:
    """Read the whole report from a file path, or from stdin for ``-``.

    Raises:
        InputError: If the file or stream cannot be read

    """
    if source == STDIN_SENTINEL:
        stream = stdin if stdin is not None else sys.stdin.buffer
        try:
            return await asyncio.to_thread(stream.read)
        except OSError as exc:
            raise InputError(f"read from stdin: {exc}") from exc

    try:
        return await asyncio.to_thread(Path(source).read_bytes)
    except OSError as exc:
        raise InputError(f"read file {source}: {exc}") from exc
