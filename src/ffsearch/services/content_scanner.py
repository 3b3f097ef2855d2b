# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import logging
from typing import BinaryIO, Iterator

from ..domain.errors import LineTooLongError, ScanError
from ..domain.models import ContentPattern, HexPattern, LineMatch, TextPattern

logger = logging.getLogger(__name__)

MAX_LINE = 1 << 20  # 1 MiB


def hex_line(raw: bytes) -> str:
    """Render bytes as space-separated two-digit hex, e.g. b"hi" -> "68 69"."""
    return " ".join(f"{b:02x}" for b in raw)


class ContentScanner:
    """
    Line-oriented matcher over an open binary handle.

    Reads from the current position (rewind first), one line at a time.
    Lines end at b"\\n"; a trailing b"\\r" is dropped. Line numbers are 1-based
    and count every line whether it matched or not. Results are lazy, so a
    ScanError raised mid-file leaves already-yielded matches valid.
    """

    def __init__(self, max_line: int = MAX_LINE) -> None:
        self._max_line = int(max_line)

    def scan(self, handle: BinaryIO, pattern: ContentPattern) -> Iterator[LineMatch]:
        if pattern is None:
            return
        for number, raw in self._lines(handle):
            text = raw.decode("utf-8", errors="replace")
            if isinstance(pattern, HexPattern):
                hit = pattern.regex.search(hex_line(raw)) is not None
            elif isinstance(pattern, TextPattern):
                hit = pattern.regex.search(text) is not None
            else:
                raise TypeError(f"Unsupported content pattern: {pattern!r}")
            if hit:
                yield LineMatch(number, text)

    def _lines(self, handle: BinaryIO) -> Iterator[tuple[int, bytes]]:
        number = 0
        while True:
            try:
                raw = handle.readline(self._max_line + 1)
            except OSError as e:
                raise ScanError(f"Read failed after line {number}: {e}") from e
            if not raw:
                return
            number += 1
            if raw.endswith(b"\n"):
                raw = raw[:-1]
            elif len(raw) > self._max_line:
                raise LineTooLongError(
                    f"Line {number} exceeds {self._max_line} bytes"
                )
            if raw.endswith(b"\r"):
                raw = raw[:-1]
            yield number, raw
