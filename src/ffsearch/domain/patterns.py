# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError
from .models import ContentPattern, HexPattern, TextPattern


def glob_to_regex(pattern: str) -> str:
    """Translate a shell-style glob (`*`, `?`) into an anchored regex."""
    parts = []
    for ch in pattern:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return "^" + "".join(parts) + "$"


def compile_filename_pattern(pattern: str) -> re.Pattern:
    """
    Compile a filename pattern given either as a regex or as a glob.

    Regexes are searched anywhere in the name but anchored at the end, so
    `txt` matches `notes.txt` and not `txt.bak`. A pattern with `*` or `?`
    that does not compile as a regex (e.g. `*.txt`) is treated as a glob.
    """
    try:
        return re.compile(f"(?:{pattern})$")
    except re.error as e:
        if "*" in pattern or "?" in pattern:
            return re.compile(glob_to_regex(pattern))
        raise ConfigurationError(f"Invalid file pattern {pattern!r}: {e}") from e


def _compile(kind: str, pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid {kind} pattern {pattern!r}: {e}") from e


@dataclass(frozen=True)
class PatternSet:
    filename: Optional[re.Pattern] = None
    content: ContentPattern = None
    meta: Optional[re.Pattern] = None

    @classmethod
    def compile(
        cls,
        *,
        file: Optional[str] = None,
        string: Optional[str] = None,
        hex: Optional[str] = None,
        meta: Optional[str] = None,
    ) -> "PatternSet":
        """
        Build a PatternSet from raw strings. Empty strings mean "not set".

        Raises:
            ConfigurationError: if any pattern fails to compile.
        """
        text_re = _compile("string", string) if string else None
        hex_re = _compile("hex", hex) if hex else None

        content: ContentPattern = None
        if hex_re is not None:
            content = HexPattern(hex_re)
        elif text_re is not None:
            content = TextPattern(text_re)

        return cls(
            filename=compile_filename_pattern(file) if file else None,
            content=content,
            meta=_compile("metadata", meta) if meta else None,
        )

    @property
    def searches(self) -> bool:
        """True when a content, hex or metadata pattern is configured."""
        return self.content is not None or self.meta is not None
