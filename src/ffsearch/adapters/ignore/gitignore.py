# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Union

from pathspec import GitIgnoreSpec

from ...domain.errors import ConfigurationError
from ...ports.ignore import IgnoreMatcherPort

logger = logging.getLogger(__name__)


class GitIgnoreMatcher(IgnoreMatcherPort):
    """
    .gitignore rules compiled with pathspec.

    Paths are matched relative to `base_dir` (the directory holding the rules);
    paths outside it never match.
    """

    def __init__(self, base_dir: Union[str, Path], lines: Iterable[str]) -> None:
        self._base = os.path.abspath(base_dir)
        self._lines = [ln.rstrip("\r\n") for ln in lines]
        self._spec = GitIgnoreSpec.from_lines(self._lines)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "GitIgnoreMatcher":
        """
        Compile the rules in `path`; its parent directory becomes the base.

        Raises:
            ConfigurationError: if the file cannot be read.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ConfigurationError(f"Cannot read ignore file {path}: {e}") from e
        logger.debug("Loaded ignore rules from %s", path)
        return cls(path.parent, text.splitlines())

    @property
    def patterns(self) -> list[str]:
        return list(self._lines)

    def matches_path(self, path: Union[str, Path]) -> bool:
        rel = os.path.relpath(os.path.abspath(path), self._base)
        if rel == "." or rel == ".." or rel.startswith(".." + os.sep):
            return False
        return self._spec.match_file(rel.replace(os.sep, "/"))
