# Licensed under the Apache License, Version 2.0
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SearchOptions:
    """
    Walk and pipeline switches for one invocation.

    max_depth: directories at this depth (separator count from the root) or
        deeper are not descended into. None means unlimited.
    search_all: disable .gitignore rules and the built-in `.git` exclusion.
    match_full_path: match the filename pattern against the full logical path
        instead of the basename.
    """

    follow_symlinks: bool = False
    exclude_binary: bool = False
    max_depth: Optional[int] = None
    search_all: bool = False
    match_full_path: bool = False
