# Licensed under the Apache License, Version 2.0
from __future__ import annotations

from ..domain.models import MatchTotals


class ResultAggregator:
    """
    Running file/byte/match totals for one search.

    Symlinks count as a file but add no bytes, even when called with the
    size of their target.
    """

    def __init__(self) -> None:
        self._files = 0
        self._bytes = 0
        self._matches = 0

    def record_file(self, size: int, is_symlink: bool = False) -> None:
        self._files += 1
        if not is_symlink:
            self._bytes += int(size)

    def record_match(self) -> None:
        self._matches += 1

    @property
    def file_count(self) -> int:
        return self._files

    @property
    def byte_count(self) -> int:
        return self._bytes

    @property
    def match_count(self) -> int:
        return self._matches

    @property
    def totals(self) -> MatchTotals:
        return MatchTotals(files=self._files, bytes=self._bytes, matches=self._matches)
