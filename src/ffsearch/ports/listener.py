# Licensed under the Apache License, Version 2.0
from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ..domain.models import ContentMatch, FileResult


class SearchListener(Protocol):
    """
    Receives results from the search pipeline in walk order.
    `on_file` for a file always precedes the `on_match` calls for its lines.
    """

    def on_file(self, result: FileResult) -> None: ...

    def on_match(self, match: ContentMatch) -> None: ...

    def on_error(self, path: Path, error: BaseException) -> None: ...
