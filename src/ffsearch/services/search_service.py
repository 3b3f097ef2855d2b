# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..domain.errors import ScanError
from ..domain.models import (
    ContentMatch,
    FileResult,
    MatchTotals,
    TraversalEntry,
)
from ..domain.options import SearchOptions
from ..domain.patterns import PatternSet
from ..ports.ignore import IgnoreMatcherPort
from ..ports.listener import SearchListener
from .aggregator import ResultAggregator
from .content_scanner import ContentScanner
from .extractor import MetadataExtractor
from .filters import FilterChain, FilterDecision
from .walker import PathWalker, WalkAction

logger = logging.getLogger(__name__)


class NullListener:
    def on_file(self, result: FileResult) -> None:
        pass

    def on_match(self, match: ContentMatch) -> None:
        pass

    def on_error(self, path: Path, error: BaseException) -> None:
        pass


class SearchService:
    """
    Orchestrates a search:
      - walks the tree (PathWalker)
      - filters each entry before opening it (FilterChain)
      - classifies files and matches the metadata pattern (MetadataExtractor)
      - applies the binary-exclusion policy
      - scans content line by line (ContentScanner)
      - keeps totals (ResultAggregator) and reports to a SearchListener

    A file is recorded once, when its first match is found, or unconditionally
    when no content/hex/metadata pattern is configured. Per-file errors are
    logged and passed to the listener; only an unreadable root raises.
    """

    def __init__(
        self,
        options: SearchOptions,
        patterns: PatternSet,
        *,
        ignore: Optional[IgnoreMatcherPort] = None,
        extractor: Optional[MetadataExtractor] = None,
        scanner: Optional[ContentScanner] = None,
        listener: Optional[SearchListener] = None,
    ) -> None:
        self._options = options
        self._patterns = patterns
        self._walker = PathWalker(follow_symlinks=options.follow_symlinks)
        self._filters = FilterChain(
            options, ignore=ignore, filename_pattern=patterns.filename
        )
        self._extractor = extractor or MetadataExtractor()
        self._scanner = scanner or ContentScanner()
        self._listener = listener or NullListener()

    def search(self, root: Union[str, Path]) -> MatchTotals:
        """
        Search the tree rooted at `root`.

        Returns:
            Final file/byte/match totals.

        Raises:
            WalkError: if the root itself cannot be read.
        """
        totals = ResultAggregator()

        def visit(entry: TraversalEntry, error: Optional[OSError]) -> Optional[WalkAction]:
            if error is not None:
                logger.debug("Entry error at %s: %s", entry.logical_path, error)
                self._listener.on_error(entry.logical_path, error)
                return None

            decision = self._filters.evaluate(entry)
            if entry.is_dir:
                if decision is FilterDecision.SKIP_SUBTREE:
                    return WalkAction.SKIP_SUBTREE
                return None
            if decision is FilterDecision.REJECT:
                return None

            self._process_file(entry, totals)
            return None

        self._walker.walk(Path(root), visit)
        return totals.totals

    def _process_file(self, entry: TraversalEntry, totals: ResultAggregator) -> None:
        path = entry.logical_path
        try:
            fh = open(entry.physical_path, "rb")
        except OSError as e:
            logger.debug("Cannot open %s: %s", path, e)
            self._listener.on_error(path, e)
            return

        with fh:
            record = self._extractor.extract(fh)
            if entry.is_symlink and entry.link_target is not None:
                record.link = str(entry.link_target)

            meta_hit = bool(
                self._patterns.meta is not None
                and self._patterns.meta.search(record.metadata_string())
            )

            if self._options.exclude_binary and record.is_binary:
                logger.debug("Skipping binary file %s (%s)", path, record.mime_type)
                return

            recorded = False

            def record_file() -> None:
                nonlocal recorded
                if recorded:
                    return
                recorded = True
                totals.record_file(record.size, entry.is_symlink)
                self._listener.on_file(
                    FileResult(
                        directory=path.parent,
                        filename=path.name,
                        record=record,
                        entry=entry,
                        totals=totals.totals,
                    )
                )

            if meta_hit:
                totals.record_match()
                record_file()

            if self._patterns.content is not None:
                self._scan(fh, entry, totals, record_file)
            elif not self._patterns.searches:
                record_file()

    def _scan(self, fh: BinaryIO, entry: TraversalEntry, totals: ResultAggregator, record_file) -> None:
        path = entry.logical_path
        try:
            fh.seek(0)
            for hit in self._scanner.scan(fh, self._patterns.content):
                totals.record_match()
                record_file()
                self._listener.on_match(ContentMatch(path, hit.line_number, hit.text))
        except (ScanError, OSError) as e:
            logger.debug("Scan stopped for %s: %s", path, e)
            self._listener.on_error(path, e)
