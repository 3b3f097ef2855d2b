# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Optional

from ..domain.models import TraversalEntry
from ..domain.options import SearchOptions
from ..ports.ignore import IgnoreMatcherPort

logger = logging.getLogger(__name__)

VCS_DIR = ".git"


class FilterDecision(Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    SKIP_SUBTREE = "skip_subtree"


class FilterChain:
    """
    Decides, before anything is opened, whether an entry goes further.

    Directories pass through the depth stage, and `.git` directories are
    pruned unless searching everything. Files go through the ignore stage
    and then the filename stage; the first rejection wins.
    """

    def __init__(
        self,
        options: SearchOptions,
        *,
        ignore: Optional[IgnoreMatcherPort] = None,
        filename_pattern: Optional[re.Pattern] = None,
    ) -> None:
        self._max_depth = options.max_depth
        self._search_all = options.search_all
        self._full_path = options.match_full_path
        self._ignore = ignore
        self._filename = filename_pattern

    def evaluate(self, entry: TraversalEntry) -> FilterDecision:
        if entry.is_dir:
            if self._is_vcs_dir(entry):
                logger.debug("filter: skipping %s", entry.logical_path)
                return FilterDecision.SKIP_SUBTREE
            return self._depth_stage(entry)
        if not self._ignore_stage(entry):
            return FilterDecision.REJECT
        if not self._filename_stage(entry):
            return FilterDecision.REJECT
        return FilterDecision.ACCEPT

    def _depth_stage(self, entry: TraversalEntry) -> FilterDecision:
        if (
            self._max_depth is not None
            and not entry.is_root
            and entry.depth >= self._max_depth
        ):
            logger.debug("filter: depth limit reached at %s", entry.logical_path)
            return FilterDecision.SKIP_SUBTREE
        return FilterDecision.ACCEPT

    def _is_vcs_dir(self, entry: TraversalEntry) -> bool:
        return not self._search_all and not entry.is_root and entry.name == VCS_DIR

    def _ignore_stage(self, entry: TraversalEntry) -> bool:
        if self._search_all:
            return True
        path = entry.logical_path
        if self._ignore is not None and self._ignore.matches_path(path):
            logger.debug("filter: %s matched ignore rules", path)
            return False
        if VCS_DIR in path.parts:
            return False
        return True

    def _filename_stage(self, entry: TraversalEntry) -> bool:
        if self._filename is None:
            return True
        subject = str(entry.logical_path) if self._full_path else entry.name
        return self._filename.search(subject) is not None
