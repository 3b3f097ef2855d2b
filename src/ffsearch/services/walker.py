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
import os
import stat
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from ..domain.errors import WalkError
from ..domain.models import EntryKind, TraversalEntry

logger = logging.getLogger(__name__)


class WalkAction(Enum):
    CONTINUE = "continue"
    SKIP_SUBTREE = "skip_subtree"


VisitFn = Callable[[TraversalEntry, Optional[OSError]], Optional[WalkAction]]


class PathWalker:
    """
    Depth-first, lexically ordered directory walker.

    With `follow_symlinks`, symlinks are resolved and directory targets are
    descended into. I/O happens on the physical (resolved) path while every
    entry handed to `visit` carries the logical path, i.e. the path under
    the link name. A set of canonical paths already entered guarantees that
    no physical directory is descended into twice in one walk, which also
    makes link cycles terminate.

    `visit(entry, error)`:
      - returns WalkAction.SKIP_SUBTREE on a directory to prune it;
      - returns None / WalkAction.CONTINUE otherwise;
      - raising aborts the walk (the exception propagates to the caller).

    Per-entry I/O failures are passed to `visit` as `error`; only a root that
    cannot be read raises WalkError.
    """

    def __init__(self, follow_symlinks: bool = False) -> None:
        self._follow = bool(follow_symlinks)

    def walk(self, root: Union[str, Path], visit: VisitFn) -> None:
        root = Path(root)
        try:
            st = os.stat(root)
        except OSError as e:
            raise WalkError(f"Cannot read walk root {root}: {e}") from e

        physical = Path(os.path.realpath(root))
        if not stat.S_ISDIR(st.st_mode):
            entry = TraversalEntry(root, physical, EntryKind.FILE, 0, True, st)
            visit(entry, None)
            return

        try:
            names = sorted(os.listdir(physical))
        except OSError as e:
            raise WalkError(f"Cannot read walk root {root}: {e}") from e

        visited = {str(physical)}
        entry = TraversalEntry(root, physical, EntryKind.DIRECTORY, 0, True, st)
        if visit(entry, None) is WalkAction.SKIP_SUBTREE:
            return
        self._walk_children(root, physical, names, 0, visited, visit)

    def _walk_dir(
        self,
        logical: Path,
        physical: Path,
        depth: int,
        visited: set[str],
        visit: VisitFn,
    ) -> None:
        try:
            names = sorted(os.listdir(physical))
        except OSError as e:
            logger.debug("Cannot list %s (%s): %s", logical, physical, e)
            kind = EntryKind.DIRECTORY
            visit(TraversalEntry(logical, physical, kind, depth), e)
            return
        self._walk_children(logical, physical, names, depth + 1, visited, visit)

    def _walk_children(
        self,
        logical: Path,
        physical: Path,
        names: list[str],
        depth: int,
        visited: set[str],
        visit: VisitFn,
    ) -> None:
        # depth is the separator count of each child's path relative to root
        for name in names:
            self._visit_one(logical / name, physical / name, depth, visited, visit)

    def _visit_one(
        self,
        logical: Path,
        physical: Path,
        depth: int,
        visited: set[str],
        visit: VisitFn,
    ) -> None:
        logger.debug("walk: %s", logical)
        try:
            st = os.lstat(physical)
        except OSError as e:
            visit(TraversalEntry(logical, physical, EntryKind.FILE, depth), e)
            return

        if stat.S_ISLNK(st.st_mode):
            self._visit_link(logical, physical, st, depth, visited, visit)
            return

        if stat.S_ISDIR(st.st_mode):
            canonical = os.path.realpath(physical)
            if canonical in visited:
                logger.debug("walk: %s already entered as %s", logical, canonical)
                return
            entry = TraversalEntry(logical, physical, EntryKind.DIRECTORY, depth, stat=st)
            if visit(entry, None) is WalkAction.SKIP_SUBTREE:
                return
            # pruned directories stay reachable through links
            visited.add(canonical)
            self._walk_dir(logical, physical, depth, visited, visit)
            return

        visit(TraversalEntry(logical, physical, EntryKind.FILE, depth, stat=st), None)

    def _visit_link(
        self,
        logical: Path,
        physical: Path,
        st: os.stat_result,
        depth: int,
        visited: set[str],
        visit: VisitFn,
    ) -> None:
        target = Path(os.path.realpath(physical))
        try:
            target_st = os.stat(physical)
        except OSError as e:
            # broken link or a loop the OS refuses to resolve
            entry = TraversalEntry(
                logical, physical, EntryKind.SYMLINK_FILE, depth, stat=st, link_target=target
            )
            visit(entry, e)
            return

        kind = EntryKind.SYMLINK_DIR if stat.S_ISDIR(target_st.st_mode) else EntryKind.SYMLINK_FILE
        if not self._follow:
            visit(TraversalEntry(logical, physical, kind, depth, stat=st, link_target=target), None)
            return

        if str(target) in visited:
            logger.debug("walk: skipping %s, %s already visited", logical, target)
            return
        if kind is EntryKind.SYMLINK_FILE:
            visited.add(str(target))
            visit(TraversalEntry(logical, target, kind, depth, stat=st, link_target=target), None)
            return

        entry = TraversalEntry(logical, target, kind, depth, stat=st, link_target=target)
        if visit(entry, None) is WalkAction.SKIP_SUBTREE:
            return
        visited.add(str(target))
        self._walk_dir(logical, target, depth, visited, visit)
