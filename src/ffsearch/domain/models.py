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

import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK_DIR = "symlink_dir"
    SYMLINK_FILE = "symlink_file"


@dataclass(frozen=True)
class TraversalEntry:
    """
    One filesystem object seen by the walker.

    `logical_path` is what gets reported (symlink names preserved);
    `physical_path` is what the walker and the pipeline use for I/O.
    `stat` is the lstat result, or None when it could not be obtained.
    """

    logical_path: Path
    physical_path: Path
    kind: EntryKind
    depth: int
    is_root: bool = False
    stat: Optional[os.stat_result] = None
    link_target: Optional[Path] = None

    @property
    def is_dir(self) -> bool:
        return self.kind in (EntryKind.DIRECTORY, EntryKind.SYMLINK_DIR)

    @property
    def is_symlink(self) -> bool:
        return self.kind in (EntryKind.SYMLINK_DIR, EntryKind.SYMLINK_FILE)

    @property
    def name(self) -> str:
        return self.logical_path.name


@dataclass
class ClassificationRecord:
    """Per-file classification produced by the MetadataExtractor."""

    size: int = 0
    mode: str = ""
    suid: bool = False
    link: str = ""
    owner: str = ""
    group: str = ""
    mod_time: str = ""
    mime_type: str = ""
    is_binary: bool = False
    exif_data: str = ""
    error: str = ""

    def metadata_string(self) -> str:
        """Single line the metadata pattern is matched against."""
        return (
            f"{self.size} {self.mode} {self.owner} {self.group} "
            f"{self.mod_time} {self.mime_type} {self.exif_data}"
        )


@dataclass(frozen=True)
class MatchTotals:
    files: int = 0
    bytes: int = 0
    matches: int = 0


@dataclass(frozen=True)
class TextPattern:
    regex: re.Pattern


@dataclass(frozen=True)
class HexPattern:
    regex: re.Pattern


# Decided once when the PatternSet is compiled; hex wins over text.
ContentPattern = Union[TextPattern, HexPattern, None]


@dataclass(frozen=True)
class LineMatch:
    line_number: int  # 1-based
    text: str

    @property
    def display(self) -> str:
        return replace_non_printable(self.text)


@dataclass(frozen=True)
class FileResult:
    directory: Path
    filename: str
    record: ClassificationRecord
    entry: TraversalEntry
    totals: MatchTotals


@dataclass(frozen=True)
class ContentMatch:
    path: Path
    line_number: int
    text: str

    @property
    def display(self) -> str:
        return replace_non_printable(self.text)


def replace_non_printable(text: str) -> str:
    return "".join(c if c.isprintable() else "." for c in text)
